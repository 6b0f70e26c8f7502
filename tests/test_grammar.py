import pytest

from urispan.grammar import (
    PATH_CHARS,
    REG_NAME_CHARS,
    codes,
    is_alnum,
    is_alpha,
    is_digit,
    is_gen_delim,
    is_hexdig,
    is_ip_literal_body,
    is_pchar,
    is_pct_encoded,
    is_sub_delim,
    is_unreserved,
    scan,
)


def test_ascii_classes():
    assert all(is_alpha(ord(c)) for c in "azAZ")
    assert not any(is_alpha(ord(c)) for c in "09@[`{")
    assert all(is_digit(ord(c)) for c in "0123456789")
    assert not is_digit(ord("a"))
    assert is_alnum(ord("q")) and is_alnum(ord("7")) and not is_alnum(ord("-"))
    assert all(is_hexdig(ord(c)) for c in "09afAF")
    assert not is_hexdig(ord("g"))


def test_non_ascii_is_never_classified():
    for c in "éßΩ ":
        assert not is_alpha(ord(c))
        assert not is_unreserved(ord(c))
        assert not is_pchar(ord(c))


def test_delimiters():
    assert all(is_unreserved(ord(c)) for c in "-._~")
    assert all(is_sub_delim(ord(c)) for c in "!$&'()*+,;=")
    assert all(is_gen_delim(ord(c)) for c in ":/?#[]@")
    assert not is_sub_delim(ord(":"))
    assert not is_gen_delim(ord("!"))


def test_pchar():
    assert is_pchar(ord(":"))
    assert is_pchar(ord("@"))
    assert not is_pchar(ord("/"))
    assert not is_pchar(ord("?"))
    assert not is_pchar(ord("%"))


def test_pct_encoded():
    assert is_pct_encoded(b"%41", 0)
    assert is_pct_encoded(b"a%fFb", 1)
    assert not is_pct_encoded(b"%4", 0)
    assert not is_pct_encoded(b"%4g", 0)
    assert not is_pct_encoded(b"%41", 0, end=2)
    assert not is_pct_encoded(b"x41", 0)


def test_scan_consumes_triplets():
    buf = b"a%20b/c?"
    assert scan(buf, 0, len(buf), PATH_CHARS) == 7
    assert scan(buf, 0, len(buf), REG_NAME_CHARS) == 5
    assert scan(buf, 0, len(buf), REG_NAME_CHARS, pct_encoded=False) == 1
    assert scan(b"ab%2", 0, 4, REG_NAME_CHARS) == 2


def test_codes():
    assert codes("ab")[1] == ord("b")
    assert len(codes("abc")) == 3
    buf = b"xyz"
    assert codes(buf) is buf
    assert codes(memoryview(b"xy"))[0] == ord("x")
    with pytest.raises(TypeError):
        codes(42)


@pytest.mark.parametrize(
    "body",
    ["::1", "::", "2001:db8::7", "1:2:3:4:5:6:7:8", "::ffff:192.0.2.1", "fe80::1%25eth0", "v1.fe80::a+en1"],
)
def test_ip_literal_body_accepts(body):
    assert is_ip_literal_body(body, 0, len(body))
    assert is_ip_literal_body(body.encode("ascii"), 0, len(body))


@pytest.mark.parametrize("body", ["", "1", "::g", "1:2:3:4:5:6:7:8:9", "::1%eth0", "v.x", "example.com"])
def test_ip_literal_body_rejects(body):
    assert not is_ip_literal_body(body, 0, len(body))


def test_ip_literal_body_matches_in_place():
    assert is_ip_literal_body("[::1]", 1, 4)
    assert not is_ip_literal_body("[::1]", 0, 5)
