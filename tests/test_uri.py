import pytest

from urispan import ParseError, Uri, parse_uri


def test_from_string_accessors():
    uri = Uri.from_string("https://alice:secret@[::1]:8443/a/b?x=1#top")
    assert uri.scheme == "https"
    assert uri.user_info == "alice:secret"
    assert uri.username == "alice"
    assert uri.password == "secret"
    assert uri.host == "[::1]"
    assert uri.hostname == "::1"
    assert uri.port == 8443
    assert uri.raw_port == "8443"
    assert uri.path == "/a/b"
    assert uri.query == "x=1"
    assert uri.fragment == "top"
    assert uri.authority == "alice:secret@[::1]:8443"
    assert uri.is_absolute


def test_from_parts_bytes():
    uri = Uri.from_parts(parse_uri(b"http://host/p"))
    assert uri.host == "host"
    assert uri.path == "/p"


def test_relative():
    uri = Uri.from_string("//host/p")
    assert not uri.is_absolute
    assert uri.scheme is None
    assert str(uri) == "//host/p"


def test_empty_port_is_default():
    uri = Uri.from_string("http://host:/")
    assert uri.port is None
    assert uri.raw_port == ""
    assert str(uri) == "http://host:/"


def test_user_info_without_password():
    uri = Uri.from_string("ftp://anonymous@host")
    assert uri.username == "anonymous"
    assert uri.password is None
    assert Uri.from_string("ftp://host").username is None


def test_no_authority():
    uri = Uri.from_string("mailto:user@host")
    assert uri.authority is None
    assert uri.hostname is None
    assert uri.path == "user@host"


@pytest.mark.parametrize(
    "data",
    ["http://example.com:8080/path?q=1#frag", "http:///path", "http://h?", "urn:a:b", "?q", ""],
)
def test_serialize_round_trip(data):
    assert Uri.from_string(data).serialize() == data


def test_invalid_string():
    with pytest.raises(ParseError):
        Uri.from_string("http://ho st/")


def test_equality_and_hash():
    a = Uri.from_string("http://host/p")
    b = Uri.from_string(b"http://host/p")
    assert a == b
    assert hash(a) == hash(b)
    assert a != Uri.from_string("http://HOST/p")


def test_absent_and_empty_differ():
    assert Uri.from_string("http://h") != Uri.from_string("http://h?")
    assert Uri.from_string("http://h") < Uri.from_string("http://h?")


def test_ordering():
    uris = [Uri.from_string(s) for s in ("https://a/", "http://b/", "http://a/x", "http://a/")]
    assert [str(u) for u in sorted(uris)] == ["http://a/", "http://a/x", "http://b/", "https://a/"]
    assert Uri.from_string("/rel") < Uri.from_string("a:b")


def test_immutable():
    uri = Uri.from_string("http://host/")
    with pytest.raises(AttributeError):
        uri.raw_host = "other"


def test_port_requires_host():
    with pytest.raises(ValueError):
        Uri(None, None, None, "80", "", None, None)
