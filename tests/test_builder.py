import pytest

from urispan import (
    InvalidFragment,
    InvalidHost,
    InvalidIPv6Literal,
    InvalidPath,
    InvalidPort,
    InvalidQuery,
    InvalidScheme,
    InvalidUserInfo,
    Uri,
    UriBuilder,
)


def test_build_full():
    uri = (
        UriBuilder()
        .set_scheme("https")
        .set_user_info("user")
        .set_host("example.com")
        .set_port(443)
        .set_path("/a")
        .set_query("b=c")
        .set_fragment("d")
        .uri()
    )
    assert str(uri) == "https://user@example.com:443/a?b=c#d"
    assert uri == Uri.from_string("https://user@example.com:443/a?b=c#d")


def test_setters_overwrite_and_clear():
    builder = UriBuilder().set_scheme("http").set_host("a").set_host("b").set_query("x")
    builder.set_query(None)
    assert str(builder.uri()) == "http://b"


def test_from_uri():
    original = Uri.from_string("http://h:1/p?q#f")
    assert UriBuilder.from_uri(original).uri() == original
    changed = UriBuilder.from_uri(original).set_port(None).set_fragment(None).uri()
    assert str(changed) == "http://h/p?q"


def test_ip_literal_host():
    assert UriBuilder().set_scheme("http").set_host("[::1]").uri().hostname == "::1"


def test_relative_reference():
    assert str(UriBuilder().set_path("a/b").set_query("q").uri()) == "a/b?q"


@pytest.mark.parametrize(
    "setter, value, error, offset",
    [
        ("set_scheme", "1http", InvalidScheme, 0),
        ("set_scheme", "", InvalidScheme, 0),
        ("set_scheme", "ht tp", InvalidScheme, 2),
        ("set_user_info", "a@b", InvalidUserInfo, 1),
        ("set_host", "exa mple", InvalidHost, 3),
        ("set_host", "[::1]x", InvalidHost, 5),
        ("set_host", "[zz]", InvalidIPv6Literal, 1),
        ("set_port", "8o", InvalidPort, 1),
        ("set_path", "/a b", InvalidPath, 2),
        ("set_query", "a#b", InvalidQuery, 1),
        ("set_fragment", "a#b", InvalidFragment, 1),
    ],
)
def test_component_validation(setter, value, error, offset):
    builder = UriBuilder().set_scheme("http").set_host("host")
    getattr(builder, setter)(value)
    with pytest.raises(error) as e:
        builder.uri()
    assert e.value.offset == offset


def test_path_after_authority_needs_slash():
    with pytest.raises(InvalidPath):
        UriBuilder().set_scheme("http").set_host("h").set_path("p").uri()


def test_path_without_authority_cannot_start_with_two_slashes():
    with pytest.raises(InvalidPath):
        UriBuilder().set_scheme("http").set_path("//p").uri()


def test_relative_path_colon_in_first_segment():
    with pytest.raises(InvalidPath) as e:
        UriBuilder().set_path("a:b/c").uri()
    assert e.value.offset == 1
    assert str(UriBuilder().set_path("a/b:c").uri()) == "a/b:c"


def test_port_requires_host():
    with pytest.raises(ValueError):
        UriBuilder().set_scheme("http").set_port("80").uri()


def test_validation_can_be_skipped():
    uri = UriBuilder().set_scheme("http").set_host("exa mple").uri(validate=False)
    assert uri.host == "exa mple"
