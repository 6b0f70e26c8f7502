"""urispan.parse
Single-pass RFC 3986 URI-reference parser.
One cursor moves forward over the input; nothing is copied and nothing is re-scanned
except the bounded pieces of the authority, which can only be classified once their delimiter is seen.
"""

import dataclasses
import enum
import logging

from typing import Callable, Self, Sequence

from .errors import (
    InvalidFragment,
    InvalidHost,
    InvalidIPv6Literal,
    InvalidPath,
    InvalidPort,
    InvalidQuery,
    InvalidScheme,
    InvalidUserInfo,
    ParseError,
    Truncated,
)
from .grammar import (
    DIGIT,
    FRAGMENT_CHARS,
    PATH_CHARS,
    QUERY_CHARS,
    REG_NAME_CHARS,
    SCHEME_CHARS,
    USERINFO_CHARS,
    codes,
    is_alpha,
    is_ip_literal_body,
    scan,
)
from .parts import Source, SourceSpan, UriParts

logger = logging.getLogger(__name__)

_SLASH: int = ord("/")
_QUESTION: int = ord("?")
_HASH: int = ord("#")
_COLON: int = ord(":")
_AT: int = ord("@")
_LBRACKET: int = ord("[")
_RBRACKET: int = ord("]")

_QUERY_OR_FRAGMENT: frozenset[int] = frozenset((_QUESTION, _HASH))
_AUTHORITY_END: frozenset[int] = frozenset((_SLASH, _QUESTION, _HASH))


class HierPartState(enum.Enum):
    FIRST_SLASH = enum.auto()
    SECOND_SLASH = enum.auto()
    AUTHORITY = enum.auto()
    HOST = enum.auto()
    HOST_IPV6 = enum.auto()
    PORT = enum.auto()
    PATH = enum.auto()


@dataclasses.dataclass
class _Scratch:
    """Mutable accumulator for one parse. Only commit() lets anything out."""

    scheme: SourceSpan | None = None
    user_info: SourceSpan | None = None
    host: SourceSpan | None = None
    port: SourceSpan | None = None
    path: SourceSpan | None = None
    query: SourceSpan | None = None
    fragment: SourceSpan | None = None

    def commit(self: Self, source: Source) -> UriParts:
        spans: dict[str, SourceSpan | None] = {f.name: getattr(self, f.name) for f in dataclasses.fields(self)}
        return UriParts(source=source, **spans)


def _subject(data: Source, buf: Sequence[int]) -> Source:
    """What the IP-literal regex matches against: the str itself, or the byte buffer."""
    return data if isinstance(data, str) else buf


# ---------------------------------------------------------------- component checks


def _check_scheme(buf: Sequence[int], start: int, end: int) -> None:
    if start == end:
        raise InvalidScheme(start, "empty scheme")
    if not is_alpha(buf[start]):
        raise InvalidScheme(start, "scheme must begin with a letter")
    stop: int = scan(buf, start + 1, end, SCHEME_CHARS, pct_encoded=False)
    if stop != end:
        raise InvalidScheme(stop)


def _check_user_info(buf: Sequence[int], start: int, end: int) -> None:
    stop: int = scan(buf, start, end, USERINFO_CHARS)
    if stop != end:
        raise InvalidUserInfo(stop)


def _check_reg_name(buf: Sequence[int], start: int, end: int) -> None:
    stop: int = scan(buf, start, end, REG_NAME_CHARS)
    if stop != end:
        raise InvalidHost(stop)


def _check_port(buf: Sequence[int], start: int, end: int) -> None:
    stop: int = scan(buf, start, end, DIGIT, pct_encoded=False)
    if stop != end:
        raise InvalidPort(stop)


def _scan_ip_literal(subject: Source, buf: Sequence[int], first: int, end: int) -> int:
    """Scans "[" ... "]" starting at first. Returns the offset just past "]".
    The first "]" always closes the literal; its content is then checked against the IP-literal rule.
    """
    if first >= end or buf[first] != _LBRACKET:
        raise InvalidIPv6Literal(first, "IP literal must begin with '['")
    close: int = first + 1
    while close < end and buf[close] != _RBRACKET:
        close += 1
    if close == end:
        raise Truncated(end, "unterminated IP literal")
    if not is_ip_literal_body(subject, first + 1, close):
        raise InvalidIPv6Literal(first + 1)
    return close + 1


# ---------------------------------------------------------------- scheme


def _parse_scheme(buf: Sequence[int], end: int, scratch: _Scratch) -> int:
    """scheme ":" -- returns the offset just past the colon."""
    if end == 0:
        raise Truncated(0, "empty input")
    if not is_alpha(buf[0]):
        raise InvalidScheme(0, "scheme must begin with a letter")
    stop: int = scan(buf, 1, end, SCHEME_CHARS, pct_encoded=False)
    if stop == end:
        raise Truncated(end, "missing scheme delimiter ':'")
    if buf[stop] != _COLON:
        raise InvalidScheme(stop)
    scratch.scheme = SourceSpan(0, stop)
    return stop + 1


# ---------------------------------------------------------------- hier-part


def _commit_host(buf: Sequence[int], first: int, last: int, scratch: _Scratch) -> None:
    _check_reg_name(buf, first, last)
    scratch.host = SourceSpan(first, last)


def _commit_host_and_port(
    buf: Sequence[int], first: int, last: int, last_colon: int | None, scratch: _Scratch
) -> None:
    """Resolves the tentative colon of an authority without user-info."""
    if last_colon is None:
        _commit_host(buf, first, last, scratch)
        return
    _commit_host(buf, first, last_colon, scratch)
    _check_port(buf, last_colon + 1, last)
    scratch.port = SourceSpan(last_colon + 1, last)


def _parse_hier_part(subject: Source, buf: Sequence[int], i: int, end: int, scratch: _Scratch) -> int:
    """Runs the hier-part state machine from i.
    Returns the offset of the "?" or "#" that ended it, or end.
    """
    state: HierPartState = HierPartState.FIRST_SLASH
    first: int = i
    # Offset of the most recent ":" in an authority that has not (yet) shown an "@".
    last_colon: int | None = None

    while i < end:
        c: int = buf[i]

        if state is HierPartState.FIRST_SLASH:
            first = i
            if c == _SLASH:
                state = HierPartState.SECOND_SLASH
                i += 1
            else:
                state = HierPartState.PATH

        elif state is HierPartState.SECOND_SLASH:
            if c == _SLASH:
                i += 1
                first = i
                state = HierPartState.AUTHORITY
            else:
                # Single slash: first still points at it, so it leads the path.
                state = HierPartState.PATH

        elif state is HierPartState.AUTHORITY:
            if c == _AT:
                # Everything so far, colons included, was user-info.
                _check_user_info(buf, first, i)
                scratch.user_info = SourceSpan(first, i)
                last_colon = None
                i += 1
                first = i
                state = HierPartState.HOST_IPV6 if i < end and buf[i] == _LBRACKET else HierPartState.HOST
            elif c == _LBRACKET and i == first:
                state = HierPartState.HOST_IPV6
            elif c == _COLON:
                last_colon = i
                i += 1
            elif c in _AUTHORITY_END:
                _commit_host_and_port(buf, first, i, last_colon, scratch)
                if c != _SLASH:
                    scratch.path = SourceSpan(i, i)
                    return i
                first = i
                state = HierPartState.PATH
            else:
                i += 1

        elif state is HierPartState.HOST:
            if c == _COLON:
                _commit_host(buf, first, i, scratch)
                i += 1
                first = i
                state = HierPartState.PORT
            elif c in _AUTHORITY_END:
                _commit_host(buf, first, i, scratch)
                if c != _SLASH:
                    scratch.path = SourceSpan(i, i)
                    return i
                first = i
                state = HierPartState.PATH
            else:
                i += 1

        elif state is HierPartState.HOST_IPV6:
            i = _scan_ip_literal(subject, buf, first, end)
            scratch.host = SourceSpan(first, i)
            if i == end:
                scratch.path = SourceSpan(end, end)
                return end
            c = buf[i]
            if c == _COLON:
                i += 1
                first = i
                state = HierPartState.PORT
            elif c == _SLASH:
                first = i
                state = HierPartState.PATH
            elif c in _QUERY_OR_FRAGMENT:
                scratch.path = SourceSpan(i, i)
                return i
            else:
                raise InvalidHost(i, "unexpected character after IP literal")

        elif state is HierPartState.PORT:
            if c in DIGIT:
                i += 1
            elif c in _AUTHORITY_END:
                scratch.port = SourceSpan(first, i)
                if c != _SLASH:
                    scratch.path = SourceSpan(i, i)
                    return i
                first = i
                state = HierPartState.PATH
            else:
                raise InvalidPort(i)

        else:  # HierPartState.PATH
            i = scan(buf, i, end, PATH_CHARS)
            if i < end:
                if buf[i] not in _QUERY_OR_FRAGMENT:
                    raise InvalidPath(i)
                scratch.path = SourceSpan(first, i)
                return i

    # End of input is an implicit delimiter for whatever segment is open.
    if state is HierPartState.FIRST_SLASH:
        scratch.path = SourceSpan(end, end)
    elif state is HierPartState.SECOND_SLASH or state is HierPartState.PATH:
        scratch.path = SourceSpan(first, end)
    else:
        if state is HierPartState.AUTHORITY:
            _commit_host_and_port(buf, first, end, last_colon, scratch)
        elif state is HierPartState.HOST:
            _commit_host(buf, first, end, scratch)
        elif state is HierPartState.PORT:
            scratch.port = SourceSpan(first, end)
        scratch.path = SourceSpan(end, end)
    return end


# ---------------------------------------------------------------- query and fragment


def _parse_query(buf: Sequence[int], start: int, end: int, scratch: _Scratch) -> int:
    """Returns the offset of the "#" that ends the query, or end."""
    stop: int = scan(buf, start, end, QUERY_CHARS)
    if stop < end and buf[stop] != _HASH:
        raise InvalidQuery(stop)
    scratch.query = SourceSpan(start, stop)
    return stop


def _parse_fragment(buf: Sequence[int], start: int, end: int, scratch: _Scratch) -> None:
    stop: int = scan(buf, start, end, FRAGMENT_CHARS)
    if stop != end:
        raise InvalidFragment(stop)
    scratch.fragment = SourceSpan(start, end)


def _check_path_noscheme(buf: Sequence[int], scratch: _Scratch) -> None:
    """A relative reference's rootless path must not have a colon in its first segment,
    or it would read as a scheme.
    """
    path: SourceSpan = scratch.path
    if scratch.host is not None or len(path) == 0 or buf[path.start] == _SLASH:
        return
    for i in range(path.start, path.end):
        if buf[i] == _SLASH:
            return
        if buf[i] == _COLON:
            raise InvalidPath(i, "first segment of a relative path must not contain ':'")


# ---------------------------------------------------------------- entry points


def _parse(data: Source, absolute: bool) -> UriParts:
    buf: Sequence[int] = codes(data)
    end: int = len(buf)
    scratch: _Scratch = _Scratch()

    try:
        i: int = _parse_scheme(buf, end, scratch) if absolute else 0
        i = _parse_hier_part(_subject(data, buf), buf, i, end, scratch)
        if not absolute:
            _check_path_noscheme(buf, scratch)
        if i < end and buf[i] == _QUESTION:
            i = _parse_query(buf, i + 1, end, scratch)
        if i < end and buf[i] == _HASH:
            _parse_fragment(buf, i + 1, end, scratch)
    except ParseError as e:
        logger.debug("rejected %r: %s: %s", data, e.kind, e)
        raise

    return scratch.commit(data)


def parse_uri(data: Source) -> UriParts:
    """RFC 3986 URI parser (scheme required).
    e.g. parse_uri("http://example.org/path?query#fragment")
    """
    return _parse(data, absolute=True)


parse = parse_uri


def parse_relative_ref(data: Source) -> UriParts:
    """RFC 3986 relative-ref parser.
    e.g. parse_relative_ref("//example.org/path?query#fragment")
    """
    return _parse(data, absolute=False)


def parse_uri_reference(data: Source) -> UriParts:
    """RFC 3986 URI-reference parser.
    Only use this when you don't know whether you have a URI or a relative-ref.
    If neither reading works, the error that got further into the input is raised.
    """
    try:
        return parse_uri(data)
    except ParseError as absolute_error:
        try:
            return parse_relative_ref(data)
        except ParseError as relative_error:
            if relative_error.offset > absolute_error.offset:
                raise relative_error from absolute_error
            raise absolute_error from relative_error


# ---------------------------------------------------------------- standalone component validators


def _validator(check: Callable[[Sequence[int], int, int], None]) -> Callable[[Source], None]:
    def validate(value: Source) -> None:
        buf: Sequence[int] = codes(value)
        check(buf, 0, len(buf))

    return validate


validate_scheme: Callable[[Source], None] = _validator(_check_scheme)
validate_user_info: Callable[[Source], None] = _validator(_check_user_info)
validate_port: Callable[[Source], None] = _validator(_check_port)


def validate_host(value: Source) -> None:
    """IP-literal or reg-name (which covers IPv4 addresses)."""
    buf: Sequence[int] = codes(value)
    end: int = len(buf)
    if end > 0 and buf[0] == _LBRACKET:
        stop: int = _scan_ip_literal(_subject(value, buf), buf, 0, end)
        if stop != end:
            raise InvalidHost(stop, "unexpected character after IP literal")
    else:
        _check_reg_name(buf, 0, end)


def validate_path(value: Source) -> None:
    buf: Sequence[int] = codes(value)
    stop: int = scan(buf, 0, len(buf), PATH_CHARS)
    if stop != len(buf):
        raise InvalidPath(stop)


def validate_query(value: Source) -> None:
    buf: Sequence[int] = codes(value)
    stop: int = scan(buf, 0, len(buf), QUERY_CHARS)
    if stop != len(buf):
        raise InvalidQuery(stop)


def validate_fragment(value: Source) -> None:
    buf: Sequence[int] = codes(value)
    stop: int = scan(buf, 0, len(buf), FRAGMENT_CHARS)
    if stop != len(buf):
        raise InvalidFragment(stop)
