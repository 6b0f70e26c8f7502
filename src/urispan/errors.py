"""urispan.errors
Every parse failure is a ParseError carrying the offset at which the grammar was violated.
ParseError is a ValueError, so callers that only expect ValueError("parse failed") keep working.
"""

from typing import Self


class ParseError(ValueError):
    """Base class for all grammar violations."""

    description: str = "parse failed"

    def __init__(self: Self, offset: int, message: str | None = None) -> None:
        super().__init__(offset, message)
        self.offset: int = offset
        self.message: str = message if message is not None else self.description

    @property
    def kind(self: Self) -> str:
        return type(self).__name__

    def __str__(self: Self) -> str:
        return f"{self.message} at offset {self.offset}"

    def __repr__(self: Self) -> str:
        return f"{self.kind}({self.offset!r}, {self.message!r})"


class InvalidScheme(ParseError):
    description = "invalid scheme"


class InvalidUserInfo(ParseError):
    description = "invalid user-info"


class InvalidHost(ParseError):
    description = "invalid host"


class InvalidPort(ParseError):
    description = "invalid port"


class InvalidIPv6Literal(ParseError):
    description = "invalid IP literal"


class InvalidPath(ParseError):
    description = "invalid path"


class InvalidQuery(ParseError):
    description = "invalid query"


class InvalidFragment(ParseError):
    description = "invalid fragment"


class Truncated(ParseError):
    """The input ended before a required delimiter."""

    description = "unexpected end of input"
