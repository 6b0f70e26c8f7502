"""urispan.uri
Immutable URI value. Holds the raw (undecoded, unnormalized) component strings.
"""

import dataclasses
import functools

from typing import Self

from .parse import parse_uri_reference
from .parts import FIELDS, Source, UriParts


@functools.total_ordering
@dataclasses.dataclass(frozen=True)
class Uri:
    """A URI-reference. Build one with Uri.from_string, Uri.from_parts, or UriBuilder."""

    raw_scheme: str | None
    raw_user_info: str | None
    raw_host: str | None
    raw_port: str | None
    raw_path: str
    raw_query: str | None
    raw_fragment: str | None

    def __post_init__(self: Self) -> None:
        if self.raw_host is None and (self.raw_user_info is not None or self.raw_port is not None):
            raise ValueError("user_info and port require a host")

    @classmethod
    def from_parts(cls: type[Self], parts: UriParts) -> Self:
        return cls(
            raw_scheme=parts.text("scheme"),
            raw_user_info=parts.text("user_info"),
            raw_host=parts.text("host"),
            raw_port=parts.text("port"),
            raw_path=parts.text("path") or "",
            raw_query=parts.text("query"),
            raw_fragment=parts.text("fragment"),
        )

    @classmethod
    def from_string(cls: type[Self], data: Source) -> Self:
        return cls.from_parts(parse_uri_reference(data))

    @property
    def scheme(self: Self) -> str | None:
        return self.raw_scheme

    @property
    def user_info(self: Self) -> str | None:
        return self.raw_user_info

    @property
    def host(self: Self) -> str | None:
        return self.raw_host

    @property
    def port(self: Self) -> int | None:
        if self.raw_port is not None and len(self.raw_port) > 0:
            return int(self.raw_port, base=10)
        return None

    @property
    def path(self: Self) -> str:
        return self.raw_path

    @property
    def query(self: Self) -> str | None:
        return self.raw_query

    @property
    def fragment(self: Self) -> str | None:
        return self.raw_fragment

    @property
    def is_absolute(self: Self) -> bool:
        return self.raw_scheme is not None

    @property
    def authority(self: Self) -> str | None:
        """userinfo@host:port"""
        if self.raw_host is None:
            return None
        result: str = ""
        if self.raw_user_info is not None:
            result += f"{self.raw_user_info}@"
        result += self.raw_host
        if self.raw_port is not None:
            result += f":{self.raw_port}"
        return result

    @property
    def username(self: Self) -> str | None:
        if self.raw_user_info is None:
            return None
        return self.raw_user_info.partition(":")[0]

    @property
    def password(self: Self) -> str | None:
        if self.raw_user_info is None:
            return None
        _, colon, password = self.raw_user_info.partition(":")
        if len(colon) == 0:
            return None
        return password

    @property
    def hostname(self: Self) -> str | None:
        """The host, without the brackets of an IP literal."""
        if self.raw_host is None:
            return None
        if self.raw_host.startswith("["):
            return self.raw_host[1:-1]
        return self.raw_host

    def serialize(self: Self) -> str:
        """Direct translation of RFC 3986 section 5.3"""
        result: str = ""
        if self.raw_scheme is not None:
            result += f"{self.raw_scheme}:"
        if self.authority is not None:
            result += f"//{self.authority}"
        result += self.raw_path
        if self.raw_query is not None:
            result += f"?{self.raw_query}"
        if self.raw_fragment is not None:
            result += f"#{self.raw_fragment}"
        return result

    def __str__(self: Self) -> str:
        return self.serialize()

    def _sort_key(self: Self) -> tuple[tuple[bool, str], ...]:
        # Absent sorts before present-but-empty.
        return tuple(
            (value is not None, value or "")
            for value in (getattr(self, f"raw_{name}") for name in FIELDS)
        )

    def __lt__(self: Self, other: object) -> bool:
        if not isinstance(other, Uri):
            return NotImplemented
        return self._sort_key() < other._sort_key()
