"""urispan.builder
Assembles a Uri from separately supplied component strings.
"""

import logging

from typing import Self

from .errors import InvalidPath, ParseError
from .parse import (
    validate_fragment,
    validate_host,
    validate_path,
    validate_port,
    validate_query,
    validate_scheme,
    validate_user_info,
)
from .uri import Uri

logger = logging.getLogger(__name__)


class UriBuilder:
    """Each setter overwrites one component (None clears it) and returns the builder.
    Nothing is checked until uri() is called.
    """

    def __init__(self: Self) -> None:
        self._scheme: str | None = None
        self._user_info: str | None = None
        self._host: str | None = None
        self._port: str | None = None
        self._path: str = ""
        self._query: str | None = None
        self._fragment: str | None = None

    @classmethod
    def from_uri(cls: type[Self], uri: Uri) -> Self:
        return (
            cls()
            .set_scheme(uri.raw_scheme)
            .set_user_info(uri.raw_user_info)
            .set_host(uri.raw_host)
            .set_port(uri.raw_port)
            .set_path(uri.raw_path)
            .set_query(uri.raw_query)
            .set_fragment(uri.raw_fragment)
        )

    def set_scheme(self: Self, scheme: str | None) -> Self:
        self._scheme = scheme
        return self

    def set_user_info(self: Self, user_info: str | None) -> Self:
        self._user_info = user_info
        return self

    def set_host(self: Self, host: str | None) -> Self:
        self._host = host
        return self

    def set_port(self: Self, port: str | int | None) -> Self:
        self._port = str(port) if isinstance(port, int) else port
        return self

    def set_path(self: Self, path: str | None) -> Self:
        self._path = path if path is not None else ""
        return self

    def set_query(self: Self, query: str | None) -> Self:
        self._query = query
        return self

    def set_fragment(self: Self, fragment: str | None) -> Self:
        self._fragment = fragment
        return self

    def _validate(self: Self) -> None:
        for value, validate in (
            (self._scheme, validate_scheme),
            (self._user_info, validate_user_info),
            (self._host, validate_host),
            (self._port, validate_port),
            (self._path, validate_path),
            (self._query, validate_query),
            (self._fragment, validate_fragment),
        ):
            if value is not None:
                validate(value)

        # The components are fine on their own; now check that they serialize unambiguously.
        if self._host is not None:
            if self._path and not self._path.startswith("/"):
                raise InvalidPath(0, "path following an authority must be empty or begin with '/'")
        elif self._path.startswith("//"):
            raise InvalidPath(1, "path without an authority must not begin with '//'")
        elif self._scheme is None and not self._path.startswith("/"):
            colon: int = self._path.partition("/")[0].find(":")
            if colon >= 0:
                raise InvalidPath(colon, "first segment of a relative path must not contain ':'")

    def uri(self: Self, validate: bool = True) -> Uri:
        """Returns the assembled Uri.
        With validate=False the components are taken as they are; the caller vouches for them.
        """
        if validate:
            try:
                self._validate()
            except ParseError as e:
                logger.debug("rejected component: %s: %s", e.kind, e)
                raise
        return Uri(
            raw_scheme=self._scheme,
            raw_user_info=self._user_info,
            raw_host=self._host,
            raw_port=self._port,
            raw_path=self._path,
            raw_query=self._query,
            raw_fragment=self._fragment,
        )
