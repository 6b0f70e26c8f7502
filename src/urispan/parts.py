"""urispan.parts
The parser's output: offsets into the caller's input, never copies of it.
"""

import dataclasses

from typing import Iterator, Self

Source = str | bytes | bytearray | memoryview

# Grammar order. serialize() and the coverage property depend on it.
FIELDS: tuple[str, ...] = ("scheme", "user_info", "host", "port", "path", "query", "fragment")


@dataclasses.dataclass(frozen=True, slots=True)
class SourceSpan:
    """Half-open [start, end) range of a source."""

    start: int
    end: int

    def __post_init__(self: Self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span [{self.start}, {self.end})")

    def __len__(self: Self) -> int:
        return self.end - self.start

    def extract(self: Self, source: Source) -> str:
        """The spanned text. Parsed spans only ever cover ASCII, so bytes decode safely."""
        if isinstance(source, str):
            return source[self.start : self.end]
        return bytes(memoryview(source).cast("B")[self.start : self.end]).decode("ascii")


@dataclasses.dataclass(frozen=True)
class UriParts:
    """A decomposed URI reference. You should not instantiate this directly. Instead use one of the parse_* functions.

    A field is None when the component is absent, and an empty span when it is present but empty
    (e.g. the host of "http:///path").
    """

    source: Source = dataclasses.field(repr=False)
    scheme: SourceSpan | None = None
    user_info: SourceSpan | None = None
    host: SourceSpan | None = None
    port: SourceSpan | None = None
    path: SourceSpan | None = None
    query: SourceSpan | None = None
    fragment: SourceSpan | None = None

    def __post_init__(self: Self) -> None:
        if self.host is None and (self.user_info is not None or self.port is not None):
            raise ValueError("user_info and port require a host")

    def spans(self: Self) -> Iterator[tuple[str, SourceSpan]]:
        """(name, span) for every present component, in grammar order."""
        for name in FIELDS:
            span: SourceSpan | None = getattr(self, name)
            if span is not None:
                yield name, span

    def text(self: Self, name: str) -> str | None:
        span: SourceSpan | None = getattr(self, name)
        if span is None:
            return None
        return span.extract(self.source)

    def view(self: Self, name: str) -> str | memoryview | None:
        """The component as a memoryview of the source (a str slice for str sources)."""
        span: SourceSpan | None = getattr(self, name)
        if span is None:
            return None
        if isinstance(self.source, str):
            return self.source[span.start : span.end]
        return memoryview(self.source).cast("B")[span.start : span.end]

    @property
    def authority(self: Self) -> SourceSpan | None:
        """userinfo@host:port"""
        if self.host is None:
            return None
        start: int = self.user_info.start if self.user_info is not None else self.host.start
        end: int = self.port.end if self.port is not None else self.host.end
        return SourceSpan(start, end)

    def as_dict(self: Self) -> dict[str, str | None]:
        return {name: self.text(name) for name in FIELDS}

    def serialize(self: Self) -> str | bytes:
        """Reassembles the source from the spans and their delimiters (RFC 3986 section 5.3)."""
        result: str = ""
        if self.scheme is not None:
            result += f"{self.text('scheme')}:"
        if self.host is not None:
            result += "//"
            if self.user_info is not None:
                result += f"{self.text('user_info')}@"
            result += self.text("host")
            if self.port is not None:
                result += f":{self.text('port')}"
        if self.path is not None:
            result += self.text("path")
        if self.query is not None:
            result += f"?{self.text('query')}"
        if self.fragment is not None:
            result += f"#{self.text('fragment')}"
        return result if isinstance(self.source, str) else result.encode("ascii")
