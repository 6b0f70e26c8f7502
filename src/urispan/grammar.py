"""urispan.grammar
Character classes of RFC 3986, as static ASCII tables.
Every table holds code points (ints), so the same predicates serve str and bytes input.
"""

import re

from typing import Self, Sequence

# Each of these ABNF rules is from RFC 3986, 6874, or 5234.

# ALPHA = %x41-5A / %x61-7A
ALPHA: frozenset[int] = frozenset(range(0x41, 0x5B)) | frozenset(range(0x61, 0x7B))

# DIGIT = %x30-39
DIGIT: frozenset[int] = frozenset(range(0x30, 0x3A))

# HEXDIG = DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
# (case-insensitive, per RFC 5234 section 2.3)
HEXDIG: frozenset[int] = DIGIT | frozenset(b"ABCDEFabcdef")

# unreserved = ALPHA / DIGIT / "-" / "." / "_" / "~"
UNRESERVED: frozenset[int] = ALPHA | DIGIT | frozenset(b"-._~")

# sub-delims = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="
SUB_DELIMS: frozenset[int] = frozenset(b"!$&'()*+,;=")

# gen-delims = ":" / "/" / "?" / "#" / "[" / "]" / "@"
GEN_DELIMS: frozenset[int] = frozenset(b":/?#[]@")

# pchar = unreserved / pct-encoded / sub-delims / ":" / "@"
# (pct-encoded is matched by scan, not by table lookup)
PCHAR: frozenset[int] = UNRESERVED | SUB_DELIMS | frozenset(b":@")

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
SCHEME_CHARS: frozenset[int] = ALPHA | DIGIT | frozenset(b"+-.")

# userinfo = *( unreserved / pct-encoded / sub-delims / ":" )
USERINFO_CHARS: frozenset[int] = UNRESERVED | SUB_DELIMS | frozenset(b":")

# reg-name = *( unreserved / pct-encoded / sub-delims )
REG_NAME_CHARS: frozenset[int] = UNRESERVED | SUB_DELIMS

# path-abempty, path-absolute, path-rootless = segments of pchar joined by "/"
PATH_CHARS: frozenset[int] = PCHAR | frozenset(b"/")

# query = *( pchar / "/" / "?" )
QUERY_CHARS: frozenset[int] = PCHAR | frozenset(b"/?")

# fragment = *( pchar / "/" / "?" )
FRAGMENT_CHARS: frozenset[int] = QUERY_CHARS

PERCENT: int = ord("%")


def is_alpha(c: int) -> bool:
    return c in ALPHA


def is_digit(c: int) -> bool:
    return c in DIGIT


def is_alnum(c: int) -> bool:
    return c in ALPHA or c in DIGIT


def is_hexdig(c: int) -> bool:
    return c in HEXDIG


def is_unreserved(c: int) -> bool:
    return c in UNRESERVED


def is_sub_delim(c: int) -> bool:
    return c in SUB_DELIMS


def is_gen_delim(c: int) -> bool:
    return c in GEN_DELIMS


def is_pchar(c: int) -> bool:
    """Single-code part of pchar. Percent-encoded triplets are recognized by is_pct_encoded."""
    return c in PCHAR


def is_pct_encoded(buf: Sequence[int], i: int, end: int | None = None) -> bool:
    """True iff buf[i] is "%" followed by exactly two hex digits before end."""
    if end is None:
        end = len(buf)
    return i + 2 < end and buf[i] == PERCENT and buf[i + 1] in HEXDIG and buf[i + 2] in HEXDIG


def scan(buf: Sequence[int], start: int, end: int, allowed: frozenset[int], pct_encoded: bool = True) -> int:
    """Returns the first offset in [start, end) that is neither in allowed nor the start of a pct-encoded triplet.
    Returns end if the whole range matches.
    """
    i: int = start
    while i < end:
        c: int = buf[i]
        if c in allowed:
            i += 1
        elif pct_encoded and c == PERCENT and is_pct_encoded(buf, i, end):
            i += 3
        else:
            return i
    return end


class CodePoints(Sequence[int]):
    """Read-only view of a str as a sequence of code points. Does not copy the string."""

    __slots__ = ("_text",)

    def __init__(self: Self, text: str) -> None:
        self._text: str = text

    def __len__(self: Self) -> int:
        return len(self._text)

    def __getitem__(self: Self, i):  # Sequence protocol; slices are not needed by the scanner
        return ord(self._text[i])


def codes(data: str | bytes | bytearray | memoryview) -> Sequence[int]:
    """Returns data as an indexable sequence of code points, without copying it."""
    if isinstance(data, str):
        return CodePoints(data)
    if isinstance(data, (bytes, bytearray)):
        return data
    if isinstance(data, memoryview):
        return data if data.format == "B" else data.cast("B")
    raise TypeError(f"expected str or bytes-like object, got {type(data).__name__}")


# The IP-literal rules are the only ones with enough structure to want a regex.

# h16 = 1*4HEXDIG
_HEXDIG_RE: str = r"[0-9A-Fa-f]"
_H16: str = rf"(?:{_HEXDIG_RE}{{1,4}})"

# dec-octet = DIGIT / %x31-39 DIGIT / "1" 2DIGIT / "2" %x30-34 DIGIT / "25" %x30-35
_DEC_OCTET: str = r"(?:[0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])"

# IPv4address = dec-octet "." dec-octet "." dec-octet "." dec-octet
_IPV4ADDRESS: str = rf"{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}"

# ls32 = ( h16 ":" h16 ) / IPv4address
_LS32: str = rf"(?:{_H16}:{_H16}|{_IPV4ADDRESS})"

# IPv6address =                            6( h16 ":" ) ls32
#             /                       "::" 5( h16 ":" ) ls32
#             / [               h16 ] "::" 4( h16 ":" ) ls32
#             / [ *1( h16 ":" ) h16 ] "::" 3( h16 ":" ) ls32
#             / [ *2( h16 ":" ) h16 ] "::" 2( h16 ":" ) ls32
#             / [ *3( h16 ":" ) h16 ] "::"    h16 ":"   ls32
#             / [ *4( h16 ":" ) h16 ] "::"              ls32
#             / [ *5( h16 ":" ) h16 ] "::"              h16
#             / [ *6( h16 ":" ) h16 ] "::"
_IPV6ADDRESS: str = (
    "(?:"
    + r"|".join(
        (
                                           rf"(?:{_H16}:){{6}}{_LS32}",
                                         rf"::(?:{_H16}:){{5}}{_LS32}",
                              rf"(?:{_H16})?::(?:{_H16}:){{4}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,1}}{_H16})?::(?:{_H16}:){{3}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,2}}{_H16})?::(?:{_H16}:){{2}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,3}}{_H16})?::(?:{_H16}:){_LS32}",
            rf"(?:(?:{_H16}:){{0,4}}{_H16})?::{_LS32}",
            rf"(?:(?:{_H16}:){{0,5}}{_H16})?::{_H16}",
            rf"(?:(?:{_H16}:){{0,6}}{_H16})?::",
        )
    )
    + ")"
)

# ZoneID = 1*( unreserved / pct-encoded )
_ZONEID: str = rf"(?:[A-Za-z0-9\-._~]|%{_HEXDIG_RE}{{2}})+"

# IPv6addrz = IPv6address "%25" ZoneID
_IPV6ADDRZ: str = rf"{_IPV6ADDRESS}%25{_ZONEID}"

# IPvFuture = "v" 1*HEXDIG "." 1*( unreserved / sub-delims / ":" )
_IPVFUTURE: str = rf"[vV]{_HEXDIG_RE}+\.[A-Za-z0-9\-._~!$&'()*+,;=:]+"

# IP-literal = "[" ( IPv6address / IPv6addrz / IPvFuture  ) "]"
# (brackets excluded; the scanner has already located them)
_IP_LITERAL_BODY: str = rf"(?:{_IPV6ADDRESS}|{_IPV6ADDRZ}|{_IPVFUTURE})"
IP_LITERAL_BODY_PAT: re.Pattern[str] = re.compile(_IP_LITERAL_BODY)
IP_LITERAL_BODY_BYTES_PAT: re.Pattern[bytes] = re.compile(_IP_LITERAL_BODY.encode("ascii"))


def is_ip_literal_body(subject: str | bytes | bytearray | memoryview, start: int, end: int) -> bool:
    """True iff subject[start:end] is the inside of an IP-literal. Matches in place, without slicing."""
    pattern: re.Pattern = IP_LITERAL_BODY_PAT if isinstance(subject, str) else IP_LITERAL_BODY_BYTES_PAT
    return pattern.fullmatch(subject, start, end) is not None
