__version__ = "0.1"

from .builder import UriBuilder
from .errors import InvalidFragment, InvalidHost, InvalidIPv6Literal, InvalidPath, InvalidPort, InvalidQuery, InvalidScheme, InvalidUserInfo, ParseError, Truncated
from .parse import HierPartState, parse, parse_relative_ref, parse_uri, parse_uri_reference, validate_fragment, validate_host, validate_path, validate_port, validate_query, validate_scheme, validate_user_info
from .parts import SourceSpan, UriParts
from .uri import Uri
