"""haze: request templating and response classification for HTTP probing.

All public types of the core are exported from this module for flat imports:

    from haze import parse_request, match_codes, filter_lengths, is_reportable

Request and transport types live in ``haze.http``; the match expression
language in ``haze.matchlang``.
"""

__version__ = "0.1.0"

# Classification
from haze._classify import (
    CodeInput,
    LengthInput,
    RangeMatcher,
    filter_codes,
    filter_lengths,
    is_reportable,
    match_codes,
    match_lengths,
)

# Config
from haze._config import (
    DEFAULT_MATCH_CODES,
    ConfigParseError,
    ProbeConfig,
    load_probe_config,
    parse_probe_config,
)

# Predicates
from haze._predicate import (
    And,
    Input,
    Not,
    Or,
    Predicate,
    SinglePredicate,
    ValueMatcher,
)

# Ranges
from haze._ranges import Range, RangeParseError, RangeSet, parse_range, parse_ranges

# HTTP
from haze.http import (
    ParsedRequest,
    RequestParseError,
    Response,
    SendError,
    Transport,
    parse_request,
)

# Match language
from haze.matchlang import MatchSyntaxError

__all__ = [
    # Ranges
    "Range",
    "RangeSet",
    "RangeParseError",
    "parse_range",
    "parse_ranges",
    # Predicates
    "Input",
    "ValueMatcher",
    "SinglePredicate",
    "And",
    "Or",
    "Not",
    "Predicate",
    # Classification
    "CodeInput",
    "LengthInput",
    "RangeMatcher",
    "match_codes",
    "match_lengths",
    "filter_codes",
    "filter_lengths",
    "is_reportable",
    # HTTP
    "ParsedRequest",
    "RequestParseError",
    "Response",
    "SendError",
    "Transport",
    "parse_request",
    # Match language
    "MatchSyntaxError",
    # Config
    "ProbeConfig",
    "ConfigParseError",
    "DEFAULT_MATCH_CODES",
    "parse_probe_config",
    "load_probe_config",
]
