"""haze.http: captured request templates, responses and the transport.

Provides ParsedRequest (parse, copy-on-mutate, serialize), the Response
summary used for classification, and the Transport that sends probes.
"""

from haze.http._request import ParsedRequest, RequestParseError, parse_request
from haze.http._response import Response, dump_response, extract_body
from haze.http._transport import DEFAULT_TIMEOUT, SendError, Transport

__all__ = [
    # Requests
    "ParsedRequest",
    "RequestParseError",
    "parse_request",
    # Responses
    "Response",
    "dump_response",
    "extract_body",
    # Transport
    "DEFAULT_TIMEOUT",
    "SendError",
    "Transport",
]
