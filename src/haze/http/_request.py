"""ParsedRequest: captured raw HTTP request as a mutable-by-copy template.

A template is parsed once from the bytes of a captured request. Every
``with_*`` method returns a new request and leaves the original untouched, so
one template can be handed to any number of workers without locking.

Header and cookie maps are read-only views over private copies. Cookies live
apart from the headers: the ``Cookie`` header is exploded into ``cookies`` at
parse time and synthesized again when the request is sent.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING

import httpx
import structlog

if TYPE_CHECKING:
    from collections.abc import Mapping

    from haze.http._response import Response
    from haze.http._transport import Transport

logger = structlog.get_logger(__name__)

CRLF = "\r\n"
COOKIE_HEADER = "Cookie"
CONTENT_TYPE_HEADER = "Content-Type"

# Derived by the client from the target URL and the body; copying them from
# the template would send stale values after a mutation.
_DERIVED_HEADERS = frozenset({"host", "content-length", "transfer-encoding", "trailer"})

# Bytes are decoded 1:1 so that any captured byte survives a round trip.
_WIRE_ENCODING = "latin-1"


class RequestParseError(ValueError):
    """A captured request could not be parsed."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"malformed request: {reason}")


@dataclass(frozen=True, slots=True)
class ParsedRequest:
    """Structured decomposition of a captured HTTP/1.1 request.

    ``request_uri`` stays consistent with ``path`` and ``query`` across
    mutations: it is ``path`` alone when the query is empty, otherwise
    ``path + "?" + query``.
    """

    method: str
    request_uri: str
    path: str
    query: str = ""
    protocol_version: str = "HTTP/1.1"
    headers: Mapping[str, str] = field(default_factory=dict)
    cookies: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        object.__setattr__(self, "cookies", MappingProxyType(dict(self.cookies)))

    @classmethod
    def parse(cls, raw: bytes) -> ParsedRequest:
        return parse_request(raw)

    # ── Mutators (copy, then apply exactly one change) ─────────────────────

    def with_path(self, path: str) -> ParsedRequest:
        return replace(self, path=path, request_uri=_join_uri(path, self.query))

    def with_query(self, query: str) -> ParsedRequest:
        return replace(self, query=query, request_uri=_join_uri(self.path, query))

    def with_body(self, body: bytes) -> ParsedRequest:
        return replace(self, body=body)

    def with_header(self, name: str, value: str) -> ParsedRequest:
        """Set one header. A ``Cookie`` header replaces the cookie map."""
        if name == COOKIE_HEADER:
            return self.with_cookie_string(value)
        return replace(self, headers={**self.headers, name: value})

    def with_header_string(self, header: str) -> ParsedRequest:
        """Set one header given as a raw ``Name: value`` line."""
        name, value = _parse_header(header)
        return self.with_header(name, value)

    def with_cookie(self, name: str, value: str) -> ParsedRequest:
        return replace(self, cookies={**self.cookies, name: value})

    def with_cookie_string(self, cookies: str) -> ParsedRequest:
        """Replace all cookies with those of a raw ``a=1; b=2`` string."""
        return replace(self, cookies=_parse_cookies(cookies))

    # ── Body / cookie sniffing ──────────────────────────────────────────────

    def has_json_body(self) -> bool:
        return self.headers.get(CONTENT_TYPE_HEADER) == "application/json"

    def has_form_urlencoded_body(self) -> bool:
        return self.headers.get(CONTENT_TYPE_HEADER) == "application/x-www-form-urlencoded"

    def has_multipart_form_body(self) -> bool:
        content_type = self.headers.get(CONTENT_TYPE_HEADER)
        return content_type is not None and content_type.startswith("multipart/form-data")

    def has_json_cookie(self, name: str) -> bool:
        """True if the cookie exists and its unescaped value is valid JSON."""
        value = self.cookies.get(name)
        if value is None:
            return False
        try:
            json.loads(value.replace("%22", '"'))
        except ValueError:
            return False
        return True

    # ── Serialization / sending ────────────────────────────────────────────

    def cookie_header(self) -> str:
        """Cookie map rendered as a ``Cookie`` header value."""
        return "; ".join(f"{name}={value}" for name, value in self.cookies.items())

    def as_outgoing(self, host: str) -> httpx.Request:
        """Build the request to send to ``host`` (scheme and authority).

        Host, Content-Length, Transfer-Encoding and Trailer are left to the
        client, which derives them from the URL and the body.

        The request target is pinned through the ``target`` extension so the
        URI goes out byte for byte: httpx would otherwise resolve dot
        segments and re-quote the path and query.
        """
        headers = [
            (name.encode(_WIRE_ENCODING), value.encode(_WIRE_ENCODING))
            for name, value in self.headers.items()
            if name.lower() not in _DERIVED_HEADERS
        ]
        if self.cookies:
            headers.append(
                (COOKIE_HEADER.encode(), self.cookie_header().encode(_WIRE_ENCODING))
            )
        url = httpx.URL(host.rstrip("/"))
        prefix = url.raw_path.rstrip(b"/")
        return httpx.Request(
            self.method,
            url,
            headers=headers,
            content=self.body or None,
            extensions={"target": prefix + self.request_uri.encode(_WIRE_ENCODING)},
        )

    def raw_bytes(self, host: str) -> bytes:
        """The exact HTTP/1.1 bytes :meth:`send` would put on the wire."""
        request = self.as_outgoing(host)
        request_line = b" ".join(
            (request.method.encode(_WIRE_ENCODING), request.extensions["target"], b"HTTP/1.1")
        )
        lines = [request_line]
        lines.extend(name + b": " + value for name, value in request.headers.raw)
        return b"\r\n".join(lines) + b"\r\n\r\n" + request.content

    def send(self, host: str, transport: Transport) -> Response:
        """Send this request to ``host``.

        Raises:
            SendError: If the transport fails.
        """
        return transport.send(self.as_outgoing(host))


def parse_request(raw: bytes) -> ParsedRequest:
    """Parse the bytes of a captured HTTP/1.1 request.

    Raises:
        RequestParseError: If the blank line after the headers is missing,
            the request line is not exactly three space-separated tokens, or
            a header line has no colon.
    """
    head, sep, body = raw.partition(b"\r\n\r\n")
    if not sep:
        msg = "missing blank line (CRLF CRLF) after the header section"
        raise RequestParseError(msg)

    request_line, *header_lines = head.decode(_WIRE_ENCODING).split(CRLF)
    method, request_uri, protocol_version = _parse_request_line(request_line)
    path, _, query = request_uri.partition("?")

    headers: dict[str, str] = {}
    for line in header_lines:
        name, value = _parse_header(line)
        headers[name] = value

    cookies: dict[str, str] = {}
    raw_cookies = headers.pop(COOKIE_HEADER, None)
    if raw_cookies is not None:
        cookies = _parse_cookies(raw_cookies)

    logger.debug(
        "request_parsed",
        method=method,
        path=path,
        headers=len(headers),
        cookies=len(cookies),
        body_length=len(body),
    )
    return ParsedRequest(
        method=method,
        request_uri=request_uri,
        path=path,
        query=query,
        protocol_version=protocol_version,
        headers=headers,
        cookies=cookies,
        body=body,
    )


def _parse_request_line(line: str) -> tuple[str, str, str]:
    parts = line.split(" ")
    if len(parts) != 3 or not all(parts):
        msg = f"request line {line!r} is not 'METHOD SP REQUEST-URI SP VERSION'"
        raise RequestParseError(msg)
    method, request_uri, protocol_version = parts
    return method, request_uri, protocol_version


def _parse_header(line: str) -> tuple[str, str]:
    name, sep, value = line.partition(":")
    if not sep:
        msg = f"header line {line!r} has no ':' separator"
        raise RequestParseError(msg)
    return name, value.strip()


def _parse_cookies(raw: str) -> dict[str, str]:
    """Explode ``a=1; b=2`` into a dict.

    Double quotes are stored as ``%22`` so values survive being written back
    into a Cookie header.
    """
    cookies: dict[str, str] = {}
    for pair in raw.split("; "):
        if not pair:
            continue
        name, _, value = pair.partition("=")
        cookies[name] = value.replace('"', "%22")
    return cookies


def _join_uri(path: str, query: str) -> str:
    return f"{path}?{query}" if query else path
