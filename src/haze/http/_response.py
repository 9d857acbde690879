"""Response: summary of one HTTP response for classification.

Holds the status code, the body length and the raw response bytes as they
would appear on the wire.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

CRLF = b"\r\n"


@dataclass(frozen=True, slots=True)
class Response:
    """Status code, length and raw bytes of a received response."""

    code: int
    length: int
    raw: bytes = b""

    @classmethod
    def from_httpx(cls, response: httpx.Response, body: bytes) -> Response:
        """Summarize a received httpx response whose raw body is ``body``.

        The length is the advertised Content-Length when the server sent a
        valid one, otherwise the length of the body actually received.
        """
        raw = dump_response(response, body)
        length = _content_length(response)
        if length is None:
            length = len(body)
        return cls(code=response.status_code, length=length, raw=raw)

    def __str__(self) -> str:
        return f"[Code: {self.code}, Len: {self.length}]"


def dump_response(response: httpx.Response, body: bytes) -> bytes:
    """Render a response as HTTP/1.x wire bytes (status line, headers, body).

    ``body`` is the payload as received, before any content decoding.
    """
    status_line = f"{response.http_version} {response.status_code} {response.reason_phrase}"
    lines = [status_line.rstrip().encode("latin-1")]
    lines.extend(name + b": " + value for name, value in response.headers.raw)
    return CRLF.join(lines) + CRLF + CRLF + body


def extract_body(raw: bytes) -> bytes:
    """Return everything after the first blank line, or b"" if there is none."""
    _, sep, body = raw.partition(CRLF + CRLF)
    return body if sep else b""


def _content_length(response: httpx.Response) -> int | None:
    value = response.headers.get("content-length")
    if value is None:
        return None
    try:
        length = int(value)
    except ValueError:
        return None
    return length if length >= 0 else None
