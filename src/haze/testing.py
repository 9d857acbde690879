"""Test utilities for haze.

Transports backed by ``httpx.MockTransport`` so request templates can be
sent and classified without touching the network. Useful for tests of a
dispatch loop built on top of haze.

>>> from haze.http import parse_request
>>> transport = static_transport(404, b"not here")
>>> req = parse_request(b"GET / HTTP/1.1\\r\\nHost: x\\r\\n\\r\\n")
>>> str(req.send("http://x", transport))
'[Code: 404, Len: 8]'
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from haze.http._transport import Transport, reject_all_cookies

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


def handler_transport(handler: Callable[[httpx.Request], httpx.Response]) -> Transport:
    """A Transport whose responses are produced by ``handler``."""
    client = httpx.Client(
        transport=httpx.MockTransport(handler),
        follow_redirects=False,
        cookies=reject_all_cookies(),
    )
    return Transport(client=client)


def static_transport(
    status_code: int = 200,
    content: bytes = b"",
    headers: Mapping[str, str] | None = None,
) -> Transport:
    """A Transport answering every request with the same response."""

    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=content, headers=headers)

    return handler_transport(handler)
