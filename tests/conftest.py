"""Shared fixtures: captured request templates."""

from __future__ import annotations

import pytest

from haze import parse_request
from haze.http import ParsedRequest

RAW_POST = (
    b"POST /api/users?id=7&debug=1 HTTP/1.1\r\n"
    b"Host: target.example\r\n"
    b"Content-Type: application/json\r\n"
    b"Content-Length: 16\r\n"
    b'Cookie: session=abc123; prefs={"dark":true}\r\n'
    b"X-Trace:   deadbeef  \r\n"
    b"\r\n"
    b'{"name":"alice"}'
)

RAW_GET = b"GET /a?x=1 HTTP/1.1\r\nHost: h\r\n\r\n"


@pytest.fixture
def raw_post() -> bytes:
    return RAW_POST


@pytest.fixture
def template() -> ParsedRequest:
    return parse_request(RAW_POST)


@pytest.fixture
def get_template() -> ParsedRequest:
    return parse_request(RAW_GET)
