"""Transport: explicit, per-run HTTP client used to send probes.

A Transport is built once at startup and passed to every send. There is no
process-wide default client; the underlying ``httpx.Client`` is safe to share
between worker threads once constructed.
"""

from __future__ import annotations

from dataclasses import dataclass
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import TYPE_CHECKING, Self

import httpx
import structlog

from haze.http._response import Response

if TYPE_CHECKING:
    from types import TracebackType

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 10.0


class SendError(Exception):
    """Sending a request failed at the transport level.

    The underlying httpx exception is chained as ``__cause__``.
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"sending to {url} failed: {reason}")


def reject_all_cookies() -> CookieJar:
    """A cookie jar that never stores anything.

    Each probe carries exactly the cookies of its template; a Set-Cookie from
    one response must not leak into the requests of other workers.
    """
    return CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))


@dataclass(frozen=True, slots=True)
class Transport:
    """Sends outgoing requests and summarizes their responses.

    Redirects are never followed: a 3xx is a result worth classifying,
    not something to chase.
    """

    client: httpx.Client

    @classmethod
    def create(
        cls,
        proxy: str | None = None,
        verify: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Transport:
        """Build a transport with its own client.

        TLS verification is off by default: probing targets routinely use
        self-signed certificates or sit behind an intercepting proxy.
        """
        client = httpx.Client(
            proxy=proxy,
            verify=verify,
            timeout=timeout,
            follow_redirects=False,
            cookies=reject_all_cookies(),
        )
        return cls(client=client)

    def send(self, request: httpx.Request) -> Response:
        """Send a request and return its summary.

        The body is read undecoded, so ``raw`` and the measured length match
        what the server sent even under a Content-Encoding.

        Raises:
            SendError: On any transport failure (connect, timeout, protocol).
        """
        url = target_url(request)
        # Requests built outside the client carry no timeout of their own.
        request.extensions.setdefault("timeout", self.client.timeout.as_dict())
        try:
            response = self.client.send(request, stream=True)
            try:
                body = _read_raw(response)
            finally:
                response.close()
        except httpx.HTTPError as e:
            logger.warning("send_failed", url=url, error=str(e))
            raise SendError(url, str(e) or type(e).__name__) from e

        summary = Response.from_httpx(response, body)
        logger.debug(
            "request_sent",
            method=request.method,
            url=url,
            code=summary.code,
            length=summary.length,
        )
        return summary

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def target_url(request: httpx.Request) -> str:
    """The URL a request is sent to, with its pinned target left verbatim."""
    target = request.extensions.get("target")
    if target is None:
        return str(request.url)
    origin = f"{request.url.scheme}://{request.url.netloc.decode('ascii')}"
    return origin + target.decode("latin-1")


def _read_raw(response: httpx.Response) -> bytes:
    # Responses built in memory with ``content=`` arrive already read.
    if response.is_stream_consumed:
        return response.content
    return b"".join(response.iter_raw())
