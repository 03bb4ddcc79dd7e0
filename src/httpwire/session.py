"""Request capability: the seam between callers and the HTTP transport."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import TracebackType
from typing import Optional, Protocol, runtime_checkable

import aiohttp


@dataclass(frozen=True)
class HTTPRequest:
    """
    A fully formed HTTP request handed to a session.

    Attributes:
        method: HTTP verb, e.g. "GET"
        url: Absolute request URL
        headers: Request headers
        body: Raw request body, if any
        timeout: Total timeout in seconds (None leaves it to the transport)
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    timeout: Optional[float] = None


@dataclass(frozen=True)
class ResponseMeta:
    """
    Metadata of an HTTP response.

    Attributes:
        status_code: HTTP status code (200, 404, etc.)
        headers: All response headers
        url: Final URL after any redirects
    """

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    url: str = ""


@runtime_checkable
class HTTPSession(Protocol):
    """
    Something that can perform an HTTP request.

    Code that sends requests depends on this protocol rather than on a
    concrete transport, so tests can substitute a double.
    """

    async def data(self, request: HTTPRequest) -> tuple[bytes, ResponseMeta]:
        """
        Perform the request and return the raw body with response metadata.

        Raises:
            Whatever the underlying transport raises, unclassified.
        """
        ...


class AiohttpSession:
    """
    HTTPSession backed by aiohttp.ClientSession.

    Adds no behavior of its own: no retries, no caching. A session passed in
    by the caller is never closed here; one created on enter is closed on exit.

    Example:
        async with AiohttpSession() as session:
            body, meta = await session.data(HTTPRequest("GET", "https://example.com"))
    """

    def __init__(self, client_session: aiohttp.ClientSession | None = None) -> None:
        self._session = client_session
        self._owns_session = client_session is None

    async def __aenter__(self) -> AiohttpSession:
        """Enter async context and create a session if none was given."""
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close the session if we created it."""
        await self.close()

    @property
    def is_open(self) -> bool:
        return self._session is not None

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    async def data(self, request: HTTPRequest) -> tuple[bytes, ResponseMeta]:
        if self._session is None:
            raise RuntimeError("Session not initialized. Use 'async with' context manager.")

        # Without an explicit timeout the ClientSession default applies
        options: dict[str, aiohttp.ClientTimeout] = {}
        if request.timeout is not None:
            options["timeout"] = aiohttp.ClientTimeout(total=request.timeout)

        async with self._session.request(
            request.method,
            request.url,
            headers=request.headers,
            data=request.body,
            **options,
        ) as response:
            content = await response.read()
            return content, ResponseMeta(
                status_code=response.status,
                headers=dict(response.headers),
                url=str(response.url),
            )
