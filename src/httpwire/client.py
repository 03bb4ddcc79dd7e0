"""Verb-oriented HTTP client on top of an HTTPSession."""

from __future__ import annotations

import asyncio
import json
import logging
from types import TracebackType
from typing import Any, Optional, Protocol

from pydantic import BaseModel

from .config import DEFAULT_HEADERS, ClientConfig
from .errors import EncodingError, HTTPFailure, InvalidResponse, InvalidURL, ServerError, TransportError
from .methods import HTTPMethod
from .models import HTTPSuccess
from .session import AiohttpSession, HTTPRequest, HTTPSession, ResponseMeta
from .urls import build_url, normalize_host

logger = logging.getLogger(__name__)


class HTTPClient(Protocol):
    """
    Protocol for HTTP clients.

    Every method returns an HTTPSuccess for a 2xx response and raises exactly
    one HTTPFailure subclass otherwise.
    """

    async def get(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        query_items: dict[str, str] | None = None,
        fragment: str | None = None,
    ) -> HTTPSuccess: ...

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        query_items: dict[str, str] | None = None,
        data: bytes | None = None,
        fragment: str | None = None,
    ) -> HTTPSuccess: ...

    async def post_json(
        self,
        path: str,
        body: Any,
        *,
        headers: dict[str, str] | None = None,
        query_items: dict[str, str] | None = None,
        fragment: str | None = None,
    ) -> HTTPSuccess: ...

    async def put(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        query_items: dict[str, str] | None = None,
        body: bytes | None = None,
        fragment: str | None = None,
    ) -> HTTPSuccess: ...

    async def patch(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        query_items: dict[str, str] | None = None,
        body: bytes | None = None,
        fragment: str | None = None,
    ) -> HTTPSuccess: ...

    async def delete(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        query_items: dict[str, str] | None = None,
        body: bytes | None = None,
        fragment: str | None = None,
    ) -> HTTPSuccess: ...


def encode_json(body: Any) -> bytes:
    """
    Encode a request body as JSON.

    Pydantic models are dumped with their own serializer; anything else goes
    through json.dumps.

    Raises:
        EncodingError: If the body cannot be encoded
    """
    try:
        if isinstance(body, BaseModel):
            return body.model_dump_json().encode("utf-8")
        return json.dumps(body).encode("utf-8")
    except Exception as e:
        raise EncodingError(e) from e


class AsyncHttpClient:
    """
    HTTP client bound to one host, classifying every outcome into HTTPFailure.

    Example:
        async with AsyncHttpClient("https://api.example.com/v1") as client:
            try:
                success = await client.get("/users", query_items={"page": "2"})
            except ServerError as e:
                print(e.description)

    Tests pass a double as ``session``:
        client = AsyncHttpClient("localhost", session=StubSession.returning(b"{}"))
    """

    def __init__(
        self,
        host: str,
        session: HTTPSession | None = None,
        *,
        port: int | None = None,
        default_headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            host: Base host or URL; scheme defaults to https
            session: HTTPSession to send requests through (default: AiohttpSession)
            port: Port override, takes precedence over a port in ``host``
            default_headers: Headers for every request (default: JSON accept/content-type)
            timeout: Total per-request timeout in seconds
        """
        parts = normalize_host(host)
        self._scheme = parts.scheme
        self._host = parts.host
        self._port = port if port is not None else parts.port
        self._base_path = parts.base_path
        self._default_headers = dict(DEFAULT_HEADERS) if default_headers is None else dict(default_headers)
        self._timeout = timeout

        self._own_session: AiohttpSession | None = AiohttpSession() if session is None else None
        self._session: HTTPSession = session if session is not None else self._own_session

    @classmethod
    def from_config(cls, config: ClientConfig, session: HTTPSession | None = None) -> AsyncHttpClient:
        return cls(
            config.host,
            session,
            port=config.port,
            default_headers=config.default_headers,
            timeout=config.timeout,
        )

    async def __aenter__(self) -> AsyncHttpClient:
        """Enter async context and open the session if this client owns it."""
        if self._own_session is not None:
            await self._own_session.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close the session if this client owns it."""
        if self._own_session is not None:
            await self._own_session.close()

    def build_url(
        self,
        path: str,
        query_items: dict[str, str] | None = None,
        fragment: str | None = None,
    ) -> Optional[str]:
        """Build the absolute URL for ``path``, or None if the host is unusable."""
        return build_url(self._scheme, self._host, self._port, self._base_path, path, query_items, fragment)

    def build_request(
        self,
        url: str,
        method: HTTPMethod,
        headers: dict[str, str] | None,
        body: bytes | None,
    ) -> HTTPRequest:
        merged = dict(self._default_headers)
        if headers:
            merged.update(headers)
        return HTTPRequest(method=method.value, url=url, headers=merged, body=body, timeout=self._timeout)

    async def request(
        self,
        method: HTTPMethod,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        query_items: dict[str, str] | None = None,
        body: bytes | None = None,
        fragment: str | None = None,
    ) -> HTTPSuccess:
        """
        Send a request and classify the outcome.

        Returns:
            HTTPSuccess for any 2xx status

        Raises:
            InvalidURL: If no URL can be built; the session is not called
            RuntimeError: If the client owns its session and was not opened with "async with"
            TransportError: If the session raises
            InvalidResponse: If the session returns unusable metadata
            ServerError: For any non-2xx status
        """
        if self._own_session is not None and not self._own_session.is_open:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        url = self.build_url(path, query_items, fragment)
        if url is None:
            logger.warning(f"Cannot build URL for host {self._host!r} and path {path!r}")
            raise InvalidURL()

        request = self.build_request(url, method, headers, body)
        logger.debug(f"{request.method} {request.url}")

        try:
            data, response = await self._session.data(request)
        except asyncio.CancelledError:
            raise
        except HTTPFailure:
            raise
        except Exception as e:
            failure = TransportError(e)
            logger.warning(f"{request.method} {request.url} failed: {failure.description}")
            raise failure from e

        if not isinstance(response, ResponseMeta):
            logger.warning(f"{request.method} {request.url}: unexpected response type {type(response).__name__}")
            raise InvalidResponse()

        if 200 <= response.status_code <= 299:
            return HTTPSuccess(data=data, response=response)

        logger.warning(f"{request.method} {request.url} returned {response.status_code}")
        raise ServerError(response.status_code, data)

    async def get(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        query_items: dict[str, str] | None = None,
        fragment: str | None = None,
    ) -> HTTPSuccess:
        return await self.request(
            HTTPMethod.GET, path, headers=headers, query_items=query_items, fragment=fragment
        )

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        query_items: dict[str, str] | None = None,
        data: bytes | None = None,
        fragment: str | None = None,
    ) -> HTTPSuccess:
        return await self.request(
            HTTPMethod.POST, path, headers=headers, query_items=query_items, body=data, fragment=fragment
        )

    async def post_json(
        self,
        path: str,
        body: Any,
        *,
        headers: dict[str, str] | None = None,
        query_items: dict[str, str] | None = None,
        fragment: str | None = None,
    ) -> HTTPSuccess:
        """POST ``body`` encoded as JSON; raises EncodingError before sending if it cannot be encoded."""
        try:
            data = encode_json(body)
        except EncodingError as e:
            logger.warning(f"POST {path}: {e.description}")
            raise
        return await self.post(path, headers=headers, query_items=query_items, data=data, fragment=fragment)

    async def put(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        query_items: dict[str, str] | None = None,
        body: bytes | None = None,
        fragment: str | None = None,
    ) -> HTTPSuccess:
        return await self.request(
            HTTPMethod.PUT, path, headers=headers, query_items=query_items, body=body, fragment=fragment
        )

    async def patch(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        query_items: dict[str, str] | None = None,
        body: bytes | None = None,
        fragment: str | None = None,
    ) -> HTTPSuccess:
        return await self.request(
            HTTPMethod.PATCH, path, headers=headers, query_items=query_items, body=body, fragment=fragment
        )

    async def delete(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        query_items: dict[str, str] | None = None,
        body: bytes | None = None,
        fragment: str | None = None,
    ) -> HTTPSuccess:
        return await self.request(
            HTTPMethod.DELETE, path, headers=headers, query_items=query_items, body=body, fragment=fragment
        )
