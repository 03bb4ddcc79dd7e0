"""Test double for HTTPSession."""

from __future__ import annotations

from typing import Any

from .session import HTTPRequest, ResponseMeta


class StubSession:
    """
    HTTPSession that replays a scripted outcome.

    Either returns ``(body, response)`` unchanged or raises ``error``. Every
    request received is recorded in ``requests``.

    Example:
        session = StubSession.returning(b"ok", status_code=200)
        client = AsyncHttpClient("localhost", session=session)
        await client.get("/ping")
        assert session.requests[0].url == "https://localhost/ping"
    """

    def __init__(
        self,
        body: bytes = b"",
        response: Any = None,
        error: BaseException | None = None,
    ) -> None:
        self.body = body
        self.response = response if response is not None else ResponseMeta(status_code=200)
        self.error = error
        self.requests: list[HTTPRequest] = []

    @classmethod
    def returning(
        cls,
        body: bytes = b"",
        status_code: int = 200,
        headers: dict[str, str] | None = None,
        url: str = "",
    ) -> StubSession:
        return cls(body=body, response=ResponseMeta(status_code=status_code, headers=headers or {}, url=url))

    @classmethod
    def raising(cls, error: BaseException) -> StubSession:
        return cls(error=error)

    async def data(self, request: HTTPRequest) -> tuple[bytes, Any]:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.body, self.response
