"""Failure taxonomy for HTTP operations."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar, Optional


class FailureKind(str, Enum):
    """Every way an HTTP operation can fail."""

    INVALID_URL = "invalid_url"
    SERVER = "server"
    INVALID_RESPONSE = "invalid_response"
    TRANSPORT = "transport"
    ENCODING = "encoding"


def _describe_error(error: BaseException) -> str:
    return str(error) or type(error).__name__


class HTTPFailure(Exception):
    """
    Base of the closed set of HTTP failures.

    Exactly five subclasses exist, one per FailureKind, all defined in this
    module. Defining further subclasses elsewhere raises TypeError, so callers
    can handle every variant without a fallback branch.

    Example:
        try:
            success = await client.get("/users")
        except ServerError as e:
            if e.status_code == 404:
                ...
        except HTTPFailure as e:
            logger.error(e.description)
    """

    kind: ClassVar[FailureKind]

    def __new__(cls, *args: object, **kwargs: object) -> HTTPFailure:
        if cls is HTTPFailure:
            raise TypeError("HTTPFailure cannot be instantiated; raise one of its variants")
        return super().__new__(cls, *args)

    def __init_subclass__(cls, **kwargs: object) -> None:
        if cls.__module__ != __name__:
            raise TypeError(f"HTTPFailure is closed; cannot subclass it as {cls.__qualname__}")
        super().__init_subclass__(**kwargs)

    @property
    def description(self) -> str:
        """Human-readable rendering of the failure."""
        raise NotImplementedError

    def __str__(self) -> str:
        return self.description


class InvalidURL(HTTPFailure):
    """The request target could not be built into a valid URL."""

    kind = FailureKind.INVALID_URL

    @property
    def description(self) -> str:
        return "Invalid URL"

    def __repr__(self) -> str:
        return "InvalidURL()"


class ServerError(HTTPFailure):
    """The server answered with a non-2xx status."""

    kind = FailureKind.SERVER

    def __init__(self, status_code: int, body: Optional[bytes] = None) -> None:
        super().__init__(status_code, body)
        self.status_code = status_code
        self.body = body

    @property
    def body_text(self) -> str | None:
        """Body decoded as UTF-8, or None when absent, empty or undecodable."""
        if not self.body:
            return None
        try:
            text = self.body.decode("utf-8")
        except UnicodeDecodeError:
            return None
        return text or None

    @property
    def description(self) -> str:
        status_line = f"Server returned error status code: {self.status_code}"
        text = self.body_text
        if text is None:
            return status_line
        return f"{status_line}\nServer response body:\n{text}"

    def __repr__(self) -> str:
        return f"ServerError(status_code={self.status_code!r}, body={self.body!r})"


class InvalidResponse(HTTPFailure):
    """The transport returned something that is not an HTTP response."""

    kind = FailureKind.INVALID_RESPONSE

    @property
    def description(self) -> str:
        return "Invalid or unexpected response from server"

    def __repr__(self) -> str:
        return "InvalidResponse()"


class TransportError(HTTPFailure):
    """The network layer failed (DNS, connection reset, TLS, timeout)."""

    kind = FailureKind.TRANSPORT

    def __init__(self, error: BaseException) -> None:
        super().__init__(error)
        self.error = error

    @property
    def description(self) -> str:
        return f"Transport error: {_describe_error(self.error)}"

    def __repr__(self) -> str:
        return f"TransportError({self.error!r})"


class EncodingError(HTTPFailure):
    """A request or response body could not be encoded or decoded."""

    kind = FailureKind.ENCODING

    def __init__(self, error: BaseException) -> None:
        super().__init__(error)
        self.error = error

    @property
    def description(self) -> str:
        return f"Encoding error: {_describe_error(self.error)}"

    def __repr__(self) -> str:
        return f"EncodingError({self.error!r})"


FAILURE_TYPES: dict[FailureKind, type[HTTPFailure]] = {
    cls.kind: cls for cls in (InvalidURL, ServerError, InvalidResponse, TransportError, EncodingError)
}
