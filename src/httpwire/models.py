"""Value types returned by the HTTP client."""

from dataclasses import dataclass

from .session import ResponseMeta


@dataclass(frozen=True)
class HTTPSuccess:
    """
    A 2xx response.

    Attributes:
        data: Raw response body
        response: Response metadata (status, headers, final URL)
    """

    data: bytes
    response: ResponseMeta

    @property
    def status_code(self) -> int:
        return self.response.status_code
