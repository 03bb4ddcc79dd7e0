"""HTTP methods supported by the client."""

from enum import Enum


class HTTPMethod(str, Enum):
    """HTTP verbs; the value is the wire form."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
