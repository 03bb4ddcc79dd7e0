"""
httpwire - A small async HTTP abstraction with a closed failure taxonomy.

Usage:
    from httpwire import AsyncHttpClient, HTTPFailure, ServerError

    async with AsyncHttpClient("https://api.example.com/v1") as client:
        try:
            success = await client.get("/users")
            print(success.data.decode())
        except ServerError as e:
            print(e.status_code)
        except HTTPFailure as e:
            print(e.description)
"""

__version__ = "1.0.0"

import logging

from .client import AsyncHttpClient, HTTPClient, encode_json
from .config import ClientConfig
from .errors import (
    FAILURE_TYPES,
    EncodingError,
    FailureKind,
    HTTPFailure,
    InvalidResponse,
    InvalidURL,
    ServerError,
    TransportError,
)
from .logging_config import add_stream_handler
from .methods import HTTPMethod
from .models import HTTPSuccess
from .session import AiohttpSession, HTTPRequest, HTTPSession, ResponseMeta
from .urls import HostParts, build_url, normalize_host

__all__ = [
    "__version__",
    # Client
    "AsyncHttpClient",
    "HTTPClient",
    "HTTPMethod",
    "HTTPSuccess",
    "encode_json",
    # Capability
    "HTTPSession",
    "AiohttpSession",
    "HTTPRequest",
    "ResponseMeta",
    # Failures
    "HTTPFailure",
    "FailureKind",
    "FAILURE_TYPES",
    "InvalidURL",
    "ServerError",
    "InvalidResponse",
    "TransportError",
    "EncodingError",
    # URLs
    "HostParts",
    "build_url",
    "normalize_host",
    # Config
    "ClientConfig",
    "add_stream_handler",
]

# Silent unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())
