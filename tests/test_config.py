"""Tests for configuration and logging setup."""

import io
import logging

import pytest
from pydantic import ValidationError

import httpwire
from httpwire.client import AsyncHttpClient
from httpwire.config import DEFAULT_HEADERS, ClientConfig
from httpwire.logging_config import LOGGER_NAME, add_stream_handler
from httpwire.testing import StubSession


class TestClientConfig:
    """Tests for ClientConfig validation."""

    def test_defaults(self):
        config = ClientConfig(host="api.example.com")
        assert config.port is None
        assert config.timeout == 60.0
        assert config.default_headers == DEFAULT_HEADERS

    def test_default_headers_not_shared(self):
        first = ClientConfig(host="a")
        first.default_headers["X-Extra"] = "1"
        assert "X-Extra" not in ClientConfig(host="b").default_headers

    @pytest.mark.parametrize("port", [0, 70000])
    def test_port_range(self, port):
        with pytest.raises(ValidationError):
            ClientConfig(host="localhost", port=port)

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            ClientConfig(host="localhost", timeout=0)

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            ClientConfig(host="localhost", retries=3)


class TestLogging:
    """Tests for the package logger and add_stream_handler()."""

    def test_package_installs_null_handler(self):
        logger = logging.getLogger(httpwire.__name__)
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)

    @pytest.mark.asyncio
    async def test_client_logs_request_once_and_failure(self):
        """Test that a request is logged once at DEBUG and a failure at WARNING."""
        stream = io.StringIO()
        logger = logging.getLogger(LOGGER_NAME)
        handler = add_stream_handler(stream=stream)
        try:
            client = AsyncHttpClient("localhost", session=StubSession.returning(b"nope", status_code=500))
            with pytest.raises(httpwire.ServerError):
                await client.get("/items")
        finally:
            logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)

        output = stream.getvalue()
        assert output.count("GET https://localhost/items\n") == 1
        assert "DEBUG httpwire.client: GET https://localhost/items" in output
        assert "WARNING httpwire.client: GET https://localhost/items returned 500" in output

    def test_level_filters_output(self):
        stream = io.StringIO()
        logger = logging.getLogger(LOGGER_NAME)
        handler = add_stream_handler(level=logging.WARNING, stream=stream)
        try:
            logging.getLogger("httpwire.client").debug("hidden")
            logging.getLogger("httpwire.client").warning("shown")
        finally:
            logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)

        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()
