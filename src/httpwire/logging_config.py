"""Opt-in log output for applications using httpwire."""

import logging
from typing import IO, Optional

LOGGER_NAME = "httpwire"


def add_stream_handler(
    level: int = logging.DEBUG,
    stream: Optional[IO[str]] = None,
) -> logging.StreamHandler:
    """
    Send httpwire's request and failure logs to a stream.

    The client logs every request at DEBUG and every failure at WARNING. The
    package itself only installs a NullHandler, so nothing is printed until an
    application calls this.

    Args:
        level: Minimum level to emit (default: DEBUG)
        stream: Target stream (default: sys.stderr)

    Returns:
        The installed handler, so callers can remove it again
    """
    logger = logging.getLogger(LOGGER_NAME)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.debug(f"Added a stream handler to {LOGGER_NAME!r} at level {logging.getLevelName(level)}")
    return handler
