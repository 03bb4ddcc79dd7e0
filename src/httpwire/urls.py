"""Host normalization and URL building."""

from __future__ import annotations

import re
from typing import NamedTuple, Optional
from urllib.parse import quote, urlencode, urlunsplit

SCHEME_PATTERN = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*)://")
DEFAULT_SCHEME = "https"


class HostParts(NamedTuple):
    """Components of a normalized host string."""

    scheme: str
    host: str
    port: Optional[int]
    base_path: str


def _split_scheme(value: str) -> tuple[str, str]:
    """
    Split input into scheme and the rest.

    "https://example.com:8080/api" -> ("https", "example.com:8080/api")
    "example.com" -> ("https", "example.com")
    """
    match = SCHEME_PATTERN.match(value)
    if match:
        return match.group(1), value[match.end() :]
    return DEFAULT_SCHEME, value


def _split_host_and_path(rest: str) -> tuple[str, str]:
    """
    Split the remainder into host (with port) and base path.

    "example.com:8080/api/foo" -> ("example.com:8080", "api/foo")
    "[::1]:3000/v1" -> ("[::1]:3000", "v1")
    """
    host_with_port, _, base_path = rest.strip().partition("/")
    return host_with_port.strip(), base_path


def _split_port(host_with_port: str) -> tuple[str, Optional[int]]:
    """
    Split host and port, keeping IPv6 literals bracketed.

    "example.com:8080" -> ("example.com", 8080)
    "[::1]:3000" -> ("[::1]", 3000)
    "[::1]" -> ("[::1]", None)
    """
    if host_with_port.startswith("["):
        end = host_with_port.find("]")
        if end != -1:
            host = host_with_port[: end + 1]
            remainder = host_with_port[end + 1 :]
            if remainder.startswith(":") and remainder[1:].isdigit():
                return host, int(remainder[1:])
            return host, None

    host, sep, port = host_with_port.partition(":")
    if sep and port.isdigit():
        return host, int(port)
    return host_with_port, None


def _normalize_base_path(base_path: str) -> str:
    normalized = re.sub(r"/+", "/", base_path).strip("/")
    return f"/{normalized}" if normalized else ""


def normalize_host(value: str) -> HostParts:
    """
    Parse a host string into scheme, host, port and base path.

    The scheme defaults to https. Repeated slashes in the base path collapse
    and the base path is either empty or starts with a single "/".

    Args:
        value: e.g. "api.example.com" or "https://api.example.com:8443/v1"

    Returns:
        HostParts; host is empty when nothing usable was given

    Example:
        >>> normalize_host("https://example.com:8080/api//foo/")
        HostParts(scheme='https', host='example.com', port=8080, base_path='/api/foo')
    """
    scheme, rest = _split_scheme(value.strip())
    host_with_port, base_path = _split_host_and_path(rest)
    host, port = _split_port(host_with_port)
    return HostParts(scheme, host, port, _normalize_base_path(base_path))


def _join_paths(base_path: str, path: str) -> str:
    parts = [part.strip().strip("/").strip() for part in (base_path, path)]
    joined = "/" + "/".join(part for part in parts if part)
    return re.sub(r"/+", "/", joined)


def build_url(
    scheme: str,
    host: str,
    port: Optional[int],
    base_path: str,
    path: str,
    query_items: dict[str, str] | None = None,
    fragment: str | None = None,
) -> str | None:
    """
    Assemble an absolute URL.

    Args:
        scheme: URL scheme, e.g. "https"
        host: Hostname or bracketed IPv6 literal
        port: Optional port
        base_path: Path prefix shared by all requests
        path: Request path, joined onto base_path
        query_items: Optional query parameters, in insertion order
        fragment: Optional fragment

    Returns:
        The URL, or None when no valid URL can be formed
    """
    if not host or any(ch.isspace() for ch in host):
        return None

    netloc = f"{host}:{port}" if port is not None else host
    query = urlencode(query_items, quote_via=quote) if query_items else ""
    return urlunsplit(
        (
            scheme,
            netloc,
            quote(_join_paths(base_path, path), safe="/:@!$&'()*+,;="),
            query,
            quote(fragment, safe="/?:@!$&'()*+,;=") if fragment else "",
        )
    )
