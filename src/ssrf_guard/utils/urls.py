"""URL serialisation and parsing helpers."""

from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import ParseResult, SplitResult, urlsplit

import httpx

from ssrf_guard.exceptions import InvalidFormatError, InvalidInputError


@dataclass(frozen=True)
class ParsedURL:
    """The parts of a URL the guard looks at."""

    url: str
    protocol: str  # lower-cased, trailing colon: "https:"
    hostname: str  # lower-cased, IPv6 brackets stripped; "" when absent


def format_url(value: object) -> str:
    """
    Serialise a URL or URL-like object to a string.

    Accepts:
    - str (returned as-is)
    - httpx.URL
    - urllib.parse.SplitResult / ParseResult
    - mappings shaped like legacy URL objects (protocol, host, pathname, ...)

    Raises:
        InvalidInputError: for None, empty strings and any other type
    """
    if isinstance(value, str):
        if not value:
            raise InvalidInputError(value)
        return value
    if isinstance(value, httpx.URL):
        return str(value)
    if isinstance(value, (SplitResult, ParseResult)):
        return value.geturl()
    if isinstance(value, Mapping):
        return _format_mapping(value)
    raise InvalidInputError(value)


def _format_mapping(parts: Mapping) -> str:
    """Build a URL string from legacy URL-object keys."""
    protocol = str(parts.get("protocol") or parts.get("scheme") or "")
    if protocol and not protocol.endswith(":"):
        protocol += ":"

    host = parts.get("host")
    if not host:
        hostname = str(parts.get("hostname") or "")
        if ":" in hostname and not hostname.startswith("["):
            hostname = f"[{hostname}]"
        port = parts.get("port")
        host = f"{hostname}:{port}" if hostname and port else hostname
    host = str(host or "")

    auth = parts.get("auth")
    if auth and host:
        host = f"{auth}@{host}"

    path = str(parts.get("pathname") or parts.get("path") or "")
    if host and path and not path.startswith("/"):
        path = "/" + path

    search = str(parts.get("search") or parts.get("query") or "")
    if search and not search.startswith("?"):
        search = "?" + search
    fragment = str(parts.get("hash") or parts.get("fragment") or "")
    if fragment and not fragment.startswith("#"):
        fragment = "#" + fragment

    slashes = parts.get("slashes", True) or bool(host)
    authority = f"//{host}" if slashes else host
    return f"{protocol}{authority}{path}{search}{fragment}"


def parse_url(url: str) -> ParsedURL:
    """
    Split a URL into the protocol and hostname used for policy checks.

    Raises:
        InvalidFormatError: if the URL cannot be parsed or has no scheme
    """
    try:
        parts = urlsplit(url.strip())
        # .hostname and .port validate the netloc lazily
        hostname = parts.hostname or ""
        _ = parts.port
    except ValueError as e:
        raise InvalidFormatError(url, str(e)) from e

    if not parts.scheme:
        raise InvalidFormatError(url, "missing scheme")

    return ParsedURL(
        url=url,
        protocol=f"{parts.scheme.lower()}:",
        hostname=hostname.lower(),
    )
