"""Tests for ssrf_guard/resolver.py — SystemResolver and StaticResolver."""

import asyncio
import socket
from unittest.mock import AsyncMock, patch

import pytest

from ssrf_guard.resolver import StaticResolver, SystemResolver


def _addrinfo(*ips: str) -> list[tuple]:
    """Build getaddrinfo-style tuples for the given addresses."""
    infos = []
    for ip in ips:
        if ":" in ip:
            infos.append((socket.AF_INET6, socket.SOCK_STREAM, 6, "", (ip, 0, 0, 0)))
        else:
            infos.append((socket.AF_INET, socket.SOCK_STREAM, 6, "", (ip, 0)))
    return infos


class TestSystemResolver:
    """SystemResolver with a mocked event-loop getaddrinfo."""

    async def test_returns_all_addresses_deduplicated(self):
        """A and AAAA records all come back, duplicates dropped, order kept."""
        loop = asyncio.get_running_loop()
        infos = _addrinfo("93.184.216.34", "93.184.216.34", "2606:2800:220:1::1946")
        with patch.object(loop, "getaddrinfo", AsyncMock(return_value=infos)) as mock_gai:
            result = await SystemResolver().resolve("example.com")

        assert result == ["93.184.216.34", "2606:2800:220:1::1946"]
        mock_gai.assert_awaited_once_with(
            "example.com", None, family=socket.AF_UNSPEC, type=socket.SOCK_STREAM
        )

    async def test_family_is_forwarded(self):
        loop = asyncio.get_running_loop()
        with patch.object(loop, "getaddrinfo", AsyncMock(return_value=[])) as mock_gai:
            await SystemResolver(family=socket.AF_INET).resolve("example.com")

        assert mock_gai.call_args.kwargs["family"] == socket.AF_INET

    async def test_gaierror_propagates(self):
        """Lookup failures surface as OSError for the classifier to handle."""
        loop = asyncio.get_running_loop()
        error = socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        with patch.object(loop, "getaddrinfo", AsyncMock(side_effect=error)):
            with pytest.raises(socket.gaierror):
                await SystemResolver().resolve("nonexistent.invalid")


class TestStaticResolver:
    """StaticResolver lookups."""

    async def test_single_address_string(self):
        resolver = StaticResolver({"example.com": "93.184.216.34"})
        assert await resolver.resolve("example.com") == ["93.184.216.34"]

    async def test_multiple_addresses(self):
        resolver = StaticResolver({"example.com": ["93.184.216.34", "10.0.0.1"]})
        assert await resolver.resolve("example.com") == ["93.184.216.34", "10.0.0.1"]

    async def test_lookup_is_case_insensitive(self):
        resolver = StaticResolver({"Example.COM": "93.184.216.34"})
        assert await resolver.resolve("EXAMPLE.com") == ["93.184.216.34"]

    async def test_unknown_name_raises_gaierror(self):
        with pytest.raises(socket.gaierror):
            await StaticResolver({}).resolve("nowhere.test")

    async def test_returned_list_is_a_copy(self):
        resolver = StaticResolver({"example.com": ["93.184.216.34"]})
        (await resolver.resolve("example.com")).append("10.0.0.1")
        assert await resolver.resolve("example.com") == ["93.184.216.34"]
