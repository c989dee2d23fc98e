"""Hostname resolution backends."""

import asyncio
import logging
import socket
from collections.abc import Mapping, Sequence
from typing import Protocol

logger = logging.getLogger(__name__)


class Resolver(Protocol):
    """Forward DNS lookup used by the host classifier.

    ``resolve`` returns every address the name maps to and raises OSError
    (e.g. ``socket.gaierror``) when the name does not resolve.
    """

    async def resolve(self, hostname: str) -> Sequence[str]: ...


class SystemResolver:
    """Resolve through the event loop's getaddrinfo (A and AAAA records)."""

    def __init__(self, family: int = socket.AF_UNSPEC) -> None:
        self.family = family

    async def resolve(self, hostname: str) -> list[str]:
        loop = asyncio.get_running_loop()
        infos = await loop.getaddrinfo(
            hostname, None, family=self.family, type=socket.SOCK_STREAM
        )
        addresses: list[str] = []
        for _family, _type, _proto, _canonname, sockaddr in infos:
            ip = str(sockaddr[0])
            if ip not in addresses:
                addresses.append(ip)
        logger.debug(f"Resolved {hostname} to {addresses}")
        return addresses


class StaticResolver:
    """Answer lookups from a fixed host -> address(es) table.

    Useful for pinned hosts and for tests. Unknown names raise
    ``socket.gaierror`` like a real lookup would.
    """

    def __init__(self, records: Mapping[str, str | Sequence[str]]) -> None:
        self._records: dict[str, list[str]] = {}
        for host, addrs in records.items():
            if isinstance(addrs, str):
                addrs = [addrs]
            self._records[host.lower()] = list(addrs)

    async def resolve(self, hostname: str) -> list[str]:
        try:
            return list(self._records[hostname.lower()])
        except KeyError:
            raise socket.gaierror(
                socket.EAI_NONAME, "Name or service not known"
            ) from None
