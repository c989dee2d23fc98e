"""Classify a hostname against blocked network ranges."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from ipaddress import IPv4Address, IPv6Address

from ssrf_guard.resolver import Resolver, SystemResolver
from ssrf_guard.utils.ranges import IPAddress, ip_in_range, parse_ip_literal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HostClassification:
    """Outcome of classifying one hostname."""

    hostname: str
    is_blocked_ip: bool
    is_ip_literal: bool = False
    resolved: bool = True
    addresses: tuple[str, ...] = ()
    matched_address: str | None = None
    matched_range: str | None = None


class HostClassifier:
    """
    Decide whether a hostname points into a blocked network.

    IP literals are matched directly. Names are resolved and every returned
    address is matched; one blocked address blocks the host. A failed or
    timed-out lookup, or one with no parseable address, is reported with
    ``resolved=False`` and is not blocked.
    """

    def __init__(
        self,
        blocked_ranges: Sequence[str],
        resolver: Resolver | None = None,
        resolve_timeout: float | None = 5.0,
    ) -> None:
        self.blocked_ranges = tuple(blocked_ranges)
        self.resolver = resolver or SystemResolver()
        self.resolve_timeout = resolve_timeout

    def match_address(self, address: str | IPAddress) -> str | None:
        """Return the first blocked range containing ``address``, if any."""
        for cidr in self.blocked_ranges:
            if ip_in_range(address, cidr):
                return cidr
        return None

    async def classify(self, hostname: str) -> HostClassification:
        literal = parse_ip_literal(hostname)
        if literal is not None:
            matched = self.match_address(literal)
            return HostClassification(
                hostname=hostname,
                is_blocked_ip=matched is not None,
                is_ip_literal=True,
                addresses=(str(literal),),
                matched_address=str(literal) if matched else None,
                matched_range=matched,
            )

        try:
            answer = await asyncio.wait_for(
                self.resolver.resolve(hostname), timeout=self.resolve_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"DNS lookup for {hostname} timed out after {self.resolve_timeout}s",
                extra={"hostname": hostname},
            )
            return HostClassification(hostname=hostname, is_blocked_ip=False, resolved=False)
        except (OSError, UnicodeError) as e:
            logger.warning(
                f"DNS lookup for {hostname} failed: {e}", extra={"hostname": hostname}
            )
            return HostClassification(hostname=hostname, is_blocked_ip=False, resolved=False)

        addresses = _as_addresses(answer)
        if not addresses:
            logger.warning(
                f"DNS lookup for {hostname} returned no usable addresses: {answer!r}",
                extra={"hostname": hostname},
            )
            return HostClassification(hostname=hostname, is_blocked_ip=False, resolved=False)

        for address in addresses:
            matched = self.match_address(address)
            if matched is not None:
                return HostClassification(
                    hostname=hostname,
                    is_blocked_ip=True,
                    addresses=addresses,
                    matched_address=address,
                    matched_range=matched,
                )

        return HostClassification(hostname=hostname, is_blocked_ip=False, addresses=addresses)


def _as_addresses(answer) -> tuple[str, ...]:
    """Normalise a resolver answer to a tuple of parseable address strings."""
    if isinstance(answer, (str, bytes, IPv4Address, IPv6Address)):
        answer = (answer,)
    addresses = []
    for item in answer or ():
        if isinstance(item, bytes):
            item = item.decode("ascii", "replace")
        if parse_ip_literal(str(item)) is None:
            logger.debug(f"Ignoring unparseable resolver record: {item!r}")
            continue
        addresses.append(str(item))
    return tuple(addresses)
