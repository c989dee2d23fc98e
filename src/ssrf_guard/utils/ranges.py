"""IP literal parsing and CIDR membership."""

import ipaddress
import logging
from functools import lru_cache

logger = logging.getLogger(__name__)

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address
IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network


def parse_ip_literal(value: str) -> IPAddress | None:
    """Return the address if ``value`` is an IPv4/IPv6 literal, else None.

    IPv4-mapped IPv6 addresses (``::ffff:a.b.c.d``) come back as IPv4.
    """
    try:
        addr = ipaddress.ip_address(value)
    except ValueError:
        return None
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        return addr.ipv4_mapped
    return addr


@lru_cache(maxsize=256)
def parse_network(cidr: str) -> IPNetwork | None:
    """Parse a CIDR string, returning None when it is malformed.

    Host bits are tolerated (``10.1.2.3/8`` is read as ``10.0.0.0/8``).
    """
    try:
        return ipaddress.ip_network(cidr.strip(), strict=False)
    except (ValueError, TypeError, AttributeError):
        return None


def ip_in_range(address: str | IPAddress, cidr: str) -> bool:
    """True iff ``address`` lies inside ``cidr``.

    Never raises: a malformed address, a non-address value or a malformed
    CIDR yields False. Families must
    agree after IPv4-mapped normalisation.
    """
    if isinstance(address, str):
        addr = parse_ip_literal(address)
    elif isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped is not None:
        addr = address.ipv4_mapped
    elif isinstance(address, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        addr = address
    else:
        return False
    if addr is None:
        return False

    network = parse_network(cidr)
    if network is None:
        logger.debug(f"Ignoring malformed CIDR entry: {cidr!r}")
        return False

    if addr.version != network.version:
        return False
    return addr in network
