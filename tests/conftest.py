"""
Shared pytest fixtures and configuration for all tests.
"""

import pytest

from ssrf_guard.policy import build_policy
from ssrf_guard.resolver import StaticResolver

PUBLIC_IP = "93.184.216.34"


@pytest.fixture
def dns_records() -> dict:
    """Fake DNS table used instead of real lookups."""
    return {
        "example.com": PUBLIC_IP,
        "www.example.com": [PUBLIC_IP, "2606:2800:220:1:248:1893:25c8:1946"],
        "multi.example.com": [PUBLIC_IP, "10.0.0.7"],
        "metadata.example.com": "169.254.169.254",
        "mapped.example.com": "::ffff:127.0.0.1",
        "internal.corp": "192.168.1.100",
    }


@pytest.fixture
def resolver(dns_records) -> StaticResolver:
    """Resolver answering from dns_records; unknown names fail to resolve."""
    return StaticResolver(dns_records)


@pytest.fixture
def failing_resolver() -> StaticResolver:
    """Resolver that knows no names at all."""
    return StaticResolver({})


@pytest.fixture
def no_host_blocklist():
    """Default policy minus the exact-host blocklist, so literal IPs reach range checks."""
    return build_policy(blocked_hosts=[])


@pytest.fixture
def sample_urls():
    """Sample URLs that the default policy approves."""
    return [
        "https://example.com/",
        "https://example.com/page1",
        "http://example.com/guide/install?lang=en",
        "https://www.example.com/api/reference#auth",
        "https://EXAMPLE.com:8443/",
    ]
