"""Outbound request policy: which protocols, hosts and networks are allowed."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ssrf_guard.utils.ranges import parse_network

logger = logging.getLogger(__name__)

DEFAULT_BLOCKED_RANGES: tuple[str, ...] = (
    # IPv4
    "10.0.0.0/8",  # private, RFC 1918
    "172.16.0.0/12",  # private, RFC 1918
    "192.168.0.0/16",  # private, RFC 1918
    "127.0.0.0/8",  # loopback, RFC 1122
    "169.254.0.0/16",  # link-local / cloud metadata, RFC 3927
    "192.0.2.0/24",  # TEST-NET-1, RFC 5737
    "198.51.100.0/24",  # TEST-NET-2, RFC 5737
    "203.0.113.0/24",  # TEST-NET-3, RFC 5737
    "224.0.0.0/4",  # multicast, RFC 5771
    "240.0.0.0/4",  # reserved, RFC 1112
    "0.0.0.0/8",  # "this" network
    # IPv6
    "::/128",  # unspecified
    "::1/128",  # loopback
    "fc00::/7",  # unique local
    "fe80::/10",  # link-local
    "ff00::/8",  # multicast
)

DEFAULT_ALLOWED_PROTOCOLS: frozenset[str] = frozenset({"http:", "https:"})

DEFAULT_BLOCKED_HOSTS: frozenset[str] = frozenset(
    {"localhost", "0.0.0.0", "127.0.0.1", "::1"}
)


def _as_items(value: Any) -> Any:
    """Treat a bare string as a one-element collection."""
    if isinstance(value, str):
        return [value]
    return value


class PolicyConfig(BaseModel):
    """Immutable SSRF policy shared by every validation call."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    allow_private_networks: bool = False
    blocked_ranges: tuple[str, ...] = DEFAULT_BLOCKED_RANGES
    allowed_protocols: frozenset[str] = DEFAULT_ALLOWED_PROTOCOLS
    allow_localhost_domains: bool = False
    blocked_hosts: frozenset[str] = DEFAULT_BLOCKED_HOSTS
    block_unresolvable: bool = False
    resolve_timeout: float = Field(default=5.0, gt=0)

    @field_validator("allowed_protocols", mode="before")
    @classmethod
    def normalize_protocols(cls, v: Any) -> Any:
        """Lower-case protocols and add the trailing colon ("https" -> "https:")."""
        v = _as_items(v)
        if not isinstance(v, Iterable):
            return v
        protocols = set()
        for p in v:
            if not isinstance(p, str):
                raise ValueError(f"protocol must be a string, got {type(p).__name__}")
            p = p.strip().lower()
            if p and not p.endswith(":"):
                p += ":"
            if p:
                protocols.add(p)
        return frozenset(protocols)

    @field_validator("blocked_hosts", mode="before")
    @classmethod
    def normalize_hosts(cls, v: Any) -> Any:
        v = _as_items(v)
        if not isinstance(v, Iterable):
            return v
        return frozenset(h.strip().lower() for h in v if isinstance(h, str) and h.strip())

    @field_validator("blocked_ranges", mode="before")
    @classmethod
    def normalize_ranges(cls, v: Any) -> Any:
        v = _as_items(v)
        if not isinstance(v, Iterable):
            return v
        return tuple(r.strip() if isinstance(r, str) else r for r in v)

    @model_validator(mode="after")
    def warn_invalid_ranges(self) -> "PolicyConfig":
        """Malformed CIDRs never match; surface them once so typos get noticed."""
        invalid = self.invalid_ranges
        if invalid:
            logger.warning(
                f"Ignoring {len(invalid)} malformed blocked range(s): {', '.join(invalid)}",
                extra={"invalid_ranges": list(invalid)},
            )
        return self

    @property
    def invalid_ranges(self) -> tuple[str, ...]:
        """Entries of blocked_ranges that are not valid CIDR notation."""
        return tuple(r for r in self.blocked_ranges if parse_network(r) is None)

    def merged(
        self, overrides: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> "PolicyConfig":
        """Return a new policy with the given fields replaced."""
        values = self.model_dump()
        values.update(overrides or {})
        values.update(kwargs)
        return PolicyConfig(**values)


DEFAULT_POLICY = PolicyConfig()


def build_policy(
    overrides: "Mapping[str, Any] | PolicyConfig | None" = None, **kwargs: Any
) -> PolicyConfig:
    """Merge a partial configuration over DEFAULT_POLICY.

    Each given field replaces the default outright. To extend a default
    list, build on the exported constants:

        build_policy(blocked_hosts=DEFAULT_BLOCKED_HOSTS | {"metadata.internal"})
    """
    if isinstance(overrides, PolicyConfig):
        return overrides.merged(**kwargs) if kwargs else overrides
    return DEFAULT_POLICY.merged(overrides, **kwargs)
