"""Build a PolicyConfig from environment variables."""

import logging
import os
from collections.abc import Mapping
from typing import Any

from ssrf_guard.policy import DEFAULT_POLICY, PolicyConfig

logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}

# env var -> policy field
_BOOL_VARS = {
    "SSRF_ALLOW_PRIVATE_NETWORKS": "allow_private_networks",
    "SSRF_ALLOW_LOCALHOST_DOMAINS": "allow_localhost_domains",
    "SSRF_BLOCK_UNRESOLVABLE": "block_unresolvable",
}
_LIST_VARS = {
    "SSRF_BLOCKED_RANGES": "blocked_ranges",
    "SSRF_ALLOWED_PROTOCOLS": "allowed_protocols",
    "SSRF_BLOCKED_HOSTS": "blocked_hosts",
}


def _split(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be one of {sorted(_TRUE | _FALSE)}, got {raw!r}")


def policy_from_env(
    environ: Mapping[str, str] | None = None, base: PolicyConfig | None = None
) -> PolicyConfig:
    """
    Read SSRF_* variables over ``base`` (DEFAULT_POLICY by default).

    Unset or empty variables keep the base value. List variables are
    comma-separated; SSRF_BLOCKED_* replace the list, SSRF_EXTRA_BLOCKED_*
    append to it.
    """
    env = os.environ if environ is None else environ
    base = base or DEFAULT_POLICY
    overrides: dict[str, Any] = {}

    for name, field in _BOOL_VARS.items():
        raw = env.get(name, "").strip()
        if raw:
            overrides[field] = _parse_bool(name, raw)

    for name, field in _LIST_VARS.items():
        raw = env.get(name, "").strip()
        if raw:
            overrides[field] = _split(raw)

    extra_ranges = _split(env.get("SSRF_EXTRA_BLOCKED_RANGES", ""))
    if extra_ranges:
        current = overrides.get("blocked_ranges", base.blocked_ranges)
        overrides["blocked_ranges"] = [*current, *extra_ranges]

    extra_hosts = _split(env.get("SSRF_EXTRA_BLOCKED_HOSTS", ""))
    if extra_hosts:
        current = overrides.get("blocked_hosts", base.blocked_hosts)
        overrides["blocked_hosts"] = [*current, *extra_hosts]

    raw_timeout = env.get("SSRF_RESOLVE_TIMEOUT", "").strip()
    if raw_timeout:
        try:
            overrides["resolve_timeout"] = float(raw_timeout)
        except ValueError:
            raise ValueError(
                f"SSRF_RESOLVE_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            ) from None

    if overrides:
        logger.info(f"SSRF policy overrides from environment: {sorted(overrides)}")
    return base.merged(overrides)
