"""Pre-flight SSRF validation for outbound URLs.

Checks run cheapest first and stop at the first failure:

1. input is a string or URL-like object
2. URL parses and has a scheme
3. protocol is allow-listed
4. hostname is not on the exact blocklist
5. hostname is not localhost / *.localhost / *.local
6. literal or resolved address is outside every blocked range
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ssrf_guard.classifier import HostClassifier
from ssrf_guard.exceptions import (
    BlockedRangeError,
    HostBlockedError,
    InvalidFormatError,
    InvalidInputError,
    LocalhostDomainNotAllowedError,
    ProtocolNotAllowedError,
    RejectionReason,
    UnresolvableHostError,
    URLRejectedError,
)
from ssrf_guard.policy import DEFAULT_POLICY, PolicyConfig
from ssrf_guard.resolver import Resolver
from ssrf_guard.utils.urls import format_url, parse_url

logger = logging.getLogger(__name__)

LOCALHOST_SUFFIXES = (".localhost", ".local")


def is_localhost_domain(hostname: str) -> bool:
    """True for localhost itself and names under .localhost or .local."""
    return hostname == "localhost" or hostname.endswith(LOCALHOST_SUFFIXES)


@dataclass(frozen=True)
class Verdict:
    """Approved, or rejected with the error that says why."""

    approved: bool
    url: str | None = None
    error: URLRejectedError | None = None

    @classmethod
    def approve(cls, url: str) -> "Verdict":
        return cls(approved=True, url=url)

    @classmethod
    def reject(cls, error: URLRejectedError) -> "Verdict":
        return cls(approved=False, error=error)

    @property
    def reason(self) -> RejectionReason | None:
        return self.error.reason if self.error else None

    @property
    def value(self) -> str | None:
        return self.error.value if self.error else None

    def __bool__(self) -> bool:
        return self.approved


class URLGuard:
    """A policy bound to a resolver, reusable across concurrent requests.

    Calling the guard with request options (a mapping holding ``url`` or
    ``uri``) validates the target and hands the same options back, so it
    slots into a pipeline of pre-flight hooks. Rejections raise.
    """

    def __init__(
        self, policy: PolicyConfig | None = None, resolver: Resolver | None = None
    ) -> None:
        self.policy = policy or DEFAULT_POLICY
        self.classifier = HostClassifier(
            self.policy.blocked_ranges,
            resolver=resolver,
            resolve_timeout=self.policy.resolve_timeout,
        )

    async def validate(self, url: Any, skip_check: bool = False) -> str:
        """
        Validate ``url`` against the policy.

        Returns:
            The URL as a string

        Raises:
            URLRejectedError: subclass naming the rule that fired
        """
        try:
            target = format_url(url)
            if skip_check is True:
                logger.info(f"SSRF check skipped for {target}")
                return target
            await self._check(target)
        except URLRejectedError as e:
            logger.warning(
                f"Rejected outbound URL: {e.message}",
                extra={"reason": e.reason.value, "value": e.value},
            )
            raise

        logger.debug(f"Approved outbound URL: {target}")
        return target

    async def check(self, url: Any, skip_check: bool = False) -> Verdict:
        """Like validate(), but returns a Verdict instead of raising."""
        try:
            return Verdict.approve(await self.validate(url, skip_check=skip_check))
        except URLRejectedError as e:
            return Verdict.reject(e)

    async def __call__(self, options: Mapping[str, Any]) -> Mapping[str, Any]:
        if not isinstance(options, Mapping):
            raise InvalidInputError(options)
        if options.get("skip_ssrf_check") is True:
            logger.info("SSRF check skipped by request options")
            return options
        await self.validate(options.get("url") or options.get("uri"))
        return options

    async def _check(self, target: str) -> None:
        policy = self.policy
        parsed = parse_url(target)

        if parsed.protocol not in policy.allowed_protocols:
            raise ProtocolNotAllowedError(parsed.protocol)

        hostname = parsed.hostname
        if not hostname:
            raise InvalidFormatError(target, "missing hostname")

        # "localhost." is the same name as "localhost"
        bare = hostname.rstrip(".")
        if bare in policy.blocked_hosts or hostname in policy.blocked_hosts:
            raise HostBlockedError(hostname)

        if not policy.allow_localhost_domains and is_localhost_domain(bare):
            raise LocalhostDomainNotAllowedError(hostname)

        if policy.allow_private_networks:
            return

        result = await self.classifier.classify(bare or hostname)
        if result.is_blocked_ip:
            logger.debug(
                f"{hostname} matched {result.matched_range} via {result.matched_address}"
            )
            raise BlockedRangeError(hostname)
        if not result.resolved and policy.block_unresolvable:
            raise UnresolvableHostError(hostname)


def make_guard(
    policy: PolicyConfig | None = None, resolver: Resolver | None = None
) -> URLGuard:
    """Bind a policy into a reusable pre-flight guard."""
    return URLGuard(policy, resolver)


async def validate_url(
    url: Any,
    policy: PolicyConfig | None = None,
    *,
    resolver: Resolver | None = None,
    skip_check: bool = False,
) -> str:
    """Validate a single URL; raises URLRejectedError on rejection."""
    return await URLGuard(policy, resolver).validate(url, skip_check=skip_check)


async def check_url(
    url: Any,
    policy: PolicyConfig | None = None,
    *,
    resolver: Resolver | None = None,
    skip_check: bool = False,
) -> Verdict:
    """Validate a single URL and return a Verdict."""
    return await URLGuard(policy, resolver).check(url, skip_check=skip_check)
