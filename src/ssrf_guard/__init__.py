"""Pre-flight SSRF guard for outbound HTTP requests."""

from ssrf_guard.classifier import HostClassification, HostClassifier
from ssrf_guard.config import policy_from_env
from ssrf_guard.exceptions import (
    BlockedRangeError,
    HostBlockedError,
    InvalidFormatError,
    InvalidInputError,
    LocalhostDomainNotAllowedError,
    ProtocolNotAllowedError,
    RejectionReason,
    SSRFGuardError,
    UnresolvableHostError,
    URLRejectedError,
)
from ssrf_guard.policy import (
    DEFAULT_ALLOWED_PROTOCOLS,
    DEFAULT_BLOCKED_HOSTS,
    DEFAULT_BLOCKED_RANGES,
    DEFAULT_POLICY,
    PolicyConfig,
    build_policy,
)
from ssrf_guard.resolver import Resolver, StaticResolver, SystemResolver
from ssrf_guard.transport import guarded_async_client, ssrf_event_hook
from ssrf_guard.utils.ranges import ip_in_range
from ssrf_guard.validator import URLGuard, Verdict, check_url, make_guard, validate_url

__version__ = "0.1.0"

__all__ = [
    "BlockedRangeError",
    "DEFAULT_ALLOWED_PROTOCOLS",
    "DEFAULT_BLOCKED_HOSTS",
    "DEFAULT_BLOCKED_RANGES",
    "DEFAULT_POLICY",
    "HostBlockedError",
    "HostClassification",
    "HostClassifier",
    "InvalidFormatError",
    "InvalidInputError",
    "LocalhostDomainNotAllowedError",
    "PolicyConfig",
    "ProtocolNotAllowedError",
    "RejectionReason",
    "Resolver",
    "SSRFGuardError",
    "StaticResolver",
    "SystemResolver",
    "URLGuard",
    "URLRejectedError",
    "UnresolvableHostError",
    "Verdict",
    "build_policy",
    "check_url",
    "guarded_async_client",
    "ip_in_range",
    "make_guard",
    "policy_from_env",
    "ssrf_event_hook",
    "validate_url",
]
