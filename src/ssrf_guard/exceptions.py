"""Custom exceptions for ssrf_guard with user-friendly messages."""

from enum import Enum


class RejectionReason(str, Enum):
    """Why an outbound URL was refused."""

    INVALID_INPUT = "invalid_input"
    INVALID_FORMAT = "invalid_format"
    PROTOCOL_NOT_ALLOWED = "protocol_not_allowed"
    HOST_BLOCKED = "host_blocked"
    LOCALHOST_DOMAIN_NOT_ALLOWED = "localhost_domain_not_allowed"
    BLOCKED_RANGE = "blocked_range"
    UNRESOLVABLE_HOST = "unresolvable_host"


class SSRFGuardError(Exception):
    """Base exception for ssrf_guard errors."""

    def __init__(self, message: str, user_hint: str | None = None):
        self.message = message
        self.user_hint = user_hint
        super().__init__(message)

    def __str__(self) -> str:
        if self.user_hint:
            return f"{self.message}\n  Hint: {self.user_hint}"
        return self.message


class URLRejectedError(SSRFGuardError, ValueError):
    """An outbound URL failed validation.

    ``reason`` says which rule fired and ``value`` carries the offending
    protocol or hostname (``None`` for input/format failures).
    """

    reason: RejectionReason

    def __init__(
        self,
        message: str,
        value: str | None = None,
        user_hint: str | None = None,
    ):
        self.value = value
        super().__init__(message=message, user_hint=user_hint)


class InvalidInputError(URLRejectedError):
    """URL is missing or is not a string / URL-like object."""

    reason = RejectionReason.INVALID_INPUT

    def __init__(self, received: object = None):
        super().__init__(
            message=f"Invalid URL: expected a string or URL object, got {type(received).__name__}",
            user_hint="Pass the target as a string such as 'https://example.com/'",
        )


class InvalidFormatError(URLRejectedError):
    """URL is present but cannot be parsed."""

    reason = RejectionReason.INVALID_FORMAT

    def __init__(self, url: str, detail: str | None = None):
        self.url = url
        message = "Invalid URL format" + (f": {detail}" if detail else "")
        super().__init__(message=message)


class ProtocolNotAllowedError(URLRejectedError):
    """URL scheme is not in the allow-list."""

    reason = RejectionReason.PROTOCOL_NOT_ALLOWED

    def __init__(self, protocol: str):
        super().__init__(
            message=f"Protocol not allowed: {protocol}",
            value=protocol,
            user_hint="Add the protocol to allowed_protocols if it is expected",
        )


class HostBlockedError(URLRejectedError):
    """Hostname is on the exact blocklist."""

    reason = RejectionReason.HOST_BLOCKED

    def __init__(self, hostname: str):
        super().__init__(message=f"Hostname blocked: {hostname}", value=hostname)


class LocalhostDomainNotAllowedError(URLRejectedError):
    """Hostname is localhost or under .localhost / .local."""

    reason = RejectionReason.LOCALHOST_DOMAIN_NOT_ALLOWED

    def __init__(self, hostname: str):
        super().__init__(
            message=f"Localhost domain not allowed: {hostname}",
            value=hostname,
            user_hint="Set allow_localhost_domains=True to permit local names",
        )


class BlockedRangeError(URLRejectedError):
    """Literal or resolved address falls inside a blocked network range."""

    reason = RejectionReason.BLOCKED_RANGE

    def __init__(self, hostname: str):
        super().__init__(
            message=f"Host resolves to a blocked address range: {hostname}",
            value=hostname,
            user_hint="Set allow_private_networks=True only for trusted internal targets",
        )


class UnresolvableHostError(URLRejectedError):
    """Hostname could not be resolved and the policy rejects unresolvable hosts."""

    reason = RejectionReason.UNRESOLVABLE_HOST

    def __init__(self, hostname: str):
        super().__init__(
            message=f"Hostname could not be resolved: {hostname}",
            value=hostname,
            user_hint="Disable block_unresolvable to let the transport report DNS errors",
        )
