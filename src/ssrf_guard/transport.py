"""httpx integration: validate every outbound request, redirects included."""

from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from ssrf_guard.policy import PolicyConfig
from ssrf_guard.resolver import Resolver
from ssrf_guard.validator import URLGuard

SKIP_EXTENSION = "skip_ssrf_check"


def ssrf_event_hook(
    policy: PolicyConfig | None = None,
    resolver: Resolver | None = None,
    guard: URLGuard | None = None,
) -> Callable[[httpx.Request], Awaitable[None]]:
    """
    Build an httpx ``request`` event hook that validates ``request.url``.

    httpx runs request hooks for each redirect hop as well, so a redirect
    into a blocked network is refused before it is sent. Pass
    ``extensions={"skip_ssrf_check": True}`` on a request to bypass.
    """
    guard = guard or URLGuard(policy, resolver)

    async def check_request(request: httpx.Request) -> None:
        skip = request.extensions.get(SKIP_EXTENSION) is True
        await guard.validate(request.url, skip_check=skip)

    return check_request


def guarded_async_client(
    policy: PolicyConfig | None = None,
    resolver: Resolver | None = None,
    **client_kwargs: Any,
) -> httpx.AsyncClient:
    """Return an httpx.AsyncClient with the SSRF hook installed first."""
    hooks = dict(client_kwargs.pop("event_hooks", None) or {})
    hooks["request"] = [ssrf_event_hook(policy, resolver), *hooks.get("request", [])]
    return httpx.AsyncClient(event_hooks=hooks, **client_kwargs)
