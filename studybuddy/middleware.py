import logging
import math
import time
from typing import Any, Awaitable, Callable

from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

Scope = dict[str, Any]
Receive = Callable[..., Awaitable[dict[str, Any]]]
Send = Callable[..., Awaitable[None]]

SECURITY_HEADERS: list[tuple[bytes, bytes]] = [
    (b"x-content-type-options", b"nosniff"),
    (b"x-frame-options", b"SAMEORIGIN"),
    (b"referrer-policy", b"no-referrer"),
    (b"cross-origin-opener-policy", b"same-origin"),
    (b"cross-origin-resource-policy", b"same-origin"),
    (b"x-dns-prefetch-control", b"off"),
    (b"strict-transport-security", b"max-age=15552000; includeSubDomains"),
]


def _with_headers(send: Send, extra: list[tuple[bytes, bytes]]) -> Send:
    async def wrapped(message: dict[str, Any]) -> None:
        if message["type"] == "http.response.start":
            present = {name for name, _ in message.get("headers", [])}
            message["headers"] = list(message.get("headers", [])) + [
                (name, value) for name, value in extra if name not in present
            ]
        await send(message)

    return wrapped


class SecurityHeadersMiddleware:
    """Attach conservative security headers to every HTTP response."""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return
        await self.app(scope, receive, _with_headers(send, SECURITY_HEADERS))


class RateLimitMiddleware:
    """
    Fixed-window limiter keyed by client address.
    Requests beyond ``max_requests`` inside one window get a 429 before reaching the app.
    ``max_requests <= 0`` disables the limiter.
    """

    PRUNE_THRESHOLD = 10_000

    def __init__(self, app, max_requests: int, window_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.app = app
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}

    def _prune(self, now: float) -> None:
        expired = [k for k, (start, _) in self._windows.items() if now - start >= self.window_seconds]
        for key in expired:
            del self._windows[key]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http" or self.max_requests <= 0:
            await self.app(scope, receive, send)
            return

        client = scope.get("client")
        key = client[0] if client else "unknown"
        now = self._clock()
        if len(self._windows) > self.PRUNE_THRESHOLD:
            self._prune(now)

        start, count = self._windows.get(key, (now, 0))
        if now - start >= self.window_seconds:
            start, count = now, 0
        count += 1
        self._windows[key] = (start, count)

        reset = max(0, math.ceil(start + self.window_seconds - now))
        headers = [
            (b"ratelimit-limit", str(self.max_requests).encode()),
            (b"ratelimit-remaining", str(max(0, self.max_requests - count)).encode()),
            (b"ratelimit-reset", str(reset).encode()),
        ]

        if count > self.max_requests:
            logger.warning("Inbound rate limit hit for %s (%d requests in window)", key, count)
            response = JSONResponse(
                {"error": "Too many requests, please try again later."},
                status_code=429,
                headers={name.decode(): value.decode() for name, value in headers} | {"Retry-After": str(reset)},
            )
            await response(scope, receive, send)
            return

        await self.app(scope, receive, _with_headers(send, headers))
