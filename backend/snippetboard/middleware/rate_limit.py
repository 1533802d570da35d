"""
SnippetBoard Backend — Posting Throttle Middleware
====================================================

What:  Per-IP sliding-window limit on POST requests (new snippets).
How:   Keeps the timestamps of each client's recent posts in a deque. Before
       a POST goes through, timestamps older than the window are dropped; if
       the client still has `limit` posts in the window the request is
       answered with 429 and a Retry-After header, as an error page for
       browsers and as JSON otherwise.

Reads are never throttled: a client that hit the posting limit can still
view every feed.

This state is per process. Several workers each keep their own windows.
"""

import logging
import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from snippetboard.exceptions import RateLimitExceededError
from snippetboard.middleware.request_id import request_id_var
from snippetboard.responses import error_response

logger = logging.getLogger(__name__)

THROTTLED_METHODS = {"POST"}


class SlidingWindow:
    """Timestamps of recent events per key, limited to `limit` per `window` seconds."""

    def __init__(self, limit: int, window: float, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window = window
        self._clock = clock
        self._events: Dict[str, Deque[float]] = defaultdict(deque)

    def hit(self, key: str) -> Optional[int]:
        """
        Record an event for `key`.

        Returns:
            None if the event is allowed, otherwise the whole seconds until
            the oldest event in the window expires (the event is not recorded).
        """
        now = self._clock()
        events = self._events[key]
        while events and events[0] <= now - self.window:
            events.popleft()

        if len(events) >= self.limit:
            return int(events[0] + self.window - now) + 1

        events.append(now)
        return None

    def forget_idle(self) -> int:
        """Drop keys with no events left in the window; returns how many."""
        cutoff = self._clock() - self.window
        idle = [key for key, events in self._events.items() if not events or events[-1] <= cutoff]
        for key in idle:
            del self._events[key]
        return len(idle)

    def __len__(self) -> int:
        return len(self._events)


class PostRateLimitMiddleware(BaseHTTPMiddleware):
    """
    Args:
        limit:  Posts allowed per client within `window`
        window: Window length in seconds
    """

    CLEANUP_EVERY = 1000

    def __init__(self, app, limit: int, window: int, **kwargs):
        super().__init__(app, **kwargs)
        self.throttle = SlidingWindow(limit=limit, window=window)
        self._seen = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method not in THROTTLED_METHODS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        retry_after = self.throttle.hit(client_ip)

        self._seen += 1
        if self._seen % self.CLEANUP_EVERY == 0:
            dropped = self.throttle.forget_idle()
            if dropped:
                logger.debug("Forgot %d idle clients", dropped)

        if retry_after is not None:
            exc = RateLimitExceededError(retry_after=retry_after, context={"client_ip": client_ip})
            logger.warning(
                "[%s] Posting throttle hit for %s: %d posts in %ss window",
                request_id_var.get(""),
                client_ip,
                self.throttle.limit,
                self.throttle.window,
            )
            return error_response(
                request,
                429,
                "rate_limit_exceeded",
                exc.message,
                details={"retry_after": exc.retry_after},
                headers={"Retry-After": str(exc.retry_after)},
                request_id=request_id_var.get(""),
            )

        return await call_next(request)
