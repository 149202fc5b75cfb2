"""
Rate Limiting

This module provides the global request-rate ceiling applied to every
inbound request.

Design Decisions:
- One limiter per application, shared by all clients (not IP-based)
- Sliding window over a timestamp log: the deque keeps the epoch-millisecond
  timestamps of accepted requests and is pruned from the front on every call
- The whole check runs under a single lock, so timestamps are appended in
  non-decreasing order even when requests arrive on many threads
- Memory is bounded by max_requests because rejected requests are not logged
"""

import logging
import math
import threading
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional

from shortener.core.clock import Clock

logger = logging.getLogger(__name__)

DEFAULT_MAX_REQUESTS = 100
DEFAULT_WINDOW_MILLIS = 60_000

RATE_LIMIT_MESSAGE = "Too Many Requests - Rate limit exceeded"


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    # seconds until a request would be accepted; 0 when allowed
    retry_after: int


class SlidingWindowRateLimiter:
    """
    Global sliding-window rate limiter.

    A request is accepted when fewer than ``max_requests`` requests were
    accepted during the last ``window_millis`` milliseconds.
    """

    def __init__(
        self,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window_millis: int = DEFAULT_WINDOW_MILLIS,
        clock: Optional[Clock] = None
    ):
        """
        Initialize the limiter.

        Args:
            max_requests: Requests accepted per window (default: 100)
            window_millis: Window length in milliseconds (default: 60000)
            clock: Time source, defaults to the system wall clock
        """
        if max_requests < 1:
            raise ValueError("max_requests must be positive")
        if window_millis < 1:
            raise ValueError("window_millis must be positive")

        self.max_requests = max_requests
        self.window_millis = window_millis
        self.clock = clock or Clock()

        self._timestamps: Deque[int] = deque()
        self._lock = threading.Lock()

    def _prune(self, window_start: int) -> None:
        # Timestamps are ordered, stop at the first one still inside the window.
        while self._timestamps and self._timestamps[0] < window_start:
            self._timestamps.popleft()

    def check_request(self) -> RateLimitResult:
        """
        Record the request if it fits in the current window.

        The decision and the retry delay are computed in the same critical
        section, so a rejected request always reports a positive delay.

        Returns:
            RateLimitResult. A rejected request leaves the window untouched.
        """
        with self._lock:
            now = self.clock.epoch_millis()
            self._prune(now - self.window_millis)

            if len(self._timestamps) < self.max_requests:
                self._timestamps.append(now)
                return RateLimitResult(allowed=True, retry_after=0)

            # Oldest timestamp leaves the window once now > oldest + window.
            wait_millis = self._timestamps[0] + self.window_millis - now + 1

        logger.warning(
            f"Rate limit exceeded: {self.max_requests} requests "
            f"per {self.window_millis}ms"
        )
        return RateLimitResult(
            allowed=False,
            retry_after=max(1, math.ceil(wait_millis / 1000)),
        )

    def allow_request(self) -> bool:
        """Record the request and return True if it fits in the current window."""
        return self.check_request().allowed

    def __len__(self) -> int:
        with self._lock:
            return len(self._timestamps)
