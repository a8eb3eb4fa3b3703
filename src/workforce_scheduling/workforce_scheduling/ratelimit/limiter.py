from __future__ import annotations

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable

from ..core.constants import (
    DEFAULT_RATE_LIMIT_CAPACITY,
    DEFAULT_RATE_LIMIT_MAX_REQUESTS,
    DEFAULT_RATE_LIMIT_WINDOW_SECONDS,
)
from ..core.exceptions import RateLimitExceeded

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    window_start: float
    count: int


class FixedWindowRateLimiter:
    """Per-key fixed-window request counter with bounded memory.

    One instance is created per app and passed in; there is no module-level
    state. When `capacity` keys are tracked the least recently seen key is
    evicted.
    """

    def __init__(
        self,
        *,
        max_requests: int = DEFAULT_RATE_LIMIT_MAX_REQUESTS,
        window_seconds: float = DEFAULT_RATE_LIMIT_WINDOW_SECONDS,
        capacity: int = DEFAULT_RATE_LIMIT_CAPACITY,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_requests <= 0 or window_seconds <= 0 or capacity <= 0:
            raise ValueError("max_requests, window_seconds and capacity must be positive")
        self._max_requests = int(max_requests)
        self._window = float(window_seconds)
        self._capacity = int(capacity)
        self._clock = clock
        self._entries: "OrderedDict[str, _Entry]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def max_requests(self) -> int:
        return self._max_requests

    @property
    def window_seconds(self) -> float:
        return self._window

    @property
    def capacity(self) -> int:
        return self._capacity

    def hit(self, key: str) -> None:
        """Count one request for `key`; raise RateLimitExceeded when over budget."""
        now = self._clock()
        entry = self._entries.get(key)

        if entry is None or now - entry.window_start > self._window:
            self._entries[key] = _Entry(window_start=now, count=1)
            self._entries.move_to_end(key)
            self._evict()
            return

        self._entries.move_to_end(key)
        if entry.count >= self._max_requests:
            retry_after = max(self._window - (now - entry.window_start), 0.0)
            logger.warning("rate limit exceeded for %s (retry after %.1fs)", key, retry_after)
            raise RateLimitExceeded(key, retry_after)

        entry.count += 1

    def reset(self) -> None:
        self._entries.clear()

    def _evict(self) -> None:
        while len(self._entries) > self._capacity:
            self._entries.popitem(last=False)
