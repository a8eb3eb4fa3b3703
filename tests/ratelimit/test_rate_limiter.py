from __future__ import annotations

import pytest

from src.workforce_scheduling.workforce_scheduling.core.exceptions import RateLimitExceeded
from src.workforce_scheduling.workforce_scheduling.ratelimit.limiter import FixedWindowRateLimiter


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_requests_over_budget_are_rejected_until_window_passes():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(max_requests=3, window_seconds=60, clock=clock)

    for _ in range(3):
        limiter.hit("10.0.0.1")

    clock.now += 20
    with pytest.raises(RateLimitExceeded) as err:
        limiter.hit("10.0.0.1")
    assert err.value.retry_after == pytest.approx(40)

    clock.now += 41
    limiter.hit("10.0.0.1")


def test_keys_are_counted_separately():
    limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())

    limiter.hit("a")
    limiter.hit("b")

    with pytest.raises(RateLimitExceeded):
        limiter.hit("a")


def test_least_recently_seen_key_is_evicted_at_capacity():
    limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60, capacity=2, clock=FakeClock())

    limiter.hit("a")
    limiter.hit("b")
    limiter.hit("c")

    assert len(limiter) == 2
    # "a" was evicted, so it starts a fresh window.
    limiter.hit("a")
    with pytest.raises(RateLimitExceeded):
        limiter.hit("c")


def test_reset_forgets_all_keys():
    limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())
    limiter.hit("a")

    limiter.reset()

    assert len(limiter) == 0
    limiter.hit("a")


def test_non_positive_settings_are_rejected():
    with pytest.raises(ValueError):
        FixedWindowRateLimiter(max_requests=0)
