"""
Request spacing for the place-search and geocoding services.

Both services bill per request and reject bursts. Each adapter module holds
one shared limiter and calls it before every request:

    _rate_limiter = get_rate_limiter("opencage", GEOCODE_RATE_LIMIT)

    _rate_limiter()
    response = session.get(...)
"""

import time
from threading import Lock


class RateLimiter:
    """
    Spaces calls to one service at least 1 / requests_per_second apart.

    Each caller reserves the next free slot under the lock and sleeps
    outside it, so concurrent callers queue up in arrival order.
    """

    def __init__(self, requests_per_second: float, source_name: str = "default"):
        if requests_per_second <= 0:
            raise ValueError(f"requests_per_second must be > 0, got {requests_per_second}")

        self.requests_per_second = requests_per_second
        self.source_name = source_name
        self.min_interval = 1.0 / requests_per_second
        self._lock = Lock()
        self._next_slot = 0.0

    def wait(self) -> float:
        """Block until this caller's slot; returns the seconds slept."""
        with self._lock:
            now = time.monotonic()
            slot = max(now, self._next_slot)
            self._next_slot = slot + self.min_interval
        delay = slot - now
        if delay > 0:
            time.sleep(delay)
        return delay

    def __call__(self) -> None:
        self.wait()

    def __enter__(self):
        self.wait()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False

    def reset(self) -> None:
        """Forget reserved slots so the next call proceeds immediately."""
        with self._lock:
            self._next_slot = 0.0


_registry: dict[str, RateLimiter] = {}
_registry_lock = Lock()


def get_rate_limiter(
    source_name: str,
    requests_per_second: float,
    create_if_missing: bool = True,
) -> RateLimiter | None:
    """
    Shared limiter for a service; the first caller's rate wins.

    Returns None if create_if_missing is False and no limiter exists yet.
    """
    with _registry_lock:
        limiter = _registry.get(source_name)
        if limiter is None and create_if_missing:
            limiter = RateLimiter(requests_per_second, source_name=source_name)
            _registry[source_name] = limiter
        return limiter
