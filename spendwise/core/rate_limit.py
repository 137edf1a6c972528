import time

from spendwise.core.cache import TTLCache


class FixedWindowRateLimiter:
    """
    At most ``max_requests`` per client per ``window`` seconds. A client's
    window opens on its first request; counters live in a bounded TTL cache
    so idle clients age out on their own.
    """

    def __init__(self, max_requests: int, window: float, max_clients: int = 10000, clock=time.monotonic):
        self.max_requests = max_requests
        self.window = window
        self._counters = TTLCache(maxsize=max_clients, ttl=window, clock=clock)

    def hit(self, client_key: str) -> tuple:
        """Count one request. Returns (allowed, remaining, seconds until reset)."""
        count, reset_in = self._counters.update(client_key, lambda n: n + 1, 0)
        remaining = max(0, self.max_requests - count)
        return count <= self.max_requests, remaining, max(0, int(reset_in + 0.999))

    def reset(self) -> None:
        self._counters.clear()
