import time
from stacks.configs import RATE_LIMIT_MAX, RATE_LIMIT_WINDOW


class RateLimiter:
    """Sliding window request counter, kept in memory per process."""

    def __init__(self, limit: int = RATE_LIMIT_MAX, window_seconds: int = RATE_LIMIT_WINDOW):
        self.limit = limit
        self.window_seconds = window_seconds
        self._attempts = {}
        self._last_sweep = time.time()

    def _recent(self, key: str, now: float) -> list:
        return [ts for ts in self._attempts.get(key, []) if now - ts < self.window_seconds]

    def is_rate_limited(self, key: str) -> bool:
        """Records a request for `key` and returns True if the key has
        already used up its allowance within the window.
        """
        now = time.time()
        if now - self._last_sweep >= self.window_seconds:
            self.sweep(now)
        attempts = self._recent(key, now)
        if len(attempts) >= self.limit:
            self._attempts[key] = attempts
            return True
        self._attempts[key] = attempts + [now]
        return False

    def sweep(self, now: float = None):
        """Forgets clients with no request inside the window."""
        now = time.time() if now is None else now
        self._last_sweep = now
        for key in list(self._attempts):
            if not self._recent(key, now):
                del self._attempts[key]

    def reset(self):
        self._attempts.clear()
        self._last_sweep = time.time()
