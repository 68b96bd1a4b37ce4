"""Per-client sliding window rate limiter for the /api surface."""

import threading
import time
from collections import deque
from collections.abc import Callable


class RateLimiter:
    """At most ``max_requests`` per ``window_seconds`` for each client key."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._last_sweep = clock()
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.max_requests > 0

    @property
    def tracked_clients(self) -> int:
        return len(self._hits)

    def _prune(self, queue: deque[float], now: float) -> None:
        while queue and now - queue[0] >= self.window_seconds:
            queue.popleft()

    def _sweep(self, now: float) -> None:
        """Forget clients with no hits left inside the window."""
        for client in list(self._hits):
            queue = self._hits[client]
            self._prune(queue, now)
            if not queue:
                del self._hits[client]
        self._last_sweep = now

    def hit(self, client: str) -> tuple[bool, float]:
        """Record a request from ``client``.

        Returns ``(allowed, retry_after_seconds)``. Rejected requests are not
        recorded.
        """
        if not self.enabled:
            return True, 0.0
        now = self._clock()
        with self._lock:
            # At most one full sweep per window keeps the table bounded by
            # the clients seen in roughly the last two windows.
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(now)

            queue = self._hits.get(client)
            if queue is None:
                queue = self._hits[client] = deque()
            else:
                self._prune(queue, now)
            if len(queue) >= self.max_requests:
                return False, self.window_seconds - (now - queue[0])
            queue.append(now)
            return True, 0.0
