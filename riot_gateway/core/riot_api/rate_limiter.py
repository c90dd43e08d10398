"""Client-side sliding window rate limiting for the Riot API."""

import asyncio
import threading
import time
from collections import deque
from typing import Callable, Deque, Dict, Tuple

import structlog

logger = structlog.get_logger(__name__)

Clock = Callable[[], float]


class RateWindow:
    """Sliding window of recent request timestamps against a quota."""

    def __init__(
        self,
        quota: int,
        window: float,
        name: str = "window",
        clock: Clock = time.monotonic,
    ):
        """
        Initialize rate window.

        Args:
            quota: Maximum requests admitted within the window
            window: Window length in seconds
            name: Name used in log records
            clock: Monotonic time source in seconds
        """
        if quota <= 0:
            raise ValueError("quota must be positive")
        if window <= 0:
            raise ValueError("window must be positive")
        self.quota = quota
        self.window = window
        self.name = name
        self.clock = clock
        self.timestamps: Deque[float] = deque()
        self.lock = threading.Lock()

    def _prune(self, now: float) -> None:
        while self.timestamps and now - self.timestamps[0] >= self.window:
            self.timestamps.popleft()

    def _has_room(self, now: float) -> bool:
        self._prune(now)
        return len(self.timestamps) < self.quota

    def _retry_after(self, now: float) -> float:
        self._prune(now)
        if not self.timestamps:
            return 0.0
        return max(0.0, self.window - (now - self.timestamps[0]))

    def try_admit(self) -> bool:
        """Record a request and return True if the window has room."""
        with self.lock:
            now = self.clock()
            if self._has_room(now):
                self.timestamps.append(now)
                return True
            return False

    def retry_after(self) -> float:
        """Seconds until the oldest recorded request leaves the window."""
        with self.lock:
            return self._retry_after(self.clock())

    def current_usage(self) -> int:
        """Number of requests currently inside the window."""
        with self.lock:
            self._prune(self.clock())
            return len(self.timestamps)

    def reset(self) -> None:
        """Forget all recorded requests."""
        with self.lock:
            self.timestamps.clear()


class RateLimiter:
    """Burst (per second) and sustained (per window) quotas checked together."""

    def __init__(
        self,
        per_second: int = 20,
        per_window: int = 100,
        window_seconds: float = 120.0,
        clock: Clock = time.monotonic,
    ):
        """
        Initialize rate limiter.

        Args:
            per_second: Burst quota over a one second window
            per_window: Sustained quota over ``window_seconds``
            window_seconds: Length of the sustained window
            clock: Monotonic time source in seconds
        """
        self.burst = RateWindow(per_second, 1.0, name="burst", clock=clock)
        self.sustained = RateWindow(
            per_window, window_seconds, name="sustained", clock=clock
        )
        self.clock = clock
        self.lock = threading.Lock()

    def _try_admit_all(self) -> Tuple[bool, float]:
        """
        Admit against both windows as one step.

        A slot is recorded in both windows or in neither. When denied, returns
        the larger wait among the windows that are full.
        """
        windows = (self.burst, self.sustained)
        with self.lock:
            now = self.clock()
            delay = 0.0
            for window in windows:
                with window.lock:
                    if not window._has_room(now):
                        delay = max(delay, window._retry_after(now))
            if delay > 0:
                return False, delay
            for window in windows:
                with window.lock:
                    window.timestamps.append(now)
            return True, 0.0

    async def wait_if_needed(self) -> None:
        """Wait until both quotas admit one more request, then record it."""
        while True:
            admitted, delay = self._try_admit_all()
            if admitted:
                return
            logger.info(
                "Rate limit reached, waiting",
                wait_time=round(delay, 3),
                burst_usage=self.burst.current_usage(),
                sustained_usage=self.sustained.current_usage(),
            )
            await asyncio.sleep(delay)

    def get_status(self) -> Dict[str, Dict[str, float]]:
        """Get current usage of both windows."""
        return {
            window.name: {
                "used": window.current_usage(),
                "quota": window.quota,
                "window": window.window,
                "retry_after": window.retry_after(),
            }
            for window in (self.burst, self.sustained)
        }

    def reset(self) -> None:
        """Clear both windows."""
        self.burst.reset()
        self.sustained.reset()
