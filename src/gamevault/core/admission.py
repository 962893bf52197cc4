# ===== IMPORTS & DEPENDENCIES =====
import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Dict

from gamevault.config import (
    RATE_LIMIT_CAPACITY, RATE_LIMIT_REFILL_PER_SECOND, MAX_IN_FLIGHT, ADMISSION_POLL_INTERVAL
)

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)


# ===== CORE BUSINESS LOGIC =====
class AdmissionPermit:
    """A granted rate-limit token plus concurrency slot. Releasing twice is a no-op."""

    def __init__(self, controller: "AdmissionController"):
        self._controller = controller
        self.released = False

    def release(self) -> None:
        self._controller.release(self)


class AdmissionController:
    """
    Token bucket and in-flight ceiling guarding every upstream call.

    The bucket refills continuously (`elapsed * refill_rate`, capped at
    `capacity`) on each admission check. A caller is admitted only when a whole
    token is available and fewer than `max_in_flight` calls are open; both
    counters change in the same synchronous step, so no lock is needed on a
    single event loop. Waiting callers poll every `poll_interval` seconds, so
    admission order under a burst is not guaranteed to match arrival order.
    Tokens are consumed, not reserved: releasing a permit frees the slot only.
    """

    def __init__(
        self,
        capacity: int = RATE_LIMIT_CAPACITY,
        refill_rate: float = RATE_LIMIT_REFILL_PER_SECOND,
        max_in_flight: int = MAX_IN_FLIGHT,
        poll_interval: float = ADMISSION_POLL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.capacity = capacity
        self.refill_rate = refill_rate
        self.max_in_flight = max_in_flight
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep

        self._tokens = float(capacity)
        self._last_refill = clock()
        self._in_flight = 0
        self._admitted_total = 0
        self._waits_total = 0

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def available_tokens(self) -> float:
        self._refill()
        return self._tokens

    def _refill(self) -> None:
        now = self._clock()
        elapsed = max(0.0, now - self._last_refill)
        self._tokens = min(float(self.capacity), self._tokens + elapsed * self.refill_rate)
        self._last_refill = now

    def try_acquire(self) -> bool:
        """Admits the caller without waiting, if both a token and a slot are free."""
        self._refill()
        if self._tokens >= 1 and self._in_flight < self.max_in_flight:
            self._tokens -= 1
            self._in_flight += 1
            self._admitted_total += 1
            return True
        return False

    async def acquire(self) -> AdmissionPermit:
        """Suspends until a permit is granted."""
        waited = False
        while not self.try_acquire():
            if not waited:
                waited = True
                self._waits_total += 1
                logger.debug(f"[{self.__class__.__name__}] Throttling: tokens={self._tokens:.2f}, in_flight={self._in_flight}")
            await self._sleep(self.poll_interval)
        return AdmissionPermit(self)

    def release(self, permit: AdmissionPermit) -> None:
        if permit.released:
            return
        permit.released = True
        self._in_flight -= 1

    def stats(self) -> Dict[str, Any]:
        return {
            "available_tokens": round(self.available_tokens, 2),
            "capacity": self.capacity,
            "in_flight": self._in_flight,
            "max_in_flight": self.max_in_flight,
            "admitted_total": self._admitted_total,
            "throttled_total": self._waits_total,
        }
