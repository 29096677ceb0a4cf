"""Per rate class serialized delay scheduler."""

import asyncio
import threading
import time
from typing import Any, ClassVar, override

import logfire_api as logfire
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from ..rate_class import LIMITED_RATE_CLASSES, RateClass
from .config import RateLimitDelays


class _RateClassState:
    """Internal state for one rate class: lock and time of the latest reserved grant."""

    lock: threading.Lock
    next_grant_time: float

    def __init__(self):
        self.lock = threading.Lock()
        # The tail starts out as already completed.
        self.next_grant_time = float("-inf")

    def reserve(self, delay: float) -> float:
        """Reserve the next grant and return how long the caller must wait, in seconds.

        The grant lands ``delay`` seconds after the later of the previous grant
        and the current time, so even the first reservation waits the full delay.
        """
        with self.lock:
            now = time.monotonic()
            grant_time = max(self.next_grant_time, now) + delay
            self.next_grant_time = grant_time

        return grant_time - now


class RequestScheduler(BaseModel):
    """Serializes requests of each rate class behind that class's delay.

    Grants within a class are issued in call order, each at least the class's
    delay after the previous one. Classes never wait on each other. A caller
    that is cancelled while waiting keeps its slot, so later callers are not
    granted any earlier.

    The reservation is guarded by a ``threading.Lock`` and holds no await, so
    the same scheduler is safe to share between asyncio tasks and threads.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    delays: RateLimitDelays = Field(default_factory=RateLimitDelays)

    _states: dict[RateClass, _RateClassState] = PrivateAttr()

    @override
    def model_post_init(self, context: Any, /) -> None:
        self._states = {
            rate_class: _RateClassState() for rate_class in LIMITED_RATE_CLASSES
        }
        super().model_post_init(context)

    def _reserve(self, rate_class: RateClass) -> float | None:
        if not rate_class.is_limited:
            return None

        delay = self.delays.delay_for(rate_class) / 1_000
        return self._states[rate_class].reserve(delay)

    async def schedule(self, rate_class: RateClass) -> None:
        """Wait until the caller's turn in its rate class has come.

        ``RateClass.UNCLASSIFIED`` returns immediately.
        """
        wait_time = self._reserve(rate_class)
        if wait_time is None:
            return

        if wait_time > 0:
            await asyncio.sleep(wait_time)

        logfire.debug("rate_limit.granted", rate_class=rate_class, waited=wait_time)

    def schedule_blocking(self, rate_class: RateClass) -> None:
        """Blocking variant of `schedule`, for synchronous clients and threads."""
        wait_time = self._reserve(rate_class)
        if wait_time is None:
            return

        if wait_time > 0:
            time.sleep(wait_time)

        logfire.debug("rate_limit.granted", rate_class=rate_class, waited=wait_time)

    def __deepcopy__(self, memo: dict[int, Any] | None = None) -> "RequestScheduler":
        # The scheduler is a shared resource, copies must keep the same queues.
        return self
