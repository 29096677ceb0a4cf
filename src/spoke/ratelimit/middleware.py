from typing import Any, ClassVar

import httpx
import logfire_api as logfire
from pydantic import BaseModel, ConfigDict, Field

from ..config import SPOKE_BASE_PATH
from ..rate_class import RateClass
from ..routing import RequestClassifier
from .config import RateLimitDelays
from .scheduler import RequestScheduler


class RateLimitMiddleware(BaseModel):
    """Delays outgoing requests according to their rate class.

    The middleware only waits: it never alters the request, nor looks at the
    response. Install it as an httpx request event hook, `on_request` for
    ``httpx.AsyncClient`` and `on_request_blocking` for ``httpx.Client``.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    classifier: RequestClassifier = Field(
        default_factory=lambda: RequestClassifier(base_path=SPOKE_BASE_PATH)
    )
    scheduler: RequestScheduler = Field(default_factory=RequestScheduler)

    @logfire.instrument("rate_limit.on_outgoing_request")
    async def on_outgoing_request(self, method: str, url: str | httpx.URL) -> RateClass:
        """Wait for the request's turn, then return the rate class it was scheduled in."""
        rate_class = self.classifier.classify(method, url)
        await self.scheduler.schedule(rate_class)
        return rate_class

    def on_outgoing_request_blocking(
        self, method: str, url: str | httpx.URL
    ) -> RateClass:
        rate_class = self.classifier.classify(method, url)
        self.scheduler.schedule_blocking(rate_class)
        return rate_class

    async def on_request(self, request: httpx.Request) -> None:
        await self.on_outgoing_request(request.method, request.url)

    def on_request_blocking(self, request: httpx.Request) -> None:
        self.on_outgoing_request_blocking(request.method, request.url)


def create_rate_limit_middleware(
    delays: RateLimitDelays | None = None,
    *,
    base_path: str = SPOKE_BASE_PATH,
    **delay_overrides: Any,
) -> RateLimitMiddleware:
    """Create a rate limit middleware with its own, independent queues.

    Parameters
    ----------
    delays : RateLimitDelays | None, optional
        The delays to use. Defaults to the documented Spoke API limits.
    base_path : str, optional
        The API base path requests must live under to be throttled.
    **delay_overrides : Any
        Individual delays in milliseconds, e.g. ``driver_creation_delay=500``.
        They take precedence over ``delays``.

    Returns
    -------
    RateLimitMiddleware
        A middleware with a fresh scheduler.

    Examples
    --------
    >>> middleware = create_rate_limit_middleware(read_request_delay=50)
    >>> client = create_spoke_client("api-key", rate_limit=middleware)
    """
    delays = delays or RateLimitDelays()
    if delay_overrides:
        delays = RateLimitDelays.model_validate(
            {**delays.model_dump(), **delay_overrides}
        )

    return RateLimitMiddleware(
        classifier=RequestClassifier(base_path=base_path),
        scheduler=RequestScheduler(delays=delays),
    )
