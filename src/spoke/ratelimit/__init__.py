"""Rate limiting for outgoing Spoke API requests.

Provides RateLimitDelays (per class delays), RequestScheduler (per class
serialized queues) and RateLimitMiddleware (httpx request hook).
"""

from .config import RateLimitDelays
from .middleware import RateLimitMiddleware, create_rate_limit_middleware
from .scheduler import RequestScheduler

__all__ = [
    "RateLimitDelays",
    "RateLimitMiddleware",
    "RequestScheduler",
    "create_rate_limit_middleware",
]
