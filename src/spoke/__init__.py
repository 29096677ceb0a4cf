"""Spoke REST API client with rate limiting aware of the API's per route limits.

Outgoing requests are classified by method and route into rate classes, and
requests of the same class are spaced out by that class's delay.
"""

from .client import BearerAuth, create_spoke_client, create_sync_spoke_client
from .config import SPOKE_BASE_PATH, SPOKE_BASE_URL, SPOKE_SETTINGS, SpokeSettings
from .rate_class import RateClass
from .ratelimit import (
    RateLimitDelays,
    RateLimitMiddleware,
    RequestScheduler,
    create_rate_limit_middleware,
)
from .routing import PathTemplate, RequestClassifier, Rule, classify

__all__ = [
    # Client
    "BearerAuth",
    "create_spoke_client",
    "create_sync_spoke_client",
    # Configuration
    "SPOKE_BASE_PATH",
    "SPOKE_BASE_URL",
    "SPOKE_SETTINGS",
    "SpokeSettings",
    # Classification
    "RateClass",
    "PathTemplate",
    "Rule",
    "RequestClassifier",
    "classify",
    # Rate limiting
    "RateLimitDelays",
    "RateLimitMiddleware",
    "RequestScheduler",
    "create_rate_limit_middleware",
]
