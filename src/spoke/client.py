from collections.abc import Generator
from typing import Any

import httpx

from .config import SPOKE_SETTINGS
from .ratelimit import RateLimitMiddleware


class BearerAuth(httpx.Auth):
    """Stamps every request with a bearer token authorization header."""

    def __init__(self, api_key: str):
        self._api_key = api_key

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self._api_key}"
        yield request


def _resolve_api_key(api_key: str | None) -> str:
    api_key = api_key or SPOKE_SETTINGS.api_key
    if not api_key:
        raise ValueError(
            "A Spoke API key is required: pass `api_key` or set the SPOKE_API_KEY "
            "environment variable"
        )
    return api_key


def _client_kwargs(
    api_key: str | None, hooks: list[Any], client_kwargs: dict[str, Any]
) -> dict[str, Any]:
    event_hooks = dict(client_kwargs.pop("event_hooks", None) or {})
    event_hooks["request"] = [*event_hooks.get("request", []), *hooks]

    client_kwargs.setdefault("base_url", SPOKE_SETTINGS.base_url)
    return {
        **client_kwargs,
        "auth": BearerAuth(_resolve_api_key(api_key)),
        "event_hooks": event_hooks,
    }


def create_spoke_client(
    api_key: str | None = None,
    *,
    rate_limit: RateLimitMiddleware | None = None,
    **client_kwargs: Any,
) -> httpx.AsyncClient:
    """Create a Spoke REST API client.

    See https://developer.dispatch.spoke.com for endpoints and usage details.

    Parameters
    ----------
    api_key : str | None, optional
        Spoke REST API key. Defaults to the ``SPOKE_API_KEY`` environment variable.
    rate_limit : RateLimitMiddleware | None, optional
        Middleware delaying requests to stay within the API rate limits. Share
        one middleware between clients using the same API key.
    **client_kwargs : Any
        Extra arguments for ``httpx.AsyncClient`` (timeout, transport, ...).

    Returns
    -------
    httpx.AsyncClient
        A client whose base URL is the Spoke API.

    Raises
    ------
    ValueError
        If no API key is available.

    Examples
    --------
    >>> client = create_spoke_client("your_spoke_api_key")
    >>> response = await client.get("/plans")
    """
    hooks = [rate_limit.on_request] if rate_limit is not None else []
    return httpx.AsyncClient(**_client_kwargs(api_key, hooks, client_kwargs))


def create_sync_spoke_client(
    api_key: str | None = None,
    *,
    rate_limit: RateLimitMiddleware | None = None,
    **client_kwargs: Any,
) -> httpx.Client:
    """Create a blocking Spoke REST API client, see `create_spoke_client`."""
    hooks = [rate_limit.on_request_blocking] if rate_limit is not None else []
    return httpx.Client(**_client_kwargs(api_key, hooks, client_kwargs))
