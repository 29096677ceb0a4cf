import time
from unittest.mock import patch

import httpx
import pytest
from spoke import (
    SPOKE_BASE_URL,
    BearerAuth,
    RateLimitDelays,
    SpokeSettings,
    create_rate_limit_middleware,
    create_spoke_client,
    create_sync_spoke_client,
)

API_KEY = "test-api-key"


class RecordingHandler:
    def __init__(self, response: httpx.Response | None = None):
        self.requests: list[httpx.Request] = []
        self.sent_at: list[float] = []
        self.response = response or httpx.Response(200, json={})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.sent_at.append(time.monotonic())
        return self.response


async def test_create_spoke_client():
    handler = RecordingHandler()
    async with create_spoke_client(
        API_KEY, transport=httpx.MockTransport(handler)
    ) as client:
        response = await client.get("/plans")

    assert response.status_code == 200
    assert len(handler.requests) == 1
    assert handler.requests[0].headers["Authorization"] == f"Bearer {API_KEY}"
    assert str(handler.requests[0].url) == f"{SPOKE_BASE_URL}/plans"


async def test_api_key_from_settings():
    handler = RecordingHandler()
    with patch("spoke.client.SPOKE_SETTINGS", SpokeSettings(api_key="env-key")):
        client = create_spoke_client(transport=httpx.MockTransport(handler))

    async with client:
        _ = await client.get("/plans")
    assert handler.requests[0].headers["Authorization"] == "Bearer env-key"


def test_missing_api_key_raises():
    with patch("spoke.client.SPOKE_SETTINGS", SpokeSettings(api_key=None)):
        with pytest.raises(ValueError, match="API key is required"):
            _ = create_spoke_client()


async def test_rate_limited_client_spaces_requests(fast_delays: RateLimitDelays):
    handler = RecordingHandler()
    async with create_spoke_client(
        API_KEY,
        rate_limit=create_rate_limit_middleware(fast_delays),
        transport=httpx.MockTransport(handler),
    ) as client:
        start = time.monotonic()
        _ = await client.post("/plans/123/stops:import", json=[])
        _ = await client.post("/unassignedStops:import", json=[])
        _ = await client.request("HEAD", "/plans")

    first, second, head = handler.sent_at
    assert first - start >= 0.06 - 0.005
    assert second - first >= 0.06 - 0.005
    assert head - second < 0.02


async def test_responses_and_errors_pass_through(fast_delays: RateLimitDelays):
    handler = RecordingHandler(httpx.Response(429, json={"error": "slow down"}))
    async with create_spoke_client(
        API_KEY,
        rate_limit=create_rate_limit_middleware(fast_delays),
        transport=httpx.MockTransport(handler),
    ) as client:
        response = await client.get("/plans")
        assert response.status_code == 429
        assert response.json() == {"error": "slow down"}

    def failing(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    async with create_spoke_client(
        API_KEY,
        rate_limit=create_rate_limit_middleware(fast_delays),
        transport=httpx.MockTransport(failing),
    ) as client:
        with pytest.raises(httpx.ConnectError):
            _ = await client.get("/plans")


async def test_user_event_hooks_are_kept(fast_delays: RateLimitDelays):
    seen: list[str] = []

    async def hook(request: httpx.Request) -> None:
        seen.append(request.url.path)

    async with create_spoke_client(
        API_KEY,
        rate_limit=create_rate_limit_middleware(fast_delays),
        event_hooks={"request": [hook]},
        transport=httpx.MockTransport(RecordingHandler()),
    ) as client:
        _ = await client.get("/drivers")

    assert seen == ["/public/v0.2b/drivers"]


def test_create_sync_spoke_client(fast_delays: RateLimitDelays):
    handler = RecordingHandler()
    with create_sync_spoke_client(
        API_KEY,
        rate_limit=create_rate_limit_middleware(fast_delays),
        transport=httpx.MockTransport(handler),
    ) as client:
        start = time.monotonic()
        _ = client.post("/drivers", json={"name": "Driver"})

    assert handler.sent_at[0] - start >= 0.05 - 0.005
    assert handler.requests[0].headers["Authorization"] == f"Bearer {API_KEY}"


def test_bearer_auth():
    request = httpx.Request("GET", f"{SPOKE_BASE_URL}/plans")
    flow = BearerAuth(API_KEY).auth_flow(request)
    assert next(flow).headers["Authorization"] == f"Bearer {API_KEY}"
