import pytest
from spoke import RateLimitDelays, RequestScheduler


@pytest.fixture
def fast_delays() -> RateLimitDelays:
    """Delays short enough to measure in tests, distinct per class."""
    return RateLimitDelays(
        driver_creation_delay=50,
        batch_import_stops_delay=60,
        batch_import_drivers_delay=70,
        plan_optimization_delay=80,
        write_request_delay=30,
        read_request_delay=20,
    )


@pytest.fixture
def scheduler(fast_delays: RateLimitDelays) -> RequestScheduler:
    return RequestScheduler(delays=fast_delays)
