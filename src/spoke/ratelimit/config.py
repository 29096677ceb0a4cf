from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from ..rate_class import RateClass

DEFAULT_DRIVER_CREATION_DELAY = 1_000.0  # 1 request per second
DEFAULT_BATCH_IMPORT_STOPS_DELAY = (60 * 1_000) / 10  # 10 requests per minute
DEFAULT_BATCH_IMPORT_DRIVERS_DELAY = (60 * 1_000) / 2  # 2 requests per minute
DEFAULT_PLAN_OPTIMIZATION_DELAY = (60 * 1_000) / 3  # 3 requests per minute
DEFAULT_WRITE_REQUEST_DELAY = 1_000 / 5  # 5 requests per second
DEFAULT_READ_REQUEST_DELAY = 1_000 / 10  # 10 requests per second


class RateLimitDelays(BaseModel):
    """Minimum delay between two grants of the same rate class, in milliseconds.

    A zero or negative delay lets requests of that class through immediately.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    driver_creation_delay: float = Field(default=DEFAULT_DRIVER_CREATION_DELAY)
    batch_import_stops_delay: float = Field(default=DEFAULT_BATCH_IMPORT_STOPS_DELAY)
    batch_import_drivers_delay: float = Field(
        default=DEFAULT_BATCH_IMPORT_DRIVERS_DELAY
    )
    plan_optimization_delay: float = Field(default=DEFAULT_PLAN_OPTIMIZATION_DELAY)
    write_request_delay: float = Field(default=DEFAULT_WRITE_REQUEST_DELAY)
    read_request_delay: float = Field(default=DEFAULT_READ_REQUEST_DELAY)

    def delay_for(self, rate_class: RateClass) -> float:
        """Return the delay of a rate class in milliseconds, never below zero.

        Raises
        ------
        ValueError
            If the rate class is not throttled.
        """
        match rate_class:
            case RateClass.DRIVER_CREATION:
                delay = self.driver_creation_delay
            case RateClass.BATCH_IMPORT_STOPS:
                delay = self.batch_import_stops_delay
            case RateClass.BATCH_IMPORT_DRIVERS:
                delay = self.batch_import_drivers_delay
            case RateClass.PLAN_OPTIMIZATION:
                delay = self.plan_optimization_delay
            case RateClass.WRITE:
                delay = self.write_request_delay
            case RateClass.READ:
                delay = self.read_request_delay
            case _:
                raise ValueError(f"Rate class '{rate_class}' has no delay")

        return max(0.0, delay)
