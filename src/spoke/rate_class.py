from enum import StrEnum


class RateClass(StrEnum):
    """Request categories, each with its own minimum spacing between requests.

    Members are declared in priority order (highest first): when several rules
    could match a request, the one for the earliest class wins.
    """

    DRIVER_CREATION = "driver_creation"
    BATCH_IMPORT_STOPS = "batch_import_stops"
    BATCH_IMPORT_DRIVERS = "batch_import_drivers"
    PLAN_OPTIMIZATION = "plan_optimization"
    WRITE = "write"
    READ = "read"
    UNCLASSIFIED = "unclassified"

    @property
    def is_limited(self) -> bool:
        return self is not RateClass.UNCLASSIFIED


LIMITED_RATE_CLASSES: tuple[RateClass, ...] = tuple(
    rate_class for rate_class in RateClass if rate_class.is_limited
)
