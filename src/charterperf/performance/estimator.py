"""Flight-time formatting and charter cost estimation."""

import math
from dataclasses import dataclass

from charterperf.core.errors import InvalidInputError
from charterperf.navigation.great_circle import round_half_up

COST_MARGIN = 0.10


@dataclass(frozen=True)
class CostRange:
    """Estimated charter cost band in whole dollars.

    Attributes:
        min: Lower bound (USD)
        max: Upper bound (USD)
    """

    min: int
    max: int

    def __str__(self) -> str:
        return f"${self.min:,} - ${self.max:,}"


def format_hours(hours: float) -> str:
    """Render a duration as "Hh MMm".

    Minutes are rounded over the whole duration before splitting, so a
    value that rounds to 60 minutes carries into the hour.

    Examples:
        >>> format_hours(2.999999)
        '3h 00m'
        >>> format_hours(1.5)
        '1h 30m'
    """
    if hours < 0:
        raise InvalidInputError(f"Duration must be >= 0, got {hours}")
    whole_hours, minutes = divmod(round_half_up(hours * 60), 60)
    return f"{whole_hours}h {minutes:02d}m"


def flight_time_hours(distance_nm: float, effective_speed_kts: float) -> float:
    """Flight time in hours at a given ground speed.

    Raises:
        InvalidInputError: If the ground speed is not positive.
    """
    if effective_speed_kts <= 0:
        raise InvalidInputError(f"Ground speed must be > 0, got {effective_speed_kts}")
    return distance_nm / effective_speed_kts


def flight_time_string(distance_nm: float, effective_speed_kts: float) -> str:
    """Flight time for a leg as "Hh MMm".

    Examples:
        >>> flight_time_string(900, 450)
        '2h 00m'
    """
    return format_hours(flight_time_hours(distance_nm, effective_speed_kts))


def cost_range(flight_time_hours: float, hourly_rate_usd: float) -> CostRange:
    """Charter cost band: flight time x hourly rate, plus or minus 10%.

    Each bound is rounded to the nearest dollar. For very small amounts,
    where rounding could cross the base cost, the bounds are widened to
    floor/ceil of the base so that min <= base <= max always holds.

    Examples:
        >>> cost_range(2.0, 5000)
        CostRange(min=9000, max=11000)
    """
    if flight_time_hours < 0 or hourly_rate_usd < 0:
        raise InvalidInputError("Flight time and hourly rate must be >= 0")

    base = flight_time_hours * hourly_rate_usd
    low = min(round_half_up(base * (1 - COST_MARGIN)), math.floor(base))
    high = max(round_half_up(base * (1 + COST_MARGIN)), math.ceil(base))
    return CostRange(min=low, max=high)
