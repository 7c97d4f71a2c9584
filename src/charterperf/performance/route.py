"""Route inputs: the caller's request and the resolved leg geometry."""

from dataclasses import dataclass

from charterperf.airports.database import Airport
from charterperf.airports.resolver import AirportResolution
from charterperf.performance.capability import validate_passengers


@dataclass(frozen=True)
class RouteRequest:
    """One route evaluation request.

    Attributes:
        departure: Departure identifier ("KTEB", "TEB - Teterboro, NJ") or Airport
        arrival: Arrival identifier or Airport
        passengers: Passenger count, >= 1

    Raises:
        InvalidInputError: If passengers is not a positive integer.
    """

    departure: str | Airport
    arrival: str | Airport
    passengers: int

    def __post_init__(self) -> None:
        validate_passengers(self.passengers)


@dataclass(frozen=True)
class RouteLeg:
    """Resolved nonstop leg shared by every aircraft evaluated on it.

    Attributes:
        departure: Departure resolution
        arrival: Arrival resolution
        distance_nm: Great-circle distance, whole NM
        wind_component_kts: Prevailing-wind component along the route
        warnings: Data-quality notes gathered while resolving the leg
    """

    departure: AirportResolution
    arrival: AirportResolution
    distance_nm: int
    wind_component_kts: float
    warnings: tuple[str, ...] = ()

    @property
    def low_confidence(self) -> bool:
        """True when an airport was defaulted or runway data is missing."""
        return bool(self.warnings) or self.departure.is_fallback or self.arrival.is_fallback
