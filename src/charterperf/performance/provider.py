"""Leg estimate providers.

The engine computes distance and flight time locally from great-circle
geometry and the prevailing-wind model. A provider backed by an external
routing service can refine those figures per aircraft type; the engine
asks the provider first and falls back to the local estimate when the
provider has no answer.

Providers that talk to the network own their timeouts and cancellation;
the engine neither retries nor catches their exceptions.

Typical usage:
    class RoutingServiceProvider(PerformanceProvider):
        def estimate_leg(self, aircraft, departure, arrival, distance_nm, wind_kts):
            minutes = client.flight_time(departure.code, arrival.code, aircraft.name)
            if minutes is None:
                return None
            return LegEstimate(distance_nm, minutes / 60.0, source="routing-service")

    engine = RouteEngine(provider=RoutingServiceProvider())
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from charterperf.airports.database import Airport
from charterperf.fleet.aircraft_type import AircraftType

LOCAL_SOURCE = "local"


@dataclass(frozen=True)
class LegEstimate:
    """Distance and flight time for one aircraft on one leg.

    Attributes:
        distance_nm: Distance flown (NM)
        flight_time_hours: Flight time (hr), None to derive it from speed and wind
        source: Tag identifying where the estimate came from
    """

    distance_nm: float
    flight_time_hours: float | None = None
    source: str = LOCAL_SOURCE


class PerformanceProvider(ABC):
    """Abstract base class for leg estimate providers."""

    @abstractmethod
    def estimate_leg(
        self,
        aircraft: AircraftType,
        departure: Airport,
        arrival: Airport,
        distance_nm: float,
        wind_kts: float,
    ) -> LegEstimate | None:
        """Estimate one leg for one aircraft type.

        Args:
            aircraft: Aircraft type being evaluated
            departure: Resolved departure airport
            arrival: Resolved arrival airport
            distance_nm: Locally computed great-circle distance (NM)
            wind_kts: Locally computed wind component (kts)

        Returns:
            LegEstimate, or None when the provider cannot refine this leg
        """


class LocalPerformanceProvider(PerformanceProvider):
    """Provider returning the engine's own great-circle estimate."""

    def estimate_leg(
        self,
        aircraft: AircraftType,
        departure: Airport,
        arrival: Airport,
        distance_nm: float,
        wind_kts: float,
    ) -> LegEstimate:
        return LegEstimate(distance_nm=distance_nm)
