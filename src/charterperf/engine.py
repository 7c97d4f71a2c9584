"""Route engine façade.

Resolves both airports, computes the great-circle leg and its wind
component, then hands the leg to the fleet aggregator.

The module-level evaluate_route() shares one lazily built default engine
held in a module global.

Typical usage:
    from charterperf.engine import RouteEngine
    from charterperf.fleet import default_catalog

    engine = RouteEngine()
    report = engine.evaluate_route("JFK", "LAX", 4, default_catalog())
    print(report.minimum_category)
"""

import concurrent.futures
import threading
from collections.abc import Iterable

from charterperf.airports.database import Airport, AirportDatabase
from charterperf.airports.resolver import AirportResolution, AirportResolver
from charterperf.core.logging_system import get_logger
from charterperf.core.settings import EngineSettings
from charterperf.fleet.aircraft_type import AircraftType
from charterperf.navigation.great_circle import distance_nm
from charterperf.performance.capability import CapabilityEngine, validate_passengers
from charterperf.performance.fleet_report import FleetFeasibilityReport, aggregate
from charterperf.performance.provider import PerformanceProvider
from charterperf.performance.route import RouteLeg, RouteRequest

logger = get_logger(__name__)


class RouteEngine:
    """Evaluate charter routes against an aircraft catalog.

    The engine holds no per-route state; one instance can serve many
    threads at once.
    """

    def __init__(
        self,
        database: AirportDatabase | None = None,
        settings: EngineSettings | None = None,
        provider: PerformanceProvider | None = None,
    ) -> None:
        """Initialize route engine.

        Args:
            database: Airport table (default: settings.airport_data_file, or
                the bundled table)
            settings: Engine settings (default: EngineSettings())
            provider: Optional leg estimate provider

        Raises:
            FileNotFoundError: If a configured airport data file is missing.
            ValueError: If the default airport is not in the table.
        """
        self.settings = settings or EngineSettings()

        if database is None:
            if self.settings.airport_data_file is not None:
                database = AirportDatabase()
                database.load_from_csv(self.settings.airport_data_file)
            else:
                database = AirportDatabase.load_default()

        self.database = database
        self.resolver = AirportResolver(
            database,
            policy=self.settings.fallback_policy,
            default_code=self.settings.default_airport_code,
        )
        self.capability_engine = CapabilityEngine(
            crew_in_empty_weight=self.settings.crew_in_empty_weight
        )
        self.provider = provider

    def resolve_leg(self, departure: str | Airport, arrival: str | Airport) -> RouteLeg:
        """Resolve both endpoints and compute distance and wind.

        Raises:
            UnresolvableAirportError: Under the strict policy only.
        """
        dep = self.resolver.resolve(departure)
        arr = self.resolver.resolve(arrival)

        a = dep.airport.coordinate
        b = arr.airport.coordinate
        warnings = _leg_warnings(dep, "departure") + _leg_warnings(arr, "arrival")

        return RouteLeg(
            departure=dep,
            arrival=arr,
            distance_nm=distance_nm(a, b),
            wind_component_kts=self.settings.wind.component_kts(a, b),
            warnings=tuple(warnings),
        )

    def evaluate_route(
        self,
        departure: str | Airport,
        arrival: str | Airport,
        passengers: int,
        catalog: list[AircraftType],
    ) -> FleetFeasibilityReport:
        """Evaluate one route against the whole catalog.

        Args:
            departure: Departure identifier or Airport
            arrival: Arrival identifier or Airport
            passengers: Passenger count, >= 1
            catalog: Aircraft types to evaluate

        Returns:
            FleetFeasibilityReport

        Raises:
            InvalidInputError: On a bad passenger count or malformed catalog.
            UnresolvableAirportError: Under the strict policy only.
        """
        validate_passengers(passengers)
        leg = self.resolve_leg(departure, arrival)
        return aggregate(
            catalog,
            leg,
            passengers,
            engine=self.capability_engine,
            provider=self.provider,
        )

    def evaluate_routes(
        self,
        requests: Iterable[RouteRequest],
        catalog: Iterable[AircraftType],
        max_workers: int | None = None,
    ) -> list[FleetFeasibilityReport]:
        """Evaluate independent routes on a thread pool.

        Reports come back in request order. The first exception raised by
        any route propagates once all submitted work has finished.

        Args:
            requests: Routes to evaluate
            catalog: Aircraft types shared by every route
            max_workers: Pool size (default: settings.max_workers)
        """
        requests = list(requests)
        catalog = list(catalog)
        if not requests:
            return []

        workers = max_workers or self.settings.max_workers
        logger.info("Evaluating %d routes with %d workers", len(requests), workers)

        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(
                    self.evaluate_route,
                    request.departure,
                    request.arrival,
                    request.passengers,
                    catalog,
                )
                for request in requests
            ]
            return [future.result() for future in futures]


def _leg_warnings(resolution: AirportResolution, role: str) -> list[str]:
    warnings = []
    if resolution.is_fallback:
        warnings.append(f"{role} airport: {resolution.message}")
    if resolution.airport.runway_length_ft is None:
        warnings.append(
            f"{role} airport {resolution.airport.code}: runway length unknown, "
            "assuming 10,000 ft"
        )
        logger.warning("No runway data for %s", resolution.airport.code)
    return warnings


_default_engine: RouteEngine | None = None
_default_engine_lock = threading.Lock()


def get_default_engine() -> RouteEngine:
    """Shared engine built from $CHARTERPERF_CONFIG or the defaults.

    Built once, under a lock, on first use. The engine itself is read-only
    after construction.
    """
    global _default_engine
    with _default_engine_lock:
        if _default_engine is None:
            _default_engine = RouteEngine(settings=EngineSettings.from_environment())
        return _default_engine


def evaluate_route(
    departure: str | Airport,
    arrival: str | Airport,
    passengers: int,
    catalog: list[AircraftType],
) -> FleetFeasibilityReport:
    """Evaluate one route with the shared default engine."""
    return get_default_engine().evaluate_route(departure, arrival, passengers, catalog)
