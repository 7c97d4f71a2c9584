"""Fleet feasibility aggregation.

Runs the capability engine over a whole catalog for one leg, attaches
flight time and cost to every aircraft type, and derives the category
recommendation: the cheapest capable category first, then every larger
capable one. Ultra Long Range aircraft stay in the capable list but are
never part of the recommendation set.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from charterperf.airports.resolver import AirportResolution
from charterperf.core.logging_system import get_logger
from charterperf.fleet.aircraft_type import AircraftCategory, AircraftType, validate_catalog
from charterperf.performance.capability import CapabilityEngine, CapabilityResult, validate_passengers
from charterperf.performance.estimator import CostRange, cost_range, format_hours
from charterperf.performance.provider import LOCAL_SOURCE, PerformanceProvider
from charterperf.performance.route import RouteLeg

logger = get_logger(__name__)

CAPACITY_ONLY_CATEGORIES = frozenset({AircraftCategory.ULTRA_LONG_RANGE})


class ReportStatus(Enum):
    """Overall outcome of a fleet evaluation."""

    CAPABLE = "capable"
    ULTRA_LONG_RANGE_ONLY = "ultra_long_range_only"
    NO_NONSTOP_AIRCRAFT = "no_nonstop_aircraft"


@dataclass(frozen=True)
class AircraftAssessment:
    """One catalog entry evaluated on the leg.

    Attributes:
        capability: Capability engine result
        flight_time: Flight time as "Hh MMm"
        cost: Estimated cost band
        source: Origin of the leg estimate ("local" or a provider tag)
    """

    capability: CapabilityResult
    flight_time: str
    cost: CostRange
    source: str = LOCAL_SOURCE

    @property
    def aircraft(self) -> AircraftType:
        return self.capability.aircraft

    @property
    def feasible(self) -> bool:
        return self.capability.feasible


@dataclass(frozen=True)
class FleetFeasibilityReport:
    """Feasibility of a whole catalog on one leg.

    Attributes:
        leg: Resolved leg
        passengers: Passenger count
        assessments: Every catalog entry, in category order
        capable: Feasible assessments, in category order
        recommended_categories: Capable categories from the cheapest upward,
            Ultra Long Range excluded
        status: Overall outcome
    """

    leg: RouteLeg
    passengers: int
    assessments: tuple[AircraftAssessment, ...]
    capable: tuple[AircraftAssessment, ...]
    recommended_categories: tuple[AircraftCategory, ...]
    status: ReportStatus

    @property
    def departure(self) -> AirportResolution:
        return self.leg.departure

    @property
    def arrival(self) -> AirportResolution:
        return self.leg.arrival

    @property
    def distance_nm(self) -> int:
        return self.leg.distance_nm

    @property
    def wind_component_kts(self) -> float:
        return self.leg.wind_component_kts

    @property
    def minimum_category(self) -> AircraftCategory | None:
        """Cheapest recommended category, None when nothing qualifies."""
        return self.recommended_categories[0] if self.recommended_categories else None

    @property
    def warnings(self) -> tuple[str, ...]:
        return self.leg.warnings

    @property
    def low_confidence(self) -> bool:
        return self.leg.low_confidence

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view for UI, export and pricing consumers."""
        return {
            "departure": _resolution_dict(self.leg.departure),
            "arrival": _resolution_dict(self.leg.arrival),
            "passengers": self.passengers,
            "distance_nm": self.leg.distance_nm,
            "wind_component_kts": round(self.leg.wind_component_kts, 1),
            "status": self.status.value,
            "low_confidence": self.low_confidence,
            "warnings": list(self.warnings),
            "minimum_category": self.minimum_category.label if self.minimum_category else None,
            "recommended_categories": [c.label for c in self.recommended_categories],
            "aircraft": [_assessment_dict(a) for a in self.assessments],
        }


def aggregate(
    catalog: Iterable[AircraftType],
    leg: RouteLeg,
    passengers: int,
    engine: CapabilityEngine | None = None,
    provider: PerformanceProvider | None = None,
) -> FleetFeasibilityReport:
    """Evaluate every aircraft type of a catalog on one leg.

    Args:
        catalog: Aircraft types to evaluate; may be empty
        leg: Resolved leg
        passengers: Passenger count, >= 1
        engine: Capability engine (default: crew inside empty weight)
        provider: Optional leg estimate provider consulted per aircraft

    Returns:
        FleetFeasibilityReport. An empty capable set is reported with
        status NO_NONSTOP_AIRCRAFT, never raised.

    Raises:
        InvalidInputError: If the catalog or passenger count is malformed.
    """
    catalog = list(catalog)
    validate_catalog(catalog)
    validate_passengers(passengers)
    engine = engine or CapabilityEngine()

    ordered = sorted(catalog, key=lambda aircraft: aircraft.category.rank)
    assessments = tuple(
        _assess(aircraft, leg, passengers, engine, provider) for aircraft in ordered
    )
    capable = tuple(a for a in assessments if a.feasible)

    recommended: list[AircraftCategory] = []
    for assessment in capable:
        category = assessment.aircraft.category
        if category not in CAPACITY_ONLY_CATEGORIES and category not in recommended:
            recommended.append(category)

    if recommended:
        status = ReportStatus.CAPABLE
    elif capable:
        status = ReportStatus.ULTRA_LONG_RANGE_ONLY
    else:
        status = ReportStatus.NO_NONSTOP_AIRCRAFT

    logger.info(
        "%s -> %s, %d NM, %d pax: %d/%d aircraft capable (%s)",
        leg.departure.airport.code,
        leg.arrival.airport.code,
        leg.distance_nm,
        passengers,
        len(capable),
        len(assessments),
        status.value,
    )

    return FleetFeasibilityReport(
        leg=leg,
        passengers=passengers,
        assessments=assessments,
        capable=capable,
        recommended_categories=tuple(recommended),
        status=status,
    )


def _assess(
    aircraft: AircraftType,
    leg: RouteLeg,
    passengers: int,
    engine: CapabilityEngine,
    provider: PerformanceProvider | None,
) -> AircraftAssessment:
    distance_nm: float = leg.distance_nm
    flight_time_override = None
    source = LOCAL_SOURCE

    if provider is not None:
        estimate = provider.estimate_leg(
            aircraft,
            leg.departure.airport,
            leg.arrival.airport,
            leg.distance_nm,
            leg.wind_component_kts,
        )
        if estimate is not None:
            distance_nm = estimate.distance_nm
            flight_time_override = estimate.flight_time_hours
            source = estimate.source

    capability = engine.evaluate(
        aircraft,
        distance_nm,
        passengers,
        leg.wind_component_kts,
        departure_runway_ft=leg.departure.airport.runway_length_ft,
        arrival_runway_ft=leg.arrival.airport.runway_length_ft,
        flight_time_hours=flight_time_override,
    )

    return AircraftAssessment(
        capability=capability,
        flight_time=format_hours(capability.flight_time_hours),
        cost=cost_range(capability.flight_time_hours, aircraft.hourly_rate_usd),
        source=source,
    )


def _resolution_dict(resolution: AirportResolution) -> dict[str, Any]:
    airport = resolution.airport
    return {
        "query": resolution.query,
        "code": airport.code,
        "name": airport.name,
        "city": airport.city,
        "latitude": airport.latitude,
        "longitude": airport.longitude,
        "runway_length_ft": airport.runway_length_ft,
        "status": resolution.status.value,
        "message": resolution.message,
    }


def _assessment_dict(assessment: AircraftAssessment) -> dict[str, Any]:
    result = assessment.capability
    return {
        "name": result.aircraft.name,
        "category": result.aircraft.category.label,
        "feasible": result.feasible,
        "limiting_factor": result.limiting_factor.value if result.limiting_factor else None,
        "flight_time": assessment.flight_time,
        "flight_time_hours": round(result.flight_time_hours, 3),
        "cost_min_usd": assessment.cost.min,
        "cost_max_usd": assessment.cost.max,
        "source": assessment.source,
        "weights_lbs": {
            "passengers": result.passenger_weight_lbs,
            "pilots": result.pilot_weight_lbs,
            "payload": result.payload_weight_lbs,
            "fuel_required": round(result.fuel_required_lbs),
            "takeoff": round(result.takeoff_weight_lbs),
        },
        "required_runway_ft": round(result.required_runway_ft),
        "adjusted_range_nm": round(result.adjusted_range_nm),
        "margins": {key: round(value) for key, value in result.margins().items()},
        "checks": [
            {"name": check.name, "passed": check.passed, "detail": check.detail}
            for check in result.checks
        ],
    }
