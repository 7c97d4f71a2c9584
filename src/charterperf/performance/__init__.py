"""Aircraft capability, flight time and cost for charter legs.

This package provides:
- The capability engine (weight, fuel, payload, range and runway checks)
- Flight time formatting and cost bands
- Fleet-wide aggregation with category recommendations
- The provider seam for externally refined leg estimates
"""

from charterperf.performance.capability import (
    CapabilityCheck,
    CapabilityEngine,
    CapabilityResult,
    LimitingFactor,
    evaluate,
)
from charterperf.performance.estimator import (
    CostRange,
    cost_range,
    flight_time_string,
    format_hours,
)
from charterperf.performance.fleet_report import (
    AircraftAssessment,
    FleetFeasibilityReport,
    ReportStatus,
    aggregate,
)
from charterperf.performance.provider import (
    LegEstimate,
    LocalPerformanceProvider,
    PerformanceProvider,
)
from charterperf.performance.route import RouteLeg, RouteRequest

__all__ = [
    "AircraftAssessment",
    "CapabilityCheck",
    "CapabilityEngine",
    "CapabilityResult",
    "CostRange",
    "FleetFeasibilityReport",
    "LegEstimate",
    "LimitingFactor",
    "LocalPerformanceProvider",
    "PerformanceProvider",
    "ReportStatus",
    "RouteLeg",
    "RouteRequest",
    "aggregate",
    "cost_range",
    "evaluate",
    "flight_time_string",
    "format_hours",
]
