"""Aircraft capability engine.

Decides whether one aircraft type can fly a nonstop leg with a given
passenger load, and reports which constraint fails first.

The model, in order:
    1. Passenger weight = passengers x (180 lbs body + 50 lbs bag); two
       pilots at 180 lbs each are tracked separately.
    2. Flight time = distance / (cruise speed + wind component).
    3. Fuel required = (flight time + 45 min reserve) x fuel burn.
    4. Takeoff weight = empty weight + payload + fuel required.
    5. Required runway = 3000 ft x (takeoff weight / MTOW) ^ 1.1.
    6. Available fuel = min(MTOW - empty weight - payload, fuel capacity).
    7. Adjusted range = max range x available fuel / fuel capacity.
    8. Checks: range, fuel, payload, weight, departure runway, arrival
       runway. The first failure is the limiting factor.

Note:
    This is a planning approximation. The runway power law is empirical and
    the whole model is not a substitute for certified performance charts or
    a weight and balance computation.
"""

from dataclasses import dataclass
from enum import Enum

from charterperf.core.errors import InvalidInputError
from charterperf.core.logging_system import get_logger
from charterperf.fleet.aircraft_type import AircraftType

logger = get_logger(__name__)

PASSENGER_BODY_WEIGHT_LBS = 180.0
PASSENGER_BAG_WEIGHT_LBS = 50.0
PASSENGER_WEIGHT_LBS = PASSENGER_BODY_WEIGHT_LBS + PASSENGER_BAG_WEIGHT_LBS
PILOT_WEIGHT_LBS = 180.0
PILOT_COUNT = 2
RESERVE_FUEL_HOURS = 0.75
RUNWAY_BASELINE_FT = 3000.0
RUNWAY_WEIGHT_EXPONENT = 1.1
RUNWAY_AVAILABILITY_CEILING_FT = 10000.0


class LimitingFactor(Enum):
    """Constraint that makes an aircraft unable to fly the leg."""

    RANGE = "range"
    FUEL = "fuel"
    PAYLOAD = "payload"
    WEIGHT = "weight"
    RUNWAY = "runway"


@dataclass(frozen=True)
class CapabilityCheck:
    """Outcome of one feasibility check.

    Attributes:
        name: Check identifier ("range", "fuel", ..., "departure_runway")
        factor: Limiting factor reported when this check fails
        passed: Whether the constraint is satisfied
        detail: Short human-readable comparison
    """

    name: str
    factor: LimitingFactor
    passed: bool
    detail: str


@dataclass(frozen=True)
class CapabilityResult:
    """Capability of one aircraft type on one leg.

    Attributes:
        aircraft: Evaluated aircraft type
        distance_nm: Leg distance (NM)
        passengers: Passenger count
        wind_component_kts: Along-track wind used (positive = tailwind)
        effective_speed_kts: Cruise speed plus wind (kts)
        flight_time_hours: Flight time (hr)
        passenger_weight_lbs: Passengers and bags (lbs)
        pilot_weight_lbs: Flight crew (lbs)
        total_person_weight_lbs: Passengers, bags and crew (lbs)
        payload_weight_lbs: Subtotal counted against payload, takeoff weight
            and available fuel (lbs)
        fuel_required_lbs: Trip plus reserve fuel (lbs)
        reserve_fuel_lbs: Reserve portion of fuel_required_lbs (lbs)
        takeoff_weight_lbs: Empty weight + payload + fuel (lbs)
        required_runway_ft: Estimated takeoff distance (ft)
        available_fuel_lbs: Fuel that can be carried with this payload (lbs)
        adjusted_range_nm: Range achievable with available fuel (NM)
        departure_runway_ft: Departure runway compared against (ft)
        arrival_runway_ft: Arrival runway compared against (ft)
        checks: All checks in precedence order
        limiting_factor: First failing factor, None when feasible
    """

    aircraft: AircraftType
    distance_nm: float
    passengers: int
    wind_component_kts: float
    effective_speed_kts: float
    flight_time_hours: float
    passenger_weight_lbs: float
    pilot_weight_lbs: float
    total_person_weight_lbs: float
    payload_weight_lbs: float
    fuel_required_lbs: float
    reserve_fuel_lbs: float
    takeoff_weight_lbs: float
    required_runway_ft: float
    available_fuel_lbs: float
    adjusted_range_nm: float
    departure_runway_ft: float
    arrival_runway_ft: float
    checks: tuple[CapabilityCheck, ...]
    limiting_factor: LimitingFactor | None

    @property
    def feasible(self) -> bool:
        return self.limiting_factor is None

    @property
    def failed_checks(self) -> tuple[CapabilityCheck, ...]:
        return tuple(check for check in self.checks if not check.passed)

    @property
    def range_margin_nm(self) -> float:
        return self.adjusted_range_nm - self.distance_nm

    @property
    def fuel_margin_lbs(self) -> float:
        return self.available_fuel_lbs - self.fuel_required_lbs

    @property
    def payload_margin_lbs(self) -> float:
        return self.aircraft.max_payload_lbs - self.payload_weight_lbs

    @property
    def weight_margin_lbs(self) -> float:
        return self.aircraft.max_takeoff_weight_lbs - self.takeoff_weight_lbs

    def margins(self) -> dict[str, float]:
        """Headroom figures for "show the math" style reporting."""
        return {
            "range_nm": self.range_margin_nm,
            "fuel_lbs": self.fuel_margin_lbs,
            "payload_lbs": self.payload_margin_lbs,
            "weight_lbs": self.weight_margin_lbs,
        }


def validate_passengers(passengers: int) -> None:
    """Reject non-integer or non-positive passenger counts.

    Raises:
        InvalidInputError: If passengers is not an integer >= 1.
    """
    if isinstance(passengers, bool) or not isinstance(passengers, int):
        raise InvalidInputError(f"Passenger count must be an integer, got {passengers!r}")
    if passengers < 1:
        raise InvalidInputError(f"Passenger count must be >= 1, got {passengers}")


class CapabilityEngine:
    """Evaluate aircraft capability for a leg.

    Examples:
        >>> engine = CapabilityEngine()
        >>> result = engine.evaluate(heavy_jet, distance_nm=2146, passengers=4, wind_kts=-20)
        >>> result.feasible
        True
        >>> result.margins()["range_nm"]
        3354.0
    """

    def __init__(self, crew_in_empty_weight: bool = True) -> None:
        """Initialize capability engine.

        Args:
            crew_in_empty_weight: If True, pilots are part of the aircraft's
                empty weight and the payload is passengers and bags only. If
                False, pilot weight is added to the payload. Either way the
                same subtotal is used for the payload check, takeoff weight and
                available fuel.
        """
        self.crew_in_empty_weight = crew_in_empty_weight

    def evaluate(
        self,
        aircraft: AircraftType,
        distance_nm: float,
        passengers: int,
        wind_kts: float = 0.0,
        departure_runway_ft: float | None = None,
        arrival_runway_ft: float | None = None,
        flight_time_hours: float | None = None,
    ) -> CapabilityResult:
        """Evaluate one aircraft type on one leg.

        Args:
            aircraft: Aircraft type (validated here)
            distance_nm: Leg distance (NM), 0 for a same-airport trip
            passengers: Passenger count, >= 1
            wind_kts: Along-track wind component (positive = tailwind)
            departure_runway_ft: Departure runway length, None if unknown
            arrival_runway_ft: Arrival runway length, None if unknown
            flight_time_hours: Flight time supplied by an external estimate;
                None computes it from distance and wind

        Returns:
            CapabilityResult with all figures, checks and margins

        Raises:
            InvalidInputError: On malformed aircraft data, bad passenger
                count, negative distance or non-positive ground speed

        Note:
            An unknown runway length is treated as the 10,000 ft
            availability ceiling.
        """
        aircraft.validate()
        validate_passengers(passengers)
        if distance_nm < 0:
            raise InvalidInputError(f"Distance must be >= 0, got {distance_nm}")

        # Weights
        passenger_weight = passengers * PASSENGER_WEIGHT_LBS
        pilot_weight = PILOT_COUNT * PILOT_WEIGHT_LBS
        total_person_weight = passenger_weight + pilot_weight
        payload_weight = passenger_weight if self.crew_in_empty_weight else total_person_weight

        # Time and fuel
        effective_speed = aircraft.cruise_speed_kts + wind_kts
        if flight_time_hours is None:
            if effective_speed <= 0:
                raise InvalidInputError(
                    f"{aircraft.name}: ground speed {effective_speed:.0f} kts is not positive"
                )
            flight_time_hours = distance_nm / effective_speed
        elif flight_time_hours < 0:
            raise InvalidInputError(f"Flight time must be >= 0, got {flight_time_hours}")

        fuel_required = (flight_time_hours + RESERVE_FUEL_HOURS) * aircraft.fuel_burn_lbs_per_hour
        reserve_fuel = RESERVE_FUEL_HOURS * aircraft.fuel_burn_lbs_per_hour

        # Takeoff weight and runway
        takeoff_weight = aircraft.empty_weight_lbs + payload_weight + fuel_required
        weight_ratio = takeoff_weight / aircraft.max_takeoff_weight_lbs
        required_runway = RUNWAY_BASELINE_FT * weight_ratio**RUNWAY_WEIGHT_EXPONENT

        # Fuel that fits under MTOW with this payload
        available_fuel = max(
            0.0,
            min(
                aircraft.max_takeoff_weight_lbs - aircraft.empty_weight_lbs - payload_weight,
                aircraft.fuel_capacity_lbs,
            ),
        )
        adjusted_range = aircraft.max_range_nm * (available_fuel / aircraft.fuel_capacity_lbs)

        departure_runway = (
            RUNWAY_AVAILABILITY_CEILING_FT if departure_runway_ft is None else departure_runway_ft
        )
        arrival_runway = (
            RUNWAY_AVAILABILITY_CEILING_FT if arrival_runway_ft is None else arrival_runway_ft
        )
        takeoff_limit = min(departure_runway, RUNWAY_AVAILABILITY_CEILING_FT)

        seats_ok = aircraft.max_passengers is None or passengers <= aircraft.max_passengers
        seats_detail = (
            "" if aircraft.max_passengers is None else f", {passengers}/{aircraft.max_passengers} seats"
        )

        checks = (
            CapabilityCheck(
                "range",
                LimitingFactor.RANGE,
                adjusted_range >= distance_nm,
                f"range {adjusted_range:.0f} NM vs {distance_nm:.0f} NM",
            ),
            CapabilityCheck(
                "fuel",
                LimitingFactor.FUEL,
                fuel_required <= available_fuel,
                f"fuel {fuel_required:.0f} lbs needed vs {available_fuel:.0f} lbs available",
            ),
            CapabilityCheck(
                "payload",
                LimitingFactor.PAYLOAD,
                payload_weight <= aircraft.max_payload_lbs and seats_ok,
                f"payload {payload_weight:.0f} lbs vs {aircraft.max_payload_lbs:.0f} lbs{seats_detail}",
            ),
            CapabilityCheck(
                "weight",
                LimitingFactor.WEIGHT,
                takeoff_weight <= aircraft.max_takeoff_weight_lbs,
                f"takeoff {takeoff_weight:.0f} lbs vs MTOW {aircraft.max_takeoff_weight_lbs:.0f} lbs",
            ),
            CapabilityCheck(
                "departure_runway",
                LimitingFactor.RUNWAY,
                departure_runway >= aircraft.min_runway_ft and required_runway <= takeoff_limit,
                f"departure runway {departure_runway:.0f} ft vs {aircraft.min_runway_ft:.0f} ft "
                f"(takeoff distance {required_runway:.0f} ft)",
            ),
            CapabilityCheck(
                "arrival_runway",
                LimitingFactor.RUNWAY,
                arrival_runway >= aircraft.min_runway_ft,
                f"arrival runway {arrival_runway:.0f} ft vs {aircraft.min_runway_ft:.0f} ft",
            ),
        )

        limiting_factor = next((check.factor for check in checks if not check.passed), None)

        result = CapabilityResult(
            aircraft=aircraft,
            distance_nm=distance_nm,
            passengers=passengers,
            wind_component_kts=wind_kts,
            effective_speed_kts=effective_speed,
            flight_time_hours=flight_time_hours,
            passenger_weight_lbs=passenger_weight,
            pilot_weight_lbs=pilot_weight,
            total_person_weight_lbs=total_person_weight,
            payload_weight_lbs=payload_weight,
            fuel_required_lbs=fuel_required,
            reserve_fuel_lbs=reserve_fuel,
            takeoff_weight_lbs=takeoff_weight,
            required_runway_ft=required_runway,
            available_fuel_lbs=available_fuel,
            adjusted_range_nm=adjusted_range,
            departure_runway_ft=departure_runway,
            arrival_runway_ft=arrival_runway,
            checks=checks,
            limiting_factor=limiting_factor,
        )

        logger.debug(
            "%s: %.0f NM, %d pax, TOW=%.0f lbs, fuel=%.0f lbs, range=%.0f NM -> %s",
            aircraft.name,
            distance_nm,
            passengers,
            takeoff_weight,
            fuel_required,
            adjusted_range,
            "feasible" if result.feasible else limiting_factor.value,
        )

        return result


def evaluate(
    aircraft: AircraftType,
    distance_nm: float,
    passengers: int,
    wind_kts: float = 0.0,
    departure_runway_ft: float | None = None,
    arrival_runway_ft: float | None = None,
) -> CapabilityResult:
    """Evaluate with the default engine (crew inside empty weight)."""
    return CapabilityEngine().evaluate(
        aircraft,
        distance_nm,
        passengers,
        wind_kts,
        departure_runway_ft=departure_runway_ft,
        arrival_runway_ft=arrival_runway_ft,
    )
