"""Aircraft performance profiles used by the feasibility engine.

An AircraftType is static catalog data describing one representative
aircraft of a charter category: speeds, runway needs, weights, fuel and
hourly rate. Records are validated at the boundary so malformed data is
rejected before any computation.
"""

import math
from dataclasses import dataclass, fields
from enum import Enum

from charterperf.core.errors import InvalidInputError


class AircraftCategory(Enum):
    """Charter aircraft categories in fixed taxonomy order.

    Declaration order is the recommendation order, smallest and cheapest
    first. Ultra Long Range is capacity-only and never proposed as the
    minimum class.
    """

    VERY_LIGHT_JET = "Very Light Jet"
    TURBOPROP = "Turboprop"
    LIGHT_JET = "Light Jet"
    SUPER_LIGHT_JET = "Super Light Jet"
    MID_JET = "Mid Jet"
    SUPER_MID_JET = "Super Mid Jet"
    HEAVY_JET = "Heavy Jet"
    ULTRA_LONG_RANGE = "Ultra Long Range"

    @property
    def rank(self) -> int:
        """Position in the taxonomy (0 = smallest)."""
        return _CATEGORY_ORDER.index(self)

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: str) -> "AircraftCategory":
        """Parse a catalog label such as "Heavy Jet" or "heavy_jet".

        Raises:
            InvalidInputError: If the label is not a known category.
        """
        normalized = label.strip().lower().replace("_", " ").replace("-", " ")
        for category in cls:
            if category.value.lower() == normalized:
                return category
        raise InvalidInputError(f"Unknown aircraft category: {label!r}")


_CATEGORY_ORDER = list(AircraftCategory)


@dataclass(frozen=True)
class AircraftType:
    """Performance profile of one aircraft type.

    Attributes:
        name: Representative model (e.g., "Citation CJ3+")
        category: Charter category
        cruise_speed_kts: Cruise true airspeed (kts)
        min_runway_ft: Minimum runway length the operator accepts (ft)
        hourly_rate_usd: Charter rate per flight hour (USD)
        max_range_nm: Range with full tanks (NM)
        max_payload_lbs: Maximum passenger and baggage payload (lbs)
        fuel_capacity_lbs: Usable fuel capacity (lbs)
        fuel_burn_lbs_per_hour: Average fuel consumption (lbs/hr)
        empty_weight_lbs: Basic operating empty weight (lbs)
        max_takeoff_weight_lbs: Maximum takeoff weight (lbs)
        max_passengers: Cabin seats, None if not constrained

    Examples:
        >>> cj3 = AircraftType(
        ...     name="Citation CJ3+",
        ...     category=AircraftCategory.LIGHT_JET,
        ...     cruise_speed_kts=416,
        ...     min_runway_ft=4000,
        ...     hourly_rate_usd=5200,
        ...     max_range_nm=2000,
        ...     max_payload_lbs=2200,
        ...     fuel_capacity_lbs=4710,
        ...     fuel_burn_lbs_per_hour=900,
        ...     empty_weight_lbs=8540,
        ...     max_takeoff_weight_lbs=13870,
        ...     max_passengers=7,
        ... )
        >>> cj3.validate()
    """

    name: str
    category: AircraftCategory
    cruise_speed_kts: float
    min_runway_ft: float
    hourly_rate_usd: float
    max_range_nm: float
    max_payload_lbs: float
    fuel_capacity_lbs: float
    fuel_burn_lbs_per_hour: float
    empty_weight_lbs: float
    max_takeoff_weight_lbs: float
    max_passengers: int | None = None

    def validate(self) -> None:
        """Check the record's invariants.

        Raises:
            InvalidInputError: If any figure is missing, non-finite, negative,
                or breaks a physical invariant.
        """
        if not self.name:
            raise InvalidInputError("Aircraft type must have a name")
        if not isinstance(self.category, AircraftCategory):
            raise InvalidInputError(f"{self.name}: category must be an AircraftCategory")

        for field in fields(self):
            if field.name in ("name", "category", "max_passengers"):
                continue
            value = getattr(self, field.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidInputError(f"{self.name}: {field.name} must be a number, got {value!r}")
            if not math.isfinite(value) or value < 0:
                raise InvalidInputError(f"{self.name}: {field.name} must be >= 0, got {value}")

        if self.cruise_speed_kts <= 0:
            raise InvalidInputError(f"{self.name}: cruise_speed_kts must be > 0")
        if self.fuel_burn_lbs_per_hour <= 0:
            raise InvalidInputError(f"{self.name}: fuel_burn_lbs_per_hour must be > 0")
        if self.fuel_capacity_lbs <= 0:
            raise InvalidInputError(f"{self.name}: fuel_capacity_lbs must be > 0")
        if self.empty_weight_lbs >= self.max_takeoff_weight_lbs:
            raise InvalidInputError(
                f"{self.name}: empty weight {self.empty_weight_lbs:.0f} lbs must be below "
                f"MTOW {self.max_takeoff_weight_lbs:.0f} lbs"
            )
        if self.max_passengers is not None and (
            isinstance(self.max_passengers, bool)
            or not isinstance(self.max_passengers, int)
            or self.max_passengers < 1
        ):
            raise InvalidInputError(f"{self.name}: max_passengers must be a positive integer")


def validate_catalog(catalog: list[AircraftType]) -> None:
    """Validate every record of a catalog.

    Raises:
        InvalidInputError: On the first malformed record.
    """
    for aircraft in catalog:
        if not isinstance(aircraft, AircraftType):
            raise InvalidInputError(f"Catalog entries must be AircraftType, got {type(aircraft).__name__}")
        aircraft.validate()
