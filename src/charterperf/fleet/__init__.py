"""Aircraft types and catalogs.

Catalogs are plain lists of AircraftType passed explicitly into every
calculation, so test fixtures and operator-specific fleets can coexist.
"""

from charterperf.fleet.aircraft_type import AircraftCategory, AircraftType, validate_catalog
from charterperf.fleet.catalog import aircraft_from_dict, default_catalog, load_catalog

__all__ = [
    "AircraftCategory",
    "AircraftType",
    "aircraft_from_dict",
    "default_catalog",
    "load_catalog",
    "validate_catalog",
]
