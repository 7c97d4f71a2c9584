"""Airport reference data and identifier resolution.

Typical usage:
    from charterperf.airports import AirportDatabase, AirportResolver

    db = AirportDatabase.load_default()
    resolver = AirportResolver(db)
    resolution = resolver.resolve("KTEB - Teterboro, Teterboro NJ")
"""

from charterperf.airports.database import Airport, AirportDatabase
from charterperf.airports.resolver import (
    DEFAULT_AIRPORT_CODE,
    AirportResolution,
    AirportResolver,
    FallbackPolicy,
    ResolutionStatus,
    parse_airport_code,
)

__all__ = [
    "Airport",
    "AirportDatabase",
    "AirportResolution",
    "AirportResolver",
    "DEFAULT_AIRPORT_CODE",
    "FallbackPolicy",
    "ResolutionStatus",
    "parse_airport_code",
]
