"""Airport identifier resolution with an explicit fallback policy.

Identifiers arrive as bare codes ("TEB", "KTEB") or as the composite
strings produced by airport pickers ("KTEB - Teterboro, Teterboro NJ").
The resolver extracts the leading code and looks it up in the airport
table.

Unknown airports never block a calculation under the lenient policy: a
fixed reference airport is substituted and the resolution is tagged so the
caller can flag the answer as low-confidence. The strict policy raises
instead.

Typical usage:
    resolver = AirportResolver(AirportDatabase.load_default())

    resolution = resolver.resolve("KTEB - Teterboro, Teterboro NJ")
    if resolution.is_fallback:
        print(resolution.message)
"""

import re
from dataclasses import dataclass
from enum import Enum

from charterperf.airports.database import Airport, AirportDatabase
from charterperf.core.errors import UnresolvableAirportError
from charterperf.core.logging_system import get_logger

logger = get_logger(__name__)

DEFAULT_AIRPORT_CODE = "KJFK"

# Leading 3-4 character code: a letter, then letters or digits ("JFK", "KJFK", "FL09")
_CODE_PATTERN = re.compile(r"^([A-Z][A-Z0-9]{2,3})(?=$|[\s\-,/(])")


class FallbackPolicy(Enum):
    """Behavior for identifiers missing from the airport table."""

    LENIENT = "lenient"
    STRICT = "strict"


class ResolutionStatus(Enum):
    """Outcome of resolving one identifier.

    Attributes:
        RESOLVED: Found in the table, or supplied with coordinates
        DEFAULTED: A code was parsed but is unknown; default substituted
        UNRESOLVABLE: No code could be parsed; default substituted
    """

    RESOLVED = "resolved"
    DEFAULTED = "defaulted"
    UNRESOLVABLE = "unresolvable"


@dataclass(frozen=True)
class AirportResolution:
    """Tagged result of resolving an airport identifier.

    Attributes:
        query: The identifier as supplied by the caller
        code: Parsed code, None when nothing could be parsed
        airport: Airport to compute with (the default airport on fallback)
        status: How the airport was obtained
        message: Human-readable explanation for fallbacks
    """

    query: str
    code: str | None
    airport: Airport
    status: ResolutionStatus
    message: str = ""

    @property
    def is_fallback(self) -> bool:
        """True when the default airport was substituted."""
        return self.status is not ResolutionStatus.RESOLVED


def parse_airport_code(identifier: str) -> str | None:
    """Extract the leading airport code from an identifier.

    Args:
        identifier: Bare code or "CODE - Name, City" string

    Returns:
        Upper-cased code, or None if the identifier does not start with one

    Examples:
        >>> parse_airport_code("KTEB - Teterboro, Teterboro NJ")
        'KTEB'
        >>> parse_airport_code("teb")
        'TEB'
        >>> parse_airport_code("New York") is None
        True
    """
    text = identifier.strip()
    # A bare token is accepted in any case; inside a longer string the code
    # must already be upper-case so words like "New York" are not taken as codes
    if text.isalnum():
        text = text.upper()
    match = _CODE_PATTERN.match(text)
    return match.group(1) if match else None


class AirportResolver:
    """Resolve identifiers to airports against a static table.

    Examples:
        >>> resolver = AirportResolver(AirportDatabase.load_default())
        >>> resolver.resolve("JFK").airport.code
        'KJFK'
        >>> resolver.resolve("ZZZZ").status
        <ResolutionStatus.DEFAULTED: 'defaulted'>
    """

    def __init__(
        self,
        database: AirportDatabase,
        policy: FallbackPolicy = FallbackPolicy.LENIENT,
        default_code: str = DEFAULT_AIRPORT_CODE,
    ) -> None:
        """Initialize resolver.

        Args:
            database: Airport table to resolve against
            policy: Fallback policy for unknown identifiers
            default_code: Reference airport substituted under the lenient policy

        Raises:
            ValueError: If the default airport is not in the table or has no
                coordinates
        """
        default_airport = database.get_airport(default_code)
        if default_airport is None or not default_airport.has_coordinates:
            raise ValueError(f"Default airport {default_code} missing from airport table")

        self.database = database
        self.policy = policy
        self.default_airport = default_airport

    def resolve(self, identifier: str | Airport) -> AirportResolution:
        """Resolve one identifier.

        Args:
            identifier: Code, composite string, or an Airport. An Airport
                carrying coordinates is used as-is; one without coordinates is
                looked up by its code and keeps its own runway length if the
                table has none.

        Returns:
            AirportResolution tagged with how the airport was obtained

        Raises:
            UnresolvableAirportError: Under the strict policy, when the
                identifier cannot be parsed or is not in the table
        """
        if isinstance(identifier, Airport):
            if identifier.has_coordinates:
                return AirportResolution(
                    query=identifier.code,
                    code=identifier.code,
                    airport=identifier,
                    status=ResolutionStatus.RESOLVED,
                )
            return self._resolve_code(identifier.code, identifier.code, supplied=identifier)

        code = parse_airport_code(identifier)
        if code is None:
            return self._fallback(
                identifier,
                None,
                ResolutionStatus.UNRESOLVABLE,
                f"no airport code found in {identifier!r}",
            )
        return self._resolve_code(identifier, code)

    def _resolve_code(
        self, query: str, code: str, supplied: Airport | None = None
    ) -> AirportResolution:
        airport = self.database.get_airport(code)

        if airport is None or not airport.has_coordinates:
            return self._fallback(
                query, code, ResolutionStatus.DEFAULTED, f"airport {code} not in airport table"
            )

        if supplied is not None and airport.runway_length_ft is None:
            airport = Airport(
                code=airport.code,
                name=airport.name or supplied.name,
                city=airport.city or supplied.city,
                latitude=airport.latitude,
                longitude=airport.longitude,
                runway_length_ft=supplied.runway_length_ft,
                iata_code=airport.iata_code,
            )

        return AirportResolution(
            query=query, code=code, airport=airport, status=ResolutionStatus.RESOLVED
        )

    def _fallback(
        self, query: str, code: str | None, status: ResolutionStatus, reason: str
    ) -> AirportResolution:
        if self.policy is FallbackPolicy.STRICT:
            raise UnresolvableAirportError(query, reason)

        message = f"{reason}; using {self.default_airport.code} as a low-confidence default"
        logger.warning("Airport fallback for %r: %s", query, message)

        return AirportResolution(
            query=query,
            code=code,
            airport=self.default_airport,
            status=status,
            message=message,
        )
