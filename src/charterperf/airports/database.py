"""Static airport table and query system.

Loads the bundled code-to-coordinate table (major commercial and
business-aviation airports) or any CSV with the same columns, indexes each
airport under its ICAO code and its IATA alias, and answers keyed and
spatial queries.

Expected CSV columns:
    code,iata_code,name,city,latitude,longitude,runway_length_ft

Typical usage:
    db = AirportDatabase.load_default()

    teb = db.get_airport("TEB")          # IATA alias
    teb = db.get_airport("KTEB")         # ICAO code
    nearby = db.get_airports_near("KTEB", radius_nm=30, min_runway_ft=6000)
"""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from charterperf.navigation.great_circle import Coordinate, distances_nm

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = Path(__file__).parent / "data" / "airports.csv"


@dataclass(frozen=True)
class Airport:
    """Airport reference data.

    Attributes:
        code: Primary code, ICAO where one exists (e.g., "KTEB")
        name: Airport name
        city: City and region
        latitude: Latitude in degrees, None if unknown
        longitude: Longitude in degrees, None if unknown
        runway_length_ft: Longest runway in feet, None if unknown
        iata_code: 3-letter IATA alias, if any
    """

    code: str
    name: str = ""
    city: str = ""
    latitude: float | None = None
    longitude: float | None = None
    runway_length_ft: int | None = None
    iata_code: str | None = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def coordinate(self) -> Coordinate:
        """Position as a Coordinate.

        Raises:
            ValueError: If the airport has no coordinates.
        """
        if self.latitude is None or self.longitude is None:
            raise ValueError(f"Airport {self.code} has no coordinates")
        return Coordinate(self.latitude, self.longitude)

    def __str__(self) -> str:
        if self.name:
            return f"{self.code} - {self.name}"
        return self.code


class AirportDatabase:
    """Keyed and spatial lookups over a static airport table.

    The table is read once and never mutated by the engine, so a single
    instance can be shared between threads.

    Examples:
        >>> db = AirportDatabase.load_default()
        >>> db.get_airport("JFK").runway_length_ft
        14511
    """

    def __init__(self) -> None:
        """Initialize empty database."""
        self.airports: dict[str, Airport] = {}  # Keyed by primary code
        self._aliases: dict[str, str] = {}  # IATA alias -> primary code

    @classmethod
    def load_default(cls) -> "AirportDatabase":
        """Create a database populated from the bundled airport table."""
        db = cls()
        db.load_from_csv(DEFAULT_DATA_FILE)
        return db

    def load_from_csv(self, csv_path: str | Path) -> int:
        """Load airports from a CSV file.

        Rows with unparseable numbers are skipped. Missing coordinates or
        runway lengths are kept as None.

        Args:
            csv_path: Path to the CSV file

        Returns:
            Number of airports loaded

        Raises:
            FileNotFoundError: If the file does not exist
        """
        csv_path = Path(csv_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"Airports file not found: {csv_path}")

        logger.info("Loading airports from %s", csv_path)
        loaded = 0

        with open(csv_path, encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)

            for row in reader:
                try:
                    code = (row.get("code") or "").strip().upper()
                    if not code:
                        continue

                    airport = Airport(
                        code=code,
                        name=(row.get("name") or "").strip(),
                        city=(row.get("city") or "").strip(),
                        latitude=_optional_float(row.get("latitude")),
                        longitude=_optional_float(row.get("longitude")),
                        runway_length_ft=_optional_int(row.get("runway_length_ft")),
                        iata_code=(row.get("iata_code") or "").strip().upper() or None,
                    )
                except ValueError as e:
                    logger.debug("Skipping invalid airport row: %s", e)
                    continue

                self.add_airport(airport)
                loaded += 1

        logger.info("Loaded %d airports", loaded)
        return loaded

    def add_airport(self, airport: Airport) -> None:
        """Add an airport and its IATA alias.

        Note:
            An airport with the same code replaces the existing entry.
        """
        self.airports[airport.code] = airport
        if airport.iata_code and airport.iata_code != airport.code:
            self._aliases[airport.iata_code] = airport.code

    def get_airport(self, code: str) -> Airport | None:
        """Get airport by ICAO code or IATA alias.

        Args:
            code: Airport code, case-insensitive (e.g., "KTEB" or "teb")

        Returns:
            Airport if found, None otherwise
        """
        code = code.strip().upper()
        airport = self.airports.get(code)
        if airport is None and code in self._aliases:
            airport = self.airports.get(self._aliases[code])
        return airport

    def get_airport_count(self) -> int:
        """Get number of airports (aliases are not counted)."""
        return len(self.airports)

    def get_airports_near(
        self,
        center: str | Coordinate,
        radius_nm: float,
        min_runway_ft: int = 0,
    ) -> list[tuple[Airport, float]]:
        """Find alternate airports within a radius.

        Args:
            center: Airport code or coordinate to search around
            radius_nm: Search radius in nautical miles
            min_runway_ft: Only return airports with at least this runway

        Returns:
            List of (airport, distance_nm) tuples sorted by distance. When the
            center is an airport code, that airport itself is excluded.

        Raises:
            KeyError: If center is a code not present in the table

        Examples:
            >>> for airport, dist in db.get_airports_near("KTEB", 30, 6000):
            ...     print(f"{airport.code}: {dist:.0f} nm")
        """
        exclude_code = None
        if isinstance(center, str):
            center_airport = self.get_airport(center)
            if center_airport is None or not center_airport.has_coordinates:
                raise KeyError(f"Airport not found or has no coordinates: {center}")
            exclude_code = center_airport.code
            origin = center_airport.coordinate
        else:
            origin = center

        candidates = [
            airport
            for airport in self.airports.values()
            if airport.has_coordinates
            and airport.code != exclude_code
            and (airport.runway_length_ft or 0) >= min_runway_ft
        ]
        if not candidates:
            return []

        distances = distances_nm(
            origin,
            [a.latitude for a in candidates],
            [a.longitude for a in candidates],
        )

        order = np.argsort(distances, kind="stable")
        return [
            (candidates[i], float(distances[i])) for i in order if distances[i] <= radius_nm
        ]


def _optional_float(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    return float(value)


def _optional_int(value: str | None) -> int | None:
    if value is None or not value.strip():
        return None
    length = int(float(value))
    if length < 0:
        raise ValueError(f"Negative runway length: {value}")
    return length
