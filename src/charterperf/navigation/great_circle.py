"""Great-circle geometry on a spherical Earth.

Distances use the Haversine formula with an Earth radius of 3440.065 NM.
Bearings use the standard initial-course formula.

Typical usage:
    from charterperf.navigation.great_circle import Coordinate, distance_nm

    jfk = Coordinate(40.6413, -73.7781)
    lax = Coordinate(33.9425, -118.4081)
    distance_nm(jfk, lax)  # 2146
"""

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

EARTH_RADIUS_NM = 3440.065


@dataclass(frozen=True)
class Coordinate:
    """Geographic position in decimal degrees.

    Attributes:
        latitude: Degrees north (negative = south)
        longitude: Degrees east (negative = west)
    """

    latitude: float
    longitude: float

    def __str__(self) -> str:
        return f"({self.latitude:.4f}, {self.longitude:.4f})"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up.

    Python's round() uses banker's rounding; distances, minutes and dollar
    figures here always round .5 upwards.
    """
    return math.floor(value + 0.5)


def great_circle_nm(a: Coordinate, b: Coordinate) -> float:
    """Unrounded Haversine distance between two coordinates.

    Args:
        a: First position
        b: Second position

    Returns:
        Distance in nautical miles
    """
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    h = min(1.0, max(0.0, h))
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_NM * c


def distance_nm(a: Coordinate, b: Coordinate) -> int:
    """Great-circle distance rounded to the nearest whole nautical mile.

    Symmetric in its arguments and 0 for identical points.

    Examples:
        >>> distance_nm(Coordinate(40.6413, -73.7781), Coordinate(40.6413, -73.7781))
        0
    """
    return round_half_up(great_circle_nm(a, b))


def initial_bearing_deg(a: Coordinate, b: Coordinate) -> float:
    """Initial true course from a to b.

    Returns:
        Bearing in degrees within [0, 360). Identical points give 0.
    """
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    dlon = math.radians(b.longitude - a.longitude)

    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)

    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def distances_nm(
    origin: Coordinate,
    latitudes: npt.ArrayLike,
    longitudes: npt.ArrayLike,
) -> npt.NDArray[np.float64]:
    """Vectorised Haversine distances from one origin to many points.

    Args:
        origin: Reference position
        latitudes: Target latitudes in degrees
        longitudes: Target longitudes in degrees

    Returns:
        Unrounded distances in nautical miles, same shape as the inputs
    """
    lat1 = math.radians(origin.latitude)
    lat2 = np.radians(np.asarray(latitudes, dtype=np.float64))
    dlat = lat2 - lat1
    dlon = np.radians(np.asarray(longitudes, dtype=np.float64) - origin.longitude)

    h = np.sin(dlat / 2) ** 2 + math.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    h = np.clip(h, 0.0, 1.0)
    return EARTH_RADIUS_NM * 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))
