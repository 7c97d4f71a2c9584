"""Route geometry: great-circle distance, bearing and wind.

Typical usage:
    from charterperf.navigation import Coordinate, WindModel, distance_nm

    jfk = Coordinate(40.6413, -73.7781)
    lax = Coordinate(33.9425, -118.4081)
    distance_nm(jfk, lax)
    WindModel().component_kts(jfk, lax)
"""

from charterperf.navigation.great_circle import (
    EARTH_RADIUS_NM,
    Coordinate,
    distance_nm,
    distances_nm,
    great_circle_nm,
    initial_bearing_deg,
    round_half_up,
)
from charterperf.navigation.wind import WindModel

__all__ = [
    "Coordinate",
    "EARTH_RADIUS_NM",
    "WindModel",
    "distance_nm",
    "distances_nm",
    "great_circle_nm",
    "initial_bearing_deg",
    "round_half_up",
]
