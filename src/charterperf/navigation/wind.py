"""Static prevailing-wind model.

The engine does not use live weather. It assumes a single prevailing wind
(20 kt from the west by default) and projects it onto the route's initial
course. The result is deterministic and testable, not meteorologically
authoritative.
"""

import math
from dataclasses import dataclass

from charterperf.navigation.great_circle import Coordinate, initial_bearing_deg


@dataclass(frozen=True)
class WindModel:
    """Prevailing wind assumption.

    Attributes:
        speed_kts: Wind speed (kts)
        from_direction_deg: Direction the wind blows from (deg true)

    Examples:
        >>> wind = WindModel()
        >>> round(wind.component_for_course(90.0))
        20
        >>> round(wind.component_for_course(270.0))
        -20
    """

    speed_kts: float = 20.0
    from_direction_deg: float = 270.0

    def component_for_course(self, course_deg: float) -> float:
        """Along-track wind component for a given course.

        Args:
            course_deg: Route course (deg true)

        Returns:
            Signed component in knots, positive = tailwind
        """
        toward_deg = self.from_direction_deg + 180.0
        return self.speed_kts * math.cos(math.radians(course_deg - toward_deg))

    def component_kts(self, a: Coordinate, b: Coordinate) -> float:
        """Along-track wind component for the great-circle route a to b.

        Identical endpoints have no course and yield 0.
        """
        if a == b:
            return 0.0
        return self.component_for_course(initial_bearing_deg(a, b))

    def effective_speed_kts(self, cruise_speed_kts: float, a: Coordinate, b: Coordinate) -> float:
        """Ground speed along the route: cruise speed plus wind component."""
        return cruise_speed_kts + self.component_kts(a, b)
