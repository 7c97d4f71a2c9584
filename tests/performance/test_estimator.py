"""Tests for flight-time formatting and cost bands."""

import pytest

from charterperf.core.errors import InvalidInputError
from charterperf.performance.estimator import (
    CostRange,
    cost_range,
    flight_time_hours,
    flight_time_string,
    format_hours,
)


class TestFormatHours:
    @pytest.mark.parametrize(
        ("hours", "expected"),
        [
            (0.0, "0h 00m"),
            (1.5, "1h 30m"),
            (10.25, "10h 15m"),
            (2.999999, "3h 00m"),
            (0.05, "0h 03m"),
        ],
    )
    def test_format(self, hours: float, expected: str) -> None:
        assert format_hours(hours) == expected

    def test_minutes_never_reach_sixty(self) -> None:
        for step in range(0, 600):
            minutes = int(format_hours(step / 97.0).split("h ")[1].rstrip("m"))
            assert 0 <= minutes < 60

    def test_negative_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            format_hours(-0.1)


class TestFlightTime:
    def test_flight_time_hours(self) -> None:
        assert flight_time_hours(900, 450) == pytest.approx(2.0)

    def test_flight_time_string(self) -> None:
        assert flight_time_string(900, 450) == "2h 00m"
        assert flight_time_string(0, 450) == "0h 00m"

    @pytest.mark.parametrize("speed", [0, -10])
    def test_non_positive_speed_rejected(self, speed: float) -> None:
        with pytest.raises(InvalidInputError, match="Ground speed"):
            flight_time_hours(100, speed)


class TestCostRange:
    def test_ten_percent_band(self) -> None:
        assert cost_range(2.0, 5000) == CostRange(min=9000, max=11000)

    def test_zero_time(self) -> None:
        assert cost_range(0.0, 11000) == CostRange(0, 0)

    def test_rounds_to_dollar(self) -> None:
        band = cost_range(1.2345, 3800)
        assert isinstance(band.min, int)
        assert isinstance(band.max, int)

    @pytest.mark.parametrize(
        ("hours", "rate"),
        [(0.001, 100), (0.0013, 3), (4.7684, 9000), (1 / 3, 3200), (12.5, 14500)],
    )
    def test_bounds_contain_base(self, hours: float, rate: float) -> None:
        band = cost_range(hours, rate)
        assert band.min <= hours * rate <= band.max

    def test_small_amount_widened(self) -> None:
        assert cost_range(0.001, 100) == CostRange(0, 1)

    def test_negative_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            cost_range(-1.0, 5000)

    def test_str(self) -> None:
        assert str(CostRange(9000, 11000)) == "$9,000 - $11,000"
