"""Tests for the aircraft capability engine."""

import dataclasses

import pytest

from charterperf.core.errors import InvalidInputError
from charterperf.fleet.aircraft_type import AircraftCategory, AircraftType
from charterperf.fleet.catalog import default_catalog
from charterperf.performance.capability import (
    PASSENGER_WEIGHT_LBS,
    PILOT_COUNT,
    PILOT_WEIGHT_LBS,
    RESERVE_FUEL_HOURS,
    RUNWAY_AVAILABILITY_CEILING_FT,
    CapabilityEngine,
    LimitingFactor,
    evaluate,
    validate_passengers,
)

JFK_LAX_NM = 2146
WESTBOUND_WIND_KTS = -20.0


def catalog_aircraft(category: AircraftCategory) -> AircraftType:
    return next(a for a in default_catalog() if a.category is category)


class TestWeights:
    def test_passenger_weight_includes_bags(self) -> None:
        assert PASSENGER_WEIGHT_LBS == 230

    def test_crew_inside_empty_weight(self, heavy_jet: AircraftType) -> None:
        result = evaluate(heavy_jet, 500, 4)

        assert result.passenger_weight_lbs == 920
        assert result.pilot_weight_lbs == PILOT_COUNT * PILOT_WEIGHT_LBS == 360
        assert result.total_person_weight_lbs == 1280
        assert result.payload_weight_lbs == 920

    def test_crew_added_to_payload(self, heavy_jet: AircraftType) -> None:
        with_crew = CapabilityEngine(crew_in_empty_weight=False).evaluate(heavy_jet, 500, 4)
        without_crew = CapabilityEngine().evaluate(heavy_jet, 500, 4)

        assert with_crew.payload_weight_lbs == 1280
        assert with_crew.takeoff_weight_lbs == pytest.approx(without_crew.takeoff_weight_lbs + 360)
        assert with_crew.available_fuel_lbs <= without_crew.available_fuel_lbs


class TestHeavyJetTransCon:
    """Falcon 7X, JFK to LAX into a 20 kt headwind."""

    @pytest.fixture
    def result(self, heavy_jet: AircraftType):
        return evaluate(heavy_jet, JFK_LAX_NM, 4, WESTBOUND_WIND_KTS)

    def test_feasible(self, result) -> None:
        assert result.feasible
        assert result.limiting_factor is None
        assert result.failed_checks == ()

    def test_flight_time_uses_ground_speed(self, result) -> None:
        assert result.effective_speed_kts == 450
        assert result.flight_time_hours == pytest.approx(JFK_LAX_NM / 450)

    def test_fuel_includes_reserve(self, result) -> None:
        expected = (JFK_LAX_NM / 450 + RESERVE_FUEL_HOURS) * 2400
        assert result.fuel_required_lbs == pytest.approx(expected)
        assert result.reserve_fuel_lbs == pytest.approx(1800)

    def test_takeoff_weight(self, result) -> None:
        assert result.takeoff_weight_lbs == pytest.approx(36600 + 920 + result.fuel_required_lbs)

    def test_required_runway(self, result) -> None:
        ratio = result.takeoff_weight_lbs / 70000
        assert result.required_runway_ft == pytest.approx(3000 * ratio**1.1)
        assert 2000 < result.required_runway_ft < 2200

    def test_available_fuel_capped_by_tanks(self, result) -> None:
        assert result.available_fuel_lbs == 31940
        assert result.adjusted_range_nm == pytest.approx(5500)

    def test_margins(self, result) -> None:
        margins = result.margins()

        assert margins["range_nm"] == pytest.approx(5500 - JFK_LAX_NM)
        assert margins["payload_lbs"] == pytest.approx(5000 - 920)
        assert margins["fuel_lbs"] > 0
        assert margins["weight_lbs"] > 0

    def test_check_order(self, result) -> None:
        assert [check.name for check in result.checks] == [
            "range",
            "fuel",
            "payload",
            "weight",
            "departure_runway",
            "arrival_runway",
        ]


class TestLimitingFactors:
    def test_mid_jet_limited_by_range(self, mid_jet: AircraftType) -> None:
        result = evaluate(mid_jet, 2400, 4)

        assert not result.feasible
        assert result.limiting_factor is LimitingFactor.RANGE
        assert result.adjusted_range_nm == pytest.approx(2100 * 6480 / 6740)

    def test_range_reported_before_fuel(self, very_light_jet: AircraftType) -> None:
        result = evaluate(very_light_jet, JFK_LAX_NM, 4, WESTBOUND_WIND_KTS)
        failed = {check.name for check in result.failed_checks}

        assert {"range", "fuel"} <= failed
        assert result.limiting_factor is LimitingFactor.RANGE

    def test_fuel_limited(self) -> None:
        super_light = catalog_aircraft(AircraftCategory.SUPER_LIGHT_JET)

        result = evaluate(super_light, JFK_LAX_NM, 4, WESTBOUND_WIND_KTS)

        assert result.adjusted_range_nm >= JFK_LAX_NM
        assert result.limiting_factor is LimitingFactor.FUEL

    def test_payload_limited(self, small_cabin_turboprop: AircraftType) -> None:
        result = evaluate(small_cabin_turboprop, 100, 4)

        assert result.limiting_factor is LimitingFactor.PAYLOAD
        assert [check.name for check in result.failed_checks] == ["payload"]

    def test_seat_count_limits_payload(self, very_light_jet: AircraftType) -> None:
        assert evaluate(very_light_jet, 100, 4).feasible

        result = evaluate(very_light_jet, 100, 5)

        assert result.payload_weight_lbs <= very_light_jet.max_payload_lbs
        assert result.limiting_factor is LimitingFactor.PAYLOAD
        assert "5/4 seats" in result.checks[2].detail

    def test_overloaded_very_light_jet(self, very_light_jet: AircraftType) -> None:
        result = evaluate(very_light_jet, JFK_LAX_NM, 19, WESTBOUND_WIND_KTS)

        assert not result.feasible
        assert result.limiting_factor in (
            LimitingFactor.RANGE,
            LimitingFactor.FUEL,
            LimitingFactor.PAYLOAD,
        )
        assert result.available_fuel_lbs == 0

    def test_short_departure_runway(self, heavy_jet: AircraftType) -> None:
        result = evaluate(heavy_jet, 300, 4, departure_runway_ft=3500)

        assert result.limiting_factor is LimitingFactor.RUNWAY
        assert [check.name for check in result.failed_checks] == ["departure_runway"]

    def test_short_arrival_runway(self, heavy_jet: AircraftType) -> None:
        result = evaluate(heavy_jet, 300, 4, arrival_runway_ft=3500)

        assert result.limiting_factor is LimitingFactor.RUNWAY
        assert [check.name for check in result.failed_checks] == ["arrival_runway"]

    def test_unknown_runway_uses_ceiling(self, heavy_jet: AircraftType) -> None:
        result = evaluate(heavy_jet, 300, 4)

        assert result.departure_runway_ft == RUNWAY_AVAILABILITY_CEILING_FT
        assert result.arrival_runway_ft == RUNWAY_AVAILABILITY_CEILING_FT
        assert result.feasible


class TestEdgeCases:
    def test_zero_distance(self, very_light_jet: AircraftType) -> None:
        result = evaluate(very_light_jet, 0, 4)

        assert result.feasible
        assert result.flight_time_hours == 0
        assert result.fuel_required_lbs == pytest.approx(RESERVE_FUEL_HOURS * 600)

    def test_negative_distance_rejected(self, very_light_jet: AircraftType) -> None:
        with pytest.raises(InvalidInputError, match="Distance"):
            evaluate(very_light_jet, -1, 4)

    def test_non_positive_ground_speed_rejected(self, very_light_jet: AircraftType) -> None:
        with pytest.raises(InvalidInputError, match="ground speed"):
            evaluate(very_light_jet, 100, 1, wind_kts=-390)

    def test_malformed_aircraft_rejected(self, very_light_jet: AircraftType) -> None:
        broken = dataclasses.replace(very_light_jet, fuel_capacity_lbs=0)
        with pytest.raises(InvalidInputError):
            evaluate(broken, 100, 1)

    def test_external_flight_time(self, heavy_jet: AircraftType) -> None:
        result = CapabilityEngine().evaluate(heavy_jet, 1000, 2, flight_time_hours=2.0)

        assert result.flight_time_hours == 2.0
        assert result.fuel_required_lbs == pytest.approx(2.75 * 2400)

    def test_negative_external_flight_time_rejected(self, heavy_jet: AircraftType) -> None:
        with pytest.raises(InvalidInputError, match="Flight time"):
            CapabilityEngine().evaluate(heavy_jet, 1000, 2, flight_time_hours=-1.0)


class TestPassengerValidation:
    @pytest.mark.parametrize("passengers", [0, -3, 1.5, "4", True, None])
    def test_rejected(self, passengers) -> None:
        with pytest.raises(InvalidInputError, match="Passenger count"):
            validate_passengers(passengers)

    def test_accepted(self) -> None:
        validate_passengers(1)
        validate_passengers(19)


class TestMonotonicity:
    def test_more_passengers_never_helps(self, heavy_jet: AircraftType) -> None:
        results = [
            evaluate(heavy_jet, JFK_LAX_NM, passengers, WESTBOUND_WIND_KTS)
            for passengers in range(1, 21)
        ]
        feasible = [result.feasible for result in results]
        payloads = [result.payload_weight_lbs for result in results]

        first_failure = feasible.index(False)
        assert all(feasible[:first_failure])
        assert not any(feasible[first_failure:])
        assert payloads == sorted(payloads)

    def test_heavy_jet_seats_bound_capacity(self, heavy_jet: AircraftType) -> None:
        assert evaluate(heavy_jet, JFK_LAX_NM, 14, WESTBOUND_WIND_KTS).feasible
        assert not evaluate(heavy_jet, JFK_LAX_NM, 15, WESTBOUND_WIND_KTS).feasible
