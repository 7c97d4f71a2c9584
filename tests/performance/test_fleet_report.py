"""Tests for fleet-wide feasibility aggregation."""

import dataclasses

import pytest
import yaml

from charterperf.core.errors import InvalidInputError
from charterperf.engine import RouteEngine
from charterperf.fleet.aircraft_type import AircraftCategory, AircraftType
from charterperf.performance.capability import CapabilityEngine
from charterperf.performance.fleet_report import ReportStatus, aggregate
from charterperf.performance.route import RouteLeg


@pytest.fixture(scope="module")
def route_engine() -> RouteEngine:
    return RouteEngine()


@pytest.fixture
def transcon(route_engine: RouteEngine) -> RouteLeg:
    return route_engine.resolve_leg("KJFK", "KLAX")


@pytest.fixture
def same_airport(route_engine: RouteEngine) -> RouteLeg:
    return route_engine.resolve_leg("KJFK", "KJFK")


def by_category(catalog: list[AircraftType], category: AircraftCategory) -> AircraftType:
    return next(a for a in catalog if a.category is category)


class TestTransconRecommendation:
    @pytest.fixture
    def report(self, catalog, transcon):
        return aggregate(catalog, transcon, 4)

    def test_status(self, report) -> None:
        assert report.status is ReportStatus.CAPABLE

    def test_capable_aircraft(self, report) -> None:
        assert [a.aircraft.category for a in report.capable] == [
            AircraftCategory.SUPER_MID_JET,
            AircraftCategory.HEAVY_JET,
            AircraftCategory.ULTRA_LONG_RANGE,
        ]

    def test_recommended_excludes_ultra_long_range(self, report) -> None:
        assert report.recommended_categories == (
            AircraftCategory.SUPER_MID_JET,
            AircraftCategory.HEAVY_JET,
        )
        assert report.minimum_category is AircraftCategory.SUPER_MID_JET

    def test_every_aircraft_assessed(self, report, catalog) -> None:
        assert len(report.assessments) == len(catalog)
        assert all(a.source == "local" for a in report.assessments)

    def test_infeasible_aircraft_report_reason(self, report) -> None:
        light = next(
            a for a in report.assessments if a.aircraft.category is AircraftCategory.LIGHT_JET
        )
        assert not light.feasible
        assert light.capability.limiting_factor is not None

    def test_flight_time_and_cost(self, report) -> None:
        heavy = next(a for a in report.capable if a.aircraft.category is AircraftCategory.HEAVY_JET)
        hours = heavy.capability.flight_time_hours

        assert heavy.flight_time.startswith("4h ")
        assert heavy.cost.min <= hours * 11000 <= heavy.cost.max

    def test_report_figures(self, report, transcon) -> None:
        assert report.distance_nm == transcon.distance_nm
        assert report.passengers == 4
        assert not report.low_confidence
        assert report.warnings == ()


class TestAggregationRules:
    def test_assessments_sorted_by_category(self, catalog, transcon) -> None:
        report = aggregate(list(reversed(catalog)), transcon, 4)
        ranks = [a.aircraft.category.rank for a in report.assessments]

        assert ranks == sorted(ranks)

    def test_sort_is_stable_within_category(self, heavy_jet, transcon) -> None:
        first = dataclasses.replace(heavy_jet, name="Falcon 7X A")
        second = dataclasses.replace(heavy_jet, name="Falcon 7X B")

        report = aggregate([first, second], transcon, 4)

        assert [a.aircraft.name for a in report.assessments] == ["Falcon 7X A", "Falcon 7X B"]
        assert report.recommended_categories == (AircraftCategory.HEAVY_JET,)

    def test_same_airport_everything_feasible(self, catalog, same_airport) -> None:
        report = aggregate(catalog, same_airport, 4)

        assert same_airport.distance_nm == 0
        assert same_airport.wind_component_kts == 0.0
        assert len(report.capable) == len(catalog)
        assert all(a.flight_time == "0h 00m" for a in report.assessments)
        assert report.minimum_category is AircraftCategory.VERY_LIGHT_JET

    def test_empty_catalog(self, transcon) -> None:
        report = aggregate([], transcon, 4)

        assert report.status is ReportStatus.NO_NONSTOP_AIRCRAFT
        assert report.capable == ()
        assert report.recommended_categories == ()
        assert report.minimum_category is None

    def test_catalog_generator(self, catalog, transcon) -> None:
        report = aggregate((aircraft for aircraft in catalog), transcon, 2)

        assert len(report.assessments) == len(catalog)
        assert report.status is ReportStatus.CAPABLE

    def test_no_capable_aircraft(self, catalog, transcon) -> None:
        report = aggregate(catalog, transcon, 19)

        assert report.status is ReportStatus.NO_NONSTOP_AIRCRAFT
        assert report.capable == ()

    def test_ultra_long_range_only(self, catalog, transcon) -> None:
        ulr = by_category(catalog, AircraftCategory.ULTRA_LONG_RANGE)

        report = aggregate([ulr], transcon, 4)

        assert report.status is ReportStatus.ULTRA_LONG_RANGE_ONLY
        assert len(report.capable) == 1
        assert report.minimum_category is None

    def test_malformed_catalog_rejected(self, catalog, transcon) -> None:
        broken = dataclasses.replace(catalog[0], cruise_speed_kts=0)
        with pytest.raises(InvalidInputError):
            aggregate([*catalog, broken], transcon, 4)

    def test_invalid_passengers_rejected(self, catalog, transcon) -> None:
        with pytest.raises(InvalidInputError):
            aggregate(catalog, transcon, 0)

    def test_custom_capability_engine(self, heavy_jet, transcon) -> None:
        report = aggregate(
            [heavy_jet], transcon, 4, engine=CapabilityEngine(crew_in_empty_weight=False)
        )
        assert report.assessments[0].capability.payload_weight_lbs == 1280

    def test_feasibility_monotonic_in_passengers(self, catalog, transcon) -> None:
        previous = None
        for passengers in range(1, 20):
            capable = {a.aircraft.name for a in aggregate(catalog, transcon, passengers).capable}
            if previous is not None:
                assert capable <= previous
            previous = capable


class TestReportSerialization:
    def test_to_dict(self, catalog, transcon) -> None:
        data = aggregate(catalog, transcon, 4).to_dict()

        assert data["status"] == "capable"
        assert data["minimum_category"] == "Super Mid Jet"
        assert data["recommended_categories"] == ["Super Mid Jet", "Heavy Jet"]
        assert data["departure"]["code"] == "KJFK"
        assert data["arrival"]["status"] == "resolved"
        assert len(data["aircraft"]) == len(catalog)

        heavy = next(entry for entry in data["aircraft"] if entry["category"] == "Heavy Jet")
        assert heavy["feasible"] is True
        assert heavy["limiting_factor"] is None
        assert heavy["weights_lbs"]["passengers"] == 920
        assert [check["name"] for check in heavy["checks"]][0] == "range"

    def test_to_dict_is_yaml_safe(self, catalog, transcon) -> None:
        data = aggregate(catalog, transcon, 4).to_dict()
        assert yaml.safe_load(yaml.safe_dump(data)) == data
