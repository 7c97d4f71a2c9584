"""Pytest configuration and fixtures for all tests."""

import pytest

from charterperf.airports.database import Airport, AirportDatabase
from charterperf.fleet.aircraft_type import AircraftCategory, AircraftType
from charterperf.fleet.catalog import default_catalog


@pytest.fixture(scope="session")
def airport_db() -> AirportDatabase:
    """Bundled airport table, loaded once per session."""
    return AirportDatabase.load_default()


@pytest.fixture
def catalog() -> list[AircraftType]:
    """Bundled catalog, one aircraft per category."""
    return default_catalog()


@pytest.fixture
def jfk(airport_db: AirportDatabase) -> Airport:
    return airport_db.get_airport("KJFK")


@pytest.fixture
def lax(airport_db: AirportDatabase) -> Airport:
    return airport_db.get_airport("KLAX")


@pytest.fixture
def very_light_jet() -> AircraftType:
    return AircraftType(
        name="Phenom 100EV",
        category=AircraftCategory.VERY_LIGHT_JET,
        cruise_speed_kts=390,
        min_runway_ft=3200,
        hourly_rate_usd=3800,
        max_range_nm=1100,
        max_payload_lbs=1800,
        fuel_capacity_lbs=2800,
        fuel_burn_lbs_per_hour=600,
        empty_weight_lbs=7300,
        max_takeoff_weight_lbs=10700,
        max_passengers=4,
    )


@pytest.fixture
def mid_jet() -> AircraftType:
    return AircraftType(
        name="Citation XLS+",
        category=AircraftCategory.MID_JET,
        cruise_speed_kts=441,
        min_runway_ft=5000,
        hourly_rate_usd=7000,
        max_range_nm=2100,
        max_payload_lbs=2600,
        fuel_capacity_lbs=6740,
        fuel_burn_lbs_per_hour=1400,
        empty_weight_lbs=12800,
        max_takeoff_weight_lbs=20200,
        max_passengers=9,
    )


@pytest.fixture
def heavy_jet() -> AircraftType:
    return AircraftType(
        name="Falcon 7X",
        category=AircraftCategory.HEAVY_JET,
        cruise_speed_kts=470,
        min_runway_ft=6000,
        hourly_rate_usd=11000,
        max_range_nm=5500,
        max_payload_lbs=5000,
        fuel_capacity_lbs=31940,
        fuel_burn_lbs_per_hour=2400,
        empty_weight_lbs=36600,
        max_takeoff_weight_lbs=70000,
        max_passengers=14,
    )


@pytest.fixture
def small_cabin_turboprop() -> AircraftType:
    """Long-legged turboprop with a deliberately small payload allowance."""
    return AircraftType(
        name="Test Turboprop",
        category=AircraftCategory.TURBOPROP,
        cruise_speed_kts=400,
        min_runway_ft=3000,
        hourly_rate_usd=3000,
        max_range_nm=1500,
        max_payload_lbs=500,
        fuel_capacity_lbs=3000,
        fuel_burn_lbs_per_hour=500,
        empty_weight_lbs=6000,
        max_takeoff_weight_lbs=10000,
    )
