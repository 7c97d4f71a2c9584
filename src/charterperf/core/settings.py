"""Engine settings assembled from YAML configuration.

Defaults reproduce the reference behavior: a 20 kt westerly prevailing
wind, lenient airport fallback to KJFK and crew weight carried inside the
aircraft empty weight.

Typical usage example:
    from charterperf.core.settings import EngineSettings

    settings = EngineSettings.from_file("config/charterperf.yaml")
    engine = RouteEngine(settings=settings)
"""

import os
from dataclasses import dataclass
from pathlib import Path

from charterperf.airports.resolver import FallbackPolicy
from charterperf.core.config import ConfigError, ConfigLoader
from charterperf.core.logging_system import get_logger
from charterperf.navigation.wind import WindModel

logger = get_logger(__name__)

CONFIG_ENV_VAR = "CHARTERPERF_CONFIG"

DEFAULT_CONFIG: dict = {
    "wind": {
        "speed_kts": 20.0,
        "from_direction_deg": 270.0,
    },
    "airports": {
        "fallback_policy": "lenient",
        "default_code": "KJFK",
        "data_file": None,
    },
    "weights": {
        "crew_in_empty_weight": True,
    },
    "engine": {
        "max_workers": 4,
    },
}


@dataclass(frozen=True)
class EngineSettings:
    """Tunable engine parameters.

    Attributes:
        wind: Prevailing wind assumption used for every route
        fallback_policy: What to do with airports missing from the table
        default_airport_code: Reference airport substituted in lenient mode
        airport_data_file: Replacement airport CSV (None = bundled table)
        crew_in_empty_weight: Pilots counted inside empty weight (True) or
            added to the payload (False)
        max_workers: Thread pool size for batch route evaluation
    """

    wind: WindModel = WindModel()
    fallback_policy: FallbackPolicy = FallbackPolicy.LENIENT
    default_airport_code: str = "KJFK"
    airport_data_file: Path | None = None
    crew_in_empty_weight: bool = True
    max_workers: int = 4

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "EngineSettings":
        """Build settings from a loaded configuration.

        Missing keys fall back to DEFAULT_CONFIG.

        Raises:
            ConfigError: If a value has the wrong type or an unknown policy.
        """
        merged = ConfigLoader(DEFAULT_CONFIG)
        merged.merge(config)

        wind_section = merged.get_section("wind")
        airports = merged.get_section("airports")
        weights = merged.get_section("weights")

        policy_name = str(airports.get("fallback_policy")).lower()
        try:
            policy = FallbackPolicy(policy_name)
        except ValueError as e:
            raise ConfigError(f"Unknown airport fallback policy: {policy_name}") from e

        try:
            wind = WindModel(
                speed_kts=float(wind_section.get("speed_kts")),
                from_direction_deg=float(wind_section.get("from_direction_deg")),
            )
            max_workers = int(merged.get_section("engine").get("max_workers"))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid numeric setting: {e}") from e

        if max_workers < 1:
            raise ConfigError(f"engine.max_workers must be >= 1, got {max_workers}")

        crew_in_empty_weight = weights.get("crew_in_empty_weight")
        if not isinstance(crew_in_empty_weight, bool):
            raise ConfigError(
                f"weights.crew_in_empty_weight must be true or false, got {crew_in_empty_weight!r}"
            )

        data_file = airports.get("data_file")

        return cls(
            wind=wind,
            fallback_policy=policy,
            default_airport_code=str(airports.get("default_code")).upper(),
            airport_data_file=Path(data_file) if data_file else None,
            crew_in_empty_weight=crew_in_empty_weight,
            max_workers=max_workers,
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "EngineSettings":
        """Load settings from a YAML file."""
        return cls.from_config(ConfigLoader.load(path))

    @classmethod
    def from_environment(cls) -> "EngineSettings":
        """Load settings from $CHARTERPERF_CONFIG, or defaults when unset."""
        path = os.environ.get(CONFIG_ENV_VAR)
        if not path:
            return cls()
        logger.info("Using engine configuration from %s=%s", CONFIG_ENV_VAR, path)
        return cls.from_file(path)
