"""Aircraft catalog loading from YAML.

A catalog file holds a top-level ``aircraft`` list; each entry maps onto
the AircraftType fields, with the category given by its label:

    aircraft:
      - name: Citation CJ3+
        category: Light Jet
        cruise_speed_kts: 416
        ...

Typical usage:
    catalog = load_catalog("config/fleet.yaml")
    report = evaluate_route("KTEB", "KPBI", 4, catalog)
"""

from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from charterperf.core.errors import CatalogError, InvalidInputError
from charterperf.core.logging_system import get_logger
from charterperf.fleet.aircraft_type import AircraftCategory, AircraftType, validate_catalog

logger = get_logger(__name__)

DEFAULT_CATALOG_FILE = Path(__file__).parent / "data" / "catalog.yaml"

_FIELD_NAMES = {f.name for f in fields(AircraftType)}
_REQUIRED_FIELDS = {f.name for f in fields(AircraftType) if f.name != "max_passengers"}


def aircraft_from_dict(entry: dict[str, Any]) -> AircraftType:
    """Build and validate one AircraftType from a catalog entry.

    Raises:
        InvalidInputError: If fields are missing, unknown or invalid.
    """
    if not isinstance(entry, dict):
        raise InvalidInputError(f"Catalog entry must be a mapping, got {entry!r}")

    missing = _REQUIRED_FIELDS - entry.keys()
    if missing:
        raise InvalidInputError(
            f"Catalog entry {entry.get('name', '?')!r} missing fields: {', '.join(sorted(missing))}"
        )
    unknown = entry.keys() - _FIELD_NAMES
    if unknown:
        raise InvalidInputError(
            f"Catalog entry {entry.get('name', '?')!r} has unknown fields: {', '.join(sorted(unknown))}"
        )

    values = dict(entry)
    values["name"] = str(values["name"])
    values["category"] = AircraftCategory.from_label(str(values["category"]))

    aircraft = AircraftType(**values)
    aircraft.validate()
    return aircraft


def load_catalog(path: str | Path) -> list[AircraftType]:
    """Load an aircraft catalog from a YAML file.

    Args:
        path: Path to the catalog YAML.

    Returns:
        Validated aircraft types in file order.

    Raises:
        CatalogError: If the file is missing or cannot be parsed.
        InvalidInputError: If an entry is malformed.
    """
    path = Path(path)

    if not path.exists():
        raise CatalogError(f"Aircraft catalog not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise CatalogError(f"Failed to load aircraft catalog {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("aircraft"), list):
        raise CatalogError(f"Invalid aircraft catalog (expected an 'aircraft' list): {path}")

    catalog = [aircraft_from_dict(entry) for entry in data["aircraft"]]
    validate_catalog(catalog)

    logger.info("Loaded %d aircraft types from %s", len(catalog), path)
    return catalog


def default_catalog() -> list[AircraftType]:
    """Load the bundled catalog (one representative aircraft per category)."""
    return load_catalog(DEFAULT_CATALOG_FILE)
