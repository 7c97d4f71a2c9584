"""CharterPerf command line.

Evaluates one charter route against an aircraft catalog and prints which
aircraft can fly it nonstop.

Typical usage:
    charterperf JFK LAX -p 4
    charterperf "KTEB - Teterboro, NJ" KVNY -p 6 --format yaml
    charterperf KJFK ZZZZ -p 2 --strict
"""

import argparse
import sys
from collections.abc import Sequence
from dataclasses import replace

import yaml

from charterperf.airports.resolver import FallbackPolicy
from charterperf.core.config import ConfigError
from charterperf.core.errors import CatalogError, InvalidInputError, UnresolvableAirportError
from charterperf.core.logging_system import LoggingError, get_logger, initialize_logging
from charterperf.core.settings import EngineSettings
from charterperf.engine import RouteEngine
from charterperf.fleet.catalog import default_catalog, load_catalog
from charterperf.performance.fleet_report import FleetFeasibilityReport

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="charterperf",
        description="CharterPerf - nonstop charter route feasibility",
    )

    parser.add_argument("departure", help="Departure airport (e.g., KTEB, JFK, 'TEB - Teterboro')")
    parser.add_argument("arrival", help="Arrival airport (e.g., KLAX, VNY)")

    parser.add_argument(
        "-p",
        "--passengers",
        type=int,
        required=True,
        help="Number of passengers (>= 1)",
    )

    parser.add_argument("--catalog", type=str, help="Aircraft catalog YAML file")
    parser.add_argument("--config", type=str, help="Engine configuration YAML file")
    parser.add_argument("--log-config", type=str, help="Logging configuration YAML file")

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on unknown airports instead of defaulting to the reference airport",
    )

    parser.add_argument(
        "--format",
        choices=["text", "yaml"],
        default="text",
        help="Output format (default: text)",
    )

    return parser.parse_args(argv)


def format_report(report: FleetFeasibilityReport) -> str:
    """Render a report for the terminal."""
    leg = report.leg
    lines = [
        f"{leg.departure.airport} -> {leg.arrival.airport}",
        f"Distance: {leg.distance_nm:,} NM   Wind: {leg.wind_component_kts:+.0f} kts   "
        f"Passengers: {report.passengers}",
    ]

    for warning in report.warnings:
        lines.append(f"WARNING: {warning}")

    lines.append("")
    for assessment in report.assessments:
        aircraft = assessment.aircraft
        if assessment.feasible:
            verdict = "OK"
        else:
            verdict = f"NO ({assessment.capability.limiting_factor.value})"
        lines.append(
            f"  {aircraft.category.label:<18} {aircraft.name:<18} {verdict:<14} "
            f"{assessment.flight_time:>8}   {assessment.cost}"
        )

    lines.append("")
    if report.minimum_category is not None:
        labels = ", ".join(category.label for category in report.recommended_categories)
        lines.append(f"Minimum category: {report.minimum_category.label}")
        lines.append(f"Recommended: {labels}")
    else:
        lines.append(f"Status: {report.status.value}")

    if report.low_confidence:
        lines.append("Confidence: low")

    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 2 for invalid input or configuration).
    """
    args = parse_args(argv)

    try:
        initialize_logging(args.log_config)
    except LoggingError as e:
        print(f"charterperf: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    try:
        settings = EngineSettings.from_file(args.config) if args.config else EngineSettings.from_environment()
        if args.strict:
            settings = replace(settings, fallback_policy=FallbackPolicy.STRICT)

        catalog = load_catalog(args.catalog) if args.catalog else default_catalog()
        engine = RouteEngine(settings=settings)
        report = engine.evaluate_route(args.departure, args.arrival, args.passengers, catalog)
    except (InvalidInputError, UnresolvableAirportError, CatalogError, ConfigError) as e:
        logger.error("%s", e)
        print(f"charterperf: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.exception("Fatal error: %s", e)
        return EXIT_FAILURE

    if args.format == "yaml":
        print(yaml.safe_dump(report.to_dict(), sort_keys=False), end="")
    else:
        print(format_report(report))

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
