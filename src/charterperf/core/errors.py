"""Exception hierarchy shared by the route feasibility engine.

Typical usage example:
    from charterperf.core.errors import InvalidInputError

    if passengers < 1:
        raise InvalidInputError(f"Passenger count must be >= 1, got {passengers}")
"""


class CharterPerfError(Exception):
    """Base class for all engine errors."""


class InvalidInputError(CharterPerfError, ValueError):
    """Raised when a request or aircraft record is malformed.

    These errors are fatal: the engine rejects the input at the boundary
    instead of coercing it.
    """


class UnresolvableAirportError(CharterPerfError):
    """Raised when an airport cannot be resolved under the strict policy."""

    def __init__(self, identifier: str, reason: str) -> None:
        super().__init__(f"Cannot resolve airport {identifier!r}: {reason}")
        self.identifier = identifier
        self.reason = reason


class CatalogError(CharterPerfError):
    """Raised when an aircraft catalog file cannot be loaded."""
