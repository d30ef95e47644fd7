"""Error types raised by chorething."""

from __future__ import annotations


class ChoreThingError(Exception):
    """Base class for all chorething errors."""


class TransportError(ChoreThingError):
    """The Grocy server could not be reached."""


class HTTPStatusError(ChoreThingError):
    """The Grocy server answered with something other than 200 OK."""

    def __init__(self, resource: str, status_code: int, reason: str = "") -> None:
        self.resource = resource
        self.status_code = status_code
        self.reason = reason
        status = f"{status_code} {reason}".strip()
        super().__init__(f"failed to get {resource}: {status}")


class DecodeError(ChoreThingError):
    """A response body was not JSON, or a field had the wrong type."""


class ParseError(ChoreThingError):
    """A chore's next execution time could not be parsed."""


class ConfigError(ChoreThingError):
    """The config file could not be read, parsed or written."""
