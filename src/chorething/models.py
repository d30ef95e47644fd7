"""Core data models for chorething."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from chorething.errors import DecodeError

# Sentinel for "no chore matched the configured user yet".
UNSET_USER_ID = -1


def decode_bool_int(value: Any, name: str = "value") -> bool:
    """
    Decode a boolean sent on the wire as an integer.

    0 decodes to False, any other integer to True. Anything that is not
    a JSON integer (including true/false and floats) raises DecodeError.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"{name}: expected 0/1 integer, got {value!r}")
    return value != 0


def _get(data: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    """Read a typed field; missing or null fields fall back to the default."""
    value = data.get(key)
    if value is None:
        return default
    if kind is int and isinstance(value, bool):
        raise DecodeError(f"{key}: expected int, got {value!r}")
    if not isinstance(value, kind):
        raise DecodeError(f"{key}: expected {kind.__name__}, got {value!r}")
    return value


def _get_bool_int(data: dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    return decode_bool_int(value, key)


@dataclass
class User:
    """A Grocy user."""

    id: int = 0
    username: str = ""
    first_name: str = ""
    last_name: str = ""
    display_name: str = ""
    picture_file_name: str = ""
    row_created_timestamp: str = ""

    @classmethod
    def from_json(cls, data: Any) -> User:
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise DecodeError(f"user: expected object, got {data!r}")
        return cls(
            id=_get(data, "id", int, 0),
            username=_get(data, "username", str, ""),
            first_name=_get(data, "first_name", str, ""),
            last_name=_get(data, "last_name", str, ""),
            display_name=_get(data, "display_name", str, ""),
            picture_file_name=_get(data, "picture_file_name", str, ""),
            row_created_timestamp=_get(data, "row_created_timestamp", str, ""),
        )


@dataclass
class Chore:
    """A chore as returned by the Grocy /chores endpoint."""

    chore_id: int = 0
    chore_name: str = ""
    last_tracked_time: str = ""
    track_date_only: bool = False
    next_estimated_execution_time: str = ""  # "YYYY-MM-DD HH:MM:SS" or ""
    next_execution_assigned_to_user_id: int = 0
    is_rescheduled: bool = False
    is_reassigned: bool = False
    next_execution_assigned_user: User = field(default_factory=User)

    @classmethod
    def from_json(cls, data: Any) -> Chore:
        if not isinstance(data, dict):
            raise DecodeError(f"chore: expected object, got {data!r}")
        return cls(
            chore_id=_get(data, "chore_id", int, 0),
            chore_name=_get(data, "chore_name", str, ""),
            last_tracked_time=_get(data, "last_tracked_time", str, ""),
            track_date_only=_get_bool_int(data, "track_date_only"),
            next_estimated_execution_time=_get(data, "next_estimated_execution_time", str, ""),
            next_execution_assigned_to_user_id=_get(data, "next_execution_assigned_to_user_id", int, 0),
            is_rescheduled=_get_bool_int(data, "is_rescheduled"),
            is_reassigned=_get_bool_int(data, "is_reassigned"),
            next_execution_assigned_user=User.from_json(data.get("next_execution_assigned_user")),
        )


@dataclass
class PollResult:
    """Output of one evaluation: overdue chore names in response order."""

    overdue: list[str] = field(default_factory=list)
    user_id: int = UNSET_USER_ID

    @property
    def count(self) -> int:
        return len(self.overdue)


@dataclass
class CycleOutcome:
    """What one polling cycle produced, for the presentation layer."""

    overdue: list[str] = field(default_factory=list)
    user_id: int = UNSET_USER_ID
    error: str | None = None  # Set when the cycle aborted

    @property
    def count(self) -> int:
        return len(self.overdue)

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class EngineState:
    """Last known results, overwritten at the end of every successful cycle."""

    has_overdue: bool = False
    user_id: int = UNSET_USER_ID


class AutoCheck(str, Enum):
    """Whether the recurring timer is armed."""

    ENABLED = "enabled"
    DISABLED = "disabled"
