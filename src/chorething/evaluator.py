"""Overdue detection over a list of chores."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Iterable

from chorething.errors import ParseError
from chorething.models import UNSET_USER_ID, Chore, PollResult

logger = logging.getLogger(__name__)

# Grocy sends e.g. "2025-03-30 23:59:59"
EXECUTION_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# strptime also takes one-digit fields; the wire format is always zero-padded
EXECUTION_TIME_SHAPE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")


def parse_execution_time(value: str, now: datetime) -> datetime:
    """
    Parse a next execution time in the timezone of ``now``.

    A naive ``now`` yields a naive result (local wall clock).
    """
    if not EXECUTION_TIME_SHAPE.fullmatch(value):
        raise ParseError(f"invalid execution time {value!r}: expected YYYY-MM-DD HH:MM:SS")
    try:
        parsed = datetime.strptime(value, EXECUTION_TIME_FORMAT)
    except ValueError as e:
        raise ParseError(f"invalid execution time {value!r}: {e}") from e
    if now.tzinfo is not None:
        parsed = parsed.replace(tzinfo=now.tzinfo)
    return parsed


def evaluate(chores: Iterable[Chore], username: str, now: datetime) -> PollResult:
    """
    Find the chores assigned to ``username`` that are due before ``now``.

    Returns overdue names in input order, plus the assigned user id of the
    last chore that matched the user (or UNSET_USER_ID if none did). A chore
    with an unparsable time is logged and skipped.
    """
    overdue: list[str] = []
    user_id = UNSET_USER_ID

    for chore in chores:
        if chore.next_execution_assigned_user.username != username:
            continue

        user_id = chore.next_execution_assigned_to_user_id

        if chore.next_estimated_execution_time == "":
            continue

        try:
            next_execution = parse_execution_time(chore.next_estimated_execution_time, now)
        except ParseError as e:
            logger.warning("Error parsing time for chore %s: %s", chore.chore_name, e)
            continue

        if next_execution < now:
            logger.debug("Overdue: %s (due %s)", chore.chore_name, next_execution)
            overdue.append(chore.chore_name)

    return PollResult(overdue=overdue, user_id=user_id)
