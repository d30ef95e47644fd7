"""Overdue evaluation tests."""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from chorething.errors import ParseError
from chorething.evaluator import evaluate, parse_execution_time
from chorething.models import Chore, User

NOW = datetime(2025, 1, 2, 0, 0, 0)


def chore(name, username, next_time, user_id=1):
    return Chore(
        chore_name=name,
        next_estimated_execution_time=next_time,
        next_execution_assigned_to_user_id=user_id,
        next_execution_assigned_user=User(id=user_id, username=username),
    )


class TestScenarios:
    """The basic overdue scenarios."""

    def test_overdue_chore_for_user(self):
        result = evaluate([chore("Dishes", "alice", "2025-01-01 10:00:00")], "alice", NOW)
        assert result.overdue == ["Dishes"]

    def test_other_user(self):
        result = evaluate([chore("Dishes", "alice", "2025-01-01 10:00:00")], "bob", NOW)
        assert result.overdue == []
        assert result.user_id == -1

    def test_unscheduled_chore_is_excluded(self):
        result = evaluate([chore("Dishes", "alice", "", user_id=5)], "alice", NOW)
        assert result.overdue == []
        # Still counts as a match for the deep link
        assert result.user_id == 5

    def test_malformed_time_is_logged_and_skipped(self, caplog):
        chores = [
            chore("Broken", "alice", "not-a-date"),
            chore("Dishes", "alice", "2025-01-01 10:00:00"),
        ]

        with caplog.at_level(logging.WARNING, logger="chorething.evaluator"):
            result = evaluate(chores, "alice", NOW)

        assert result.overdue == ["Dishes"]
        errors = [r for r in caplog.records if "Broken" in r.getMessage()]
        assert len(errors) == 1

    def test_all_malformed(self, caplog):
        chores = [chore(f"c{i}", "alice", "2025/01/01") for i in range(3)]

        with caplog.at_level(logging.WARNING, logger="chorething.evaluator"):
            result = evaluate(chores, "alice", NOW)

        assert result.overdue == []
        assert len(caplog.records) == 3

    def test_empty_list(self):
        result = evaluate([], "alice", NOW)
        assert result.overdue == []
        assert result.count == 0


class TestOverdueRules:
    """Boundary and ordering behaviour."""

    def test_due_exactly_now_is_not_overdue(self):
        result = evaluate([chore("Dishes", "alice", "2025-01-02 00:00:00")], "alice", NOW)
        assert result.overdue == []

    def test_one_second_before_now_is_overdue(self):
        result = evaluate([chore("Dishes", "alice", "2025-01-01 23:59:59")], "alice", NOW)
        assert result.overdue == ["Dishes"]

    def test_future_chore(self):
        result = evaluate([chore("Dishes", "alice", "2025-02-01 00:00:00")], "alice", NOW)
        assert result.overdue == []

    def test_username_match_is_case_sensitive(self):
        result = evaluate([chore("Dishes", "Alice", "2025-01-01 10:00:00")], "alice", NOW)
        assert result.overdue == []

    def test_order_follows_input(self):
        chores = [
            chore("Zebra", "alice", "2024-12-30 00:00:00"),
            chore("Future", "alice", "2030-01-01 00:00:00"),
            chore("Apple", "alice", "2024-12-31 00:00:00"),
            chore("Bob's", "bob", "2024-12-31 00:00:00"),
            chore("Middle", "alice", "2024-01-01 00:00:00"),
        ]

        result = evaluate(chores, "alice", NOW)

        assert result.overdue == ["Zebra", "Apple", "Middle"]

    def test_last_matching_user_id_wins(self):
        chores = [
            chore("A", "alice", "2024-12-30 00:00:00", user_id=3),
            chore("B", "bob", "2024-12-30 00:00:00", user_id=9),
            chore("C", "alice", "2030-01-01 00:00:00", user_id=4),
        ]

        assert evaluate(chores, "alice", NOW).user_id == 4

    def test_idempotent(self):
        chores = [
            chore("A", "alice", "2024-12-30 00:00:00"),
            chore("B", "alice", "bad"),
            chore("C", "alice", "2030-01-01 00:00:00"),
        ]

        assert evaluate(chores, "alice", NOW) == evaluate(chores, "alice", NOW)

    def test_aware_now_uses_its_timezone(self):
        tz = timezone(timedelta(hours=-5))
        now = datetime(2025, 1, 1, 10, 30, tzinfo=tz)

        result = evaluate(
            [
                chore("Before", "alice", "2025-01-01 10:00:00"),
                chore("After", "alice", "2025-01-01 11:00:00"),
            ],
            "alice",
            now,
        )

        assert result.overdue == ["Before"]


class TestParseExecutionTime:
    def test_naive(self):
        assert parse_execution_time("2025-03-30 23:59:59", NOW) == datetime(2025, 3, 30, 23, 59, 59)

    def test_aware(self):
        now = datetime(2025, 1, 1, tzinfo=timezone.utc)
        parsed = parse_execution_time("2025-03-30 23:59:59", now)
        assert parsed.tzinfo is timezone.utc

    @pytest.mark.parametrize("value", ["not-a-date", "2025-03-30", "2025-03-30T23:59:59", "2025-13-01 00:00:00", "2025-1-1 1:0:0"])
    def test_invalid(self, value):
        with pytest.raises(ParseError):
            parse_execution_time(value, NOW)
