"""Wire decoding tests for Chore and User."""

import pytest

from chorething.errors import DecodeError
from chorething.models import Chore, CycleOutcome, PollResult, User, decode_bool_int


def chore_json(**overrides):
    data = {
        "chore_id": 7,
        "chore_name": "Dishes",
        "last_tracked_time": "2024-12-31 09:00:00",
        "track_date_only": 0,
        "next_estimated_execution_time": "2025-01-01 10:00:00",
        "next_execution_assigned_to_user_id": 3,
        "is_rescheduled": 1,
        "is_reassigned": 0,
        "next_execution_assigned_user": {
            "id": 3,
            "username": "alice",
            "first_name": "Alice",
            "last_name": "Liddell",
            "display_name": "Alice Liddell",
            "picture_file_name": None,
            "row_created_timestamp": "2024-01-01 00:00:00",
        },
    }
    data.update(overrides)
    return data


class TestDecodeBoolInt:
    """Booleans sent as 0/1 integers."""

    def test_zero_is_false(self):
        assert decode_bool_int(0) is False

    @pytest.mark.parametrize("value", [1, 2, -1, 1000])
    def test_nonzero_is_true(self, value):
        assert decode_bool_int(value) is True

    @pytest.mark.parametrize("value", ["1", 1.0, True, False, None, [1]])
    def test_non_integer_fails(self, value):
        with pytest.raises(DecodeError):
            decode_bool_int(value)


class TestChoreDecoding:
    """Chore.from_json behaviour."""

    def test_full_chore(self):
        chore = Chore.from_json(chore_json())

        assert chore.chore_id == 7
        assert chore.chore_name == "Dishes"
        assert chore.track_date_only is False
        assert chore.is_rescheduled is True
        assert chore.is_reassigned is False
        assert chore.next_execution_assigned_to_user_id == 3
        assert chore.next_execution_assigned_user.username == "alice"
        assert chore.next_execution_assigned_user.picture_file_name == ""

    def test_missing_fields_use_zero_values(self):
        chore = Chore.from_json({"chore_name": "Trash"})

        assert chore.chore_id == 0
        assert chore.next_estimated_execution_time == ""
        assert chore.is_rescheduled is False
        assert chore.next_execution_assigned_user == User()

    def test_null_assigned_user(self):
        chore = Chore.from_json(chore_json(next_execution_assigned_user=None))
        assert chore.next_execution_assigned_user.username == ""

    def test_bool_flag_as_string_fails(self):
        with pytest.raises(DecodeError):
            Chore.from_json(chore_json(is_reassigned="yes"))

    def test_wrong_type_for_int_field_fails(self):
        with pytest.raises(DecodeError):
            Chore.from_json(chore_json(chore_id="7"))

    def test_wrong_type_for_name_fails(self):
        with pytest.raises(DecodeError):
            Chore.from_json(chore_json(chore_name=42))

    def test_non_object_fails(self):
        with pytest.raises(DecodeError):
            Chore.from_json(["not", "a", "chore"])


class TestUserDecoding:
    def test_user(self):
        user = User.from_json({"id": 2, "username": "bob", "display_name": "Bob"})
        assert user.id == 2
        assert user.username == "bob"
        assert user.first_name == ""

    def test_user_id_as_bool_fails(self):
        with pytest.raises(DecodeError):
            User.from_json({"id": True})


class TestResults:
    def test_poll_result_count(self):
        assert PollResult(overdue=["a", "b"]).count == 2
        assert PollResult().user_id == -1

    def test_cycle_outcome_failed(self):
        assert CycleOutcome(error="boom").failed
        assert not CycleOutcome(overdue=["a"]).failed
