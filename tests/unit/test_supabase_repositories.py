"""
Unit tests for the Supabase repository implementations.

The Supabase client is replaced with a MagicMock whose query builder
returns itself, so each test only sets what execute() hands back.
"""
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from application.exceptions import RemoteUnavailableError
from infrastructure.db.profile_repository import (
    SupabaseProfileRepository,
    profile_to_row,
    row_to_profile,
)
from infrastructure.db.workout_log_repository import (
    SupabaseWorkoutLogRepository,
    UnconfiguredWorkoutLogRepository,
)
from tests.fakes import make_log, make_profile

pytestmark = pytest.mark.unit

QUERY_METHODS = ("select", "insert", "update", "upsert", "delete", "eq", "gte", "lte", "order", "limit")


def _mock_client(data=None, error=None):
    client = MagicMock()
    query = MagicMock()
    for name in QUERY_METHODS:
        getattr(query, name).return_value = query
    if error is not None:
        query.execute.side_effect = error
    else:
        query.execute.return_value = MagicMock(data=data)
    client.table.return_value = query
    return client, query


def _row(log_id="a1b2", user_id="user-1"):
    record = make_log(log_id, user_id=user_id).to_record()
    record["created_at"] = "2025-01-15T10:00:01+00:00"
    return record


class TestSupabaseWorkoutLogRepository:
    def test_create_sends_row_without_id(self):
        client, query = _mock_client(data=[_row("a1b2")])
        repo = SupabaseWorkoutLogRepository(client)

        stored = repo.create(make_log("local_1_aaa"))

        client.table.assert_called_with("workout_logs")
        payload = query.insert.call_args[0][0]
        assert "id" not in payload
        assert payload["exercise_id"] == "chest_4"
        assert stored.id == "a1b2"

    def test_create_without_returned_row_fails(self):
        client, _ = _mock_client(data=[])
        with pytest.raises(RemoteUnavailableError):
            SupabaseWorkoutLogRepository(client).create(make_log("local_1_aaa"))

    def test_list_for_user_filters_and_orders(self):
        client, query = _mock_client(data=[_row("a"), _row("b")])

        logs = SupabaseWorkoutLogRepository(client).list_for_user("user-1")

        query.eq.assert_called_with("user_id", "user-1")
        query.order.assert_called_with("completed_at", desc=True)
        assert [log.id for log in logs] == ["a", "b"]

    def test_malformed_rows_are_skipped(self):
        client, _ = _mock_client(data=[{"id": "broken"}, _row("ok")])
        logs = SupabaseWorkoutLogRepository(client).list_for_user("user-1")
        assert [log.id for log in logs] == ["ok"]

    def test_list_by_date_range_sends_bounds(self):
        client, query = _mock_client(data=[])
        start = datetime(2025, 1, 1, tzinfo=timezone.utc)
        end = datetime(2025, 1, 31, tzinfo=timezone.utc)

        SupabaseWorkoutLogRepository(client).list_by_date_range("user-1", start, end)

        query.gte.assert_called_with("completed_at", start.isoformat())
        query.lte.assert_called_with("completed_at", end.isoformat())

    def test_reassign_owner_counts_rows(self):
        client, query = _mock_client(data=[_row("a"), _row("b")])

        count = SupabaseWorkoutLogRepository(client).reassign_owner("device_1_abc", "user-9")

        query.update.assert_called_with({"user_id": "user-9"})
        query.eq.assert_called_with("user_id", "device_1_abc")
        assert count == 2

    def test_reassign_owner_with_no_rows(self):
        client, _ = _mock_client(data=None)
        assert SupabaseWorkoutLogRepository(client).reassign_owner("device_1_abc", "user-9") == 0

    def test_delete_for_user(self):
        client, query = _mock_client(data=[_row("a")])
        assert SupabaseWorkoutLogRepository(client).delete_for_user("user-1") == 1
        query.delete.assert_called_once()

    @pytest.mark.parametrize("call", [
        lambda repo: repo.create(make_log("local_1_aaa")),
        lambda repo: repo.list_for_user("user-1"),
        lambda repo: repo.reassign_owner("device_1_abc", "user-9"),
        lambda repo: repo.delete_for_user("user-1"),
    ])
    def test_client_errors_become_remote_unavailable(self, call):
        client, _ = _mock_client(error=ConnectionError("connection reset"))
        with pytest.raises(RemoteUnavailableError, match="connection reset"):
            call(SupabaseWorkoutLogRepository(client))


class TestUnconfiguredWorkoutLogRepository:
    def test_every_call_fails(self):
        repo = UnconfiguredWorkoutLogRepository()
        with pytest.raises(RemoteUnavailableError, match="not configured"):
            repo.list_for_user("user-1")
        with pytest.raises(RemoteUnavailableError):
            repo.create(make_log("local_1_aaa"))


class TestProfileMapping:
    def test_profile_to_row(self):
        row = profile_to_row(make_profile(user_id="user-1", location="Gym", equipment=["Rower"]))
        assert row["name"] == "Test User"
        assert row["location"] == "GYM"
        assert row["available_equipment"] == ["Rower"]

    def test_row_to_profile_splits_name(self):
        profile = row_to_profile({
            "id": "user-1",
            "name": "Ada King Lovelace",
            "height": 170,
            "weight": 60,
            "location": "HOME",
        })
        assert profile.first_name == "Ada"
        assert profile.last_name == "King Lovelace"
        assert profile.location.value == "Home"
        assert profile.available_equipment == []

    def test_row_to_profile_defaults_name(self):
        profile = row_to_profile({"id": "user-1", "height": 170, "weight": 60, "location": "GYM"})
        assert (profile.first_name, profile.last_name) == ("FitGuide", "User")


class TestSupabaseProfileRepository:
    def test_get_returns_none_when_missing(self):
        client, query = _mock_client(data=[])
        assert SupabaseProfileRepository(client).get("user-1") is None
        client.table.assert_called_with("user_profiles")
        query.eq.assert_called_with("id", "user-1")

    def test_get_maps_row(self):
        client, _ = _mock_client(data=[{
            "id": "user-1", "name": "Ada Lovelace", "height": 170, "weight": 60, "location": "GYM",
        }])
        assert SupabaseProfileRepository(client).get("user-1").first_name == "Ada"

    def test_upsert_sends_row(self):
        client, query = _mock_client(data=[])
        profile = make_profile(user_id="user-1")

        assert SupabaseProfileRepository(client).upsert(profile) == profile
        assert query.upsert.call_args[0][0]["id"] == "user-1"

    def test_errors_become_remote_unavailable(self):
        client, _ = _mock_client(error=TimeoutError("read timeout"))
        with pytest.raises(RemoteUnavailableError):
            SupabaseProfileRepository(client).get("user-1")
