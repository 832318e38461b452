"""
Unit tests for the offline-first WorkoutLogStore.

Tests for:
- record() / record_session(): local-first write, background sync, id patching
- stalled background syncs leaving reads and migration unaffected
- load_all() / load_range(): merge, owner filter, degraded status
- migrate() / promote_device(): anonymous history hand-over
- clear_all(): remote then local wipe
- change listeners
"""

import threading
from datetime import datetime, timedelta, timezone

import pytest

from application.exceptions import LocalPersistenceError, RemoteUnavailableError
from application.use_cases.workout_log_store import (
    EVENT_LOGS_CLEARED,
    EVENT_WORKOUT_LOGGED,
    EVENT_WORKOUTS_MIGRATED,
    RemoteStatus,
    WorkoutLogStore,
    merge_logs,
)
from domain.models import MANUAL_LOG_EXERCISE_ID, SyncState
from tests.fakes import (
    FakeLocalCache,
    FakeWorkoutLogRepository,
    make_exercise,
    make_log,
)

DEVICE_ID = "device_1736935200000_abc123xyz"
NOW = datetime(2025, 1, 15, 10, 0, tzinfo=timezone.utc)


class GatedWorkoutLogRepository(FakeWorkoutLogRepository):
    """Holds every create() until the test opens the gate."""

    def __init__(self):
        super().__init__()
        self.gate = threading.Event()

    def create(self, log):
        self.gate.wait(timeout=5)
        return super().create(log)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def repo():
    return FakeWorkoutLogRepository()


@pytest.fixture
def cache():
    return FakeLocalCache()


@pytest.fixture
def events():
    return []


@pytest.fixture
def make_store(repo, cache, events):
    """Factory for stores wired to the fakes; closed after the test."""
    stores = []

    def _make(remote=None, **kwargs):
        kwargs.setdefault("read_timeout", 1.0)
        kwargs.setdefault("write_timeout", 1.0)
        kwargs.setdefault("clock", lambda: NOW)
        store = WorkoutLogStore(remote or repo, cache, **kwargs)
        store.subscribe(lambda event, payload: events.append((event, payload)))
        stores.append(store)
        return store

    yield _make

    for store in stores:
        store.close()


@pytest.fixture
def store(make_store):
    return make_store()


@pytest.fixture
def exercise():
    return make_exercise("push_ups", category="Strength", muscles=["Chest", "Triceps"])


# =============================================================================
# Merge
# =============================================================================


@pytest.mark.unit
class TestMergeLogs:
    def test_remote_wins_on_same_id(self):
        stale = make_log("r1", exercise=make_exercise("old_name"))
        fresh = make_log("r1", exercise=make_exercise("new_name"))

        merged = merge_logs([stale], [fresh])

        assert merged == [fresh]

    def test_union_sorted_newest_first(self):
        older = make_log("local_1_aaa", completed_at=NOW - timedelta(days=1))
        newer = make_log("r1", completed_at=NOW)

        merged = merge_logs([older], [newer])

        assert [e.id for e in merged] == ["r1", "local_1_aaa"]

    def test_empty_sources(self):
        assert merge_logs([], []) == []


# =============================================================================
# Recording
# =============================================================================


@pytest.mark.unit
class TestRecord:
    def test_record_returns_pending_entry(self, store, cache, exercise, events):
        entry = store.record("user-1", exercise)

        assert entry.sync_state is SyncState.PENDING
        assert entry.user_id == "user-1"
        assert entry.completed_at == NOW
        assert entry.exercise_name == "Push Ups"
        assert (EVENT_WORKOUT_LOGGED, entry) in events

    def test_record_is_visible_before_sync_finishes(self, make_store, cache, exercise):
        gated = GatedWorkoutLogRepository()
        store = make_store(remote=gated)
        try:
            entry = store.record("user-1", exercise)

            snapshot = store.load_all("user-1")

            assert [e.id for e in snapshot.entries] == [entry.id]
            assert snapshot.status is RemoteStatus.OK
        finally:
            gated.gate.set()

    def test_sync_patches_remote_id_and_keeps_timestamp(self, store, repo, cache, exercise):
        entry = store.record("user-1", exercise)
        assert store.flush(timeout=2)

        cached = cache.read_logs()
        assert len(cached) == 1
        remote_id = repo.get_all()[0].id
        assert cached[0]["id"] == remote_id

        snapshot = store.load_all("user-1")
        assert len(snapshot.entries) == 1
        assert snapshot.entries[0].id == remote_id
        assert snapshot.entries[0].sync_state is SyncState.SYNCED
        assert snapshot.entries[0].completed_at == entry.completed_at

    def test_sync_timeout_keeps_entry_pending(self, make_store, repo, cache, exercise):
        repo.delay = 0.5
        store = make_store(write_timeout=0.05)

        entry = store.record("user-1", exercise)
        assert store.flush(timeout=2)

        assert cache.read_logs()[0]["id"] == entry.id

    @pytest.mark.parametrize("error", [
        RemoteUnavailableError("network down"),
        RuntimeError("500 from PostgREST"),
    ])
    def test_sync_failure_keeps_entry_pending(self, store, repo, cache, exercise, error):
        repo.fail_with = error

        entry = store.record("user-1", exercise)
        assert store.flush(timeout=2)

        snapshot = store.load_all("user-1")
        assert [e.id for e in snapshot.entries] == [entry.id]
        assert snapshot.status is RemoteStatus.UNAVAILABLE
        assert snapshot.is_degraded

    def test_local_failure_is_fatal(self, store, repo, cache, exercise, events):
        cache.fail_writes = True

        with pytest.raises(LocalPersistenceError):
            store.record("user-1", exercise)

        assert store.flush(timeout=1)
        assert repo.calls == []
        assert events == []

    def test_new_entry_goes_first_in_cache(self, store, cache, exercise):
        cache.seed_logs([make_log("r-old", completed_at=NOW - timedelta(days=2)).to_record()])

        store.record("user-1", exercise)

        assert [r["exercise_id"] for r in cache.read_logs()] == ["push_ups", "chest_4"]

    def test_sync_after_entry_removed_is_ignored(self, make_store, cache, exercise):
        gated = GatedWorkoutLogRepository()
        store = make_store(remote=gated)

        store.record("user-1", exercise)
        cache.clear_logs()
        gated.gate.set()

        assert store.flush(timeout=2)
        assert cache.read_logs() == []


@pytest.mark.unit
class TestRecordSession:
    def test_session_entry_is_cached_pending(self, store, cache, events):
        entry = store.record_session("user-1", "Cardio", 30)

        assert entry.sync_state is SyncState.PENDING
        assert entry.exercise_id == MANUAL_LOG_EXERCISE_ID
        assert entry.exercise_name == "Quick Cardio Session"
        assert entry.reps == "30 mins"
        assert entry.duration == 1800
        assert entry.completed_at == NOW
        assert cache.read_logs()[0]["exercise_id"] == MANUAL_LOG_EXERCISE_ID
        assert (EVENT_WORKOUT_LOGGED, entry) in events

    def test_session_syncs_and_merges_with_exercises(self, store, repo, exercise):
        store.record("user-1", exercise)
        store.record_session("user-1", "Core", 15)
        assert store.flush(timeout=2)

        snapshot = store.load_all("user-1")

        assert snapshot.status is RemoteStatus.OK
        assert len(snapshot.entries) == 2
        assert {e.sync_state for e in snapshot.entries} == {SyncState.SYNCED}
        assert {e.id for e in snapshot.entries} == {log.id for log in repo.get_all()}
        session = next(e for e in snapshot.entries if e.is_manual)
        assert session.duration == 900

    def test_negative_duration_is_rejected(self, store, repo, cache):
        with pytest.raises(ValueError):
            store.record_session("user-1", "Strength", -5)

        assert cache.read_logs() == []
        assert repo.calls == []

    def test_local_failure_is_fatal(self, store, repo, cache, events):
        cache.fail_writes = True

        with pytest.raises(LocalPersistenceError):
            store.record_session("user-1", "Strength", 20)

        assert store.flush(timeout=1)
        assert repo.calls == []
        assert events == []


@pytest.mark.unit
class TestStalledSyncs:
    def test_stalled_creates_do_not_starve_reads(self, make_store, exercise):
        gated = GatedWorkoutLogRepository()
        gated.seed([make_log("r1", completed_at=NOW - timedelta(days=1))])
        store = make_store(remote=gated, write_timeout=0.05)
        try:
            for _ in range(6):
                store.record("user-1", exercise)
            assert store.flush(timeout=2)

            snapshot = store.load_all("user-1")

            assert snapshot.status is RemoteStatus.OK
            assert snapshot.remote_count == 1
            assert len(snapshot.entries) == 7
        finally:
            gated.gate.set()

    def test_stalled_creates_do_not_block_migration(self, make_store, cache, exercise):
        gated = GatedWorkoutLogRepository()
        cache.set_device_id(DEVICE_ID)
        store = make_store(remote=gated, write_timeout=0.05)
        try:
            for _ in range(6):
                store.record(DEVICE_ID, exercise)
            assert store.flush(timeout=2)

            result = store.promote_device("user-9")

            assert result.success
        finally:
            gated.gate.set()


# =============================================================================
# Loading
# =============================================================================


@pytest.mark.unit
class TestLoad:
    def test_remote_copy_wins(self, store, repo, cache):
        stale = make_log("r1", exercise=make_exercise("old_name"))
        fresh = make_log("r1", exercise=make_exercise("new_name"))
        cache.seed_logs([stale.to_record()])
        repo.seed([fresh])

        snapshot = store.load_all("user-1")

        assert snapshot.entries == [fresh]
        assert snapshot.local_count == 1
        assert snapshot.remote_count == 1

    def test_local_entries_filtered_by_owner(self, store, cache):
        cache.seed_logs([
            make_log("local_1_aaa", user_id="user-1").to_record(),
            make_log("local_2_bbb", user_id="someone-else").to_record(),
        ])

        snapshot = store.load_all("user-1")

        assert [e.id for e in snapshot.entries] == ["local_1_aaa"]

    def test_offline_skips_remote(self, make_store, repo, cache):
        cache.seed_logs([make_log("local_1_aaa").to_record()])
        store = make_store(is_online=lambda: False)

        snapshot = store.load_all("user-1")

        assert snapshot.status is RemoteStatus.OFFLINE
        assert len(snapshot.entries) == 1
        assert "list_for_user" not in repo.calls

    def test_slow_remote_read_falls_back(self, make_store, repo, cache):
        repo.delay = 0.5
        cache.seed_logs([make_log("local_1_aaa").to_record()])
        store = make_store(read_timeout=0.05)

        snapshot = store.load_all("user-1")

        assert snapshot.status is RemoteStatus.UNAVAILABLE
        assert [e.id for e in snapshot.entries] == ["local_1_aaa"]

    def test_malformed_cached_rows_are_skipped(self, store, cache):
        cache.seed_logs([{"id": "broken"}, make_log("local_1_aaa").to_record()])

        snapshot = store.load_all("user-1")

        assert [e.id for e in snapshot.entries] == ["local_1_aaa"]

    def test_load_range_is_inclusive(self, store, repo, cache):
        start = datetime(2025, 1, 10, tzinfo=timezone.utc)
        end = datetime(2025, 1, 20, tzinfo=timezone.utc)
        cache.seed_logs([
            make_log("local_1_aaa", completed_at=start).to_record(),
            make_log("local_2_bbb", completed_at=start - timedelta(seconds=1)).to_record(),
        ])
        repo.seed([
            make_log("r1", completed_at=end),
            make_log("r2", completed_at=end + timedelta(days=1)),
        ])

        snapshot = store.load_range("user-1", start, end)

        assert [e.id for e in snapshot.entries] == ["r1", "local_1_aaa"]

    def test_groups_by_day(self, store, repo):
        repo.seed([
            make_log("r1", completed_at=NOW),
            make_log("r2", completed_at=NOW - timedelta(hours=1)),
            make_log("r3", completed_at=NOW - timedelta(days=1)),
        ])

        groups = store.load_all("user-1").groups

        assert [g.count for g in groups] == [2, 1]


# =============================================================================
# Migration
# =============================================================================


@pytest.mark.unit
class TestMigrate:
    @pytest.fixture
    def anonymous_history(self, repo, cache):
        cache.set_device_id(DEVICE_ID)
        cache.seed_logs([
            make_log("local_1_aaa", user_id=DEVICE_ID).to_record(),
            make_log("r1", user_id=DEVICE_ID).to_record(),
        ])
        repo.seed([make_log("r1", user_id=DEVICE_ID), make_log("r2", user_id=DEVICE_ID)])

    def test_promote_device_moves_history(self, store, repo, cache, events, anonymous_history):
        result = store.promote_device("user-9")

        assert result.success
        assert result.migrated_count == 2
        assert result.from_user_id == DEVICE_ID
        assert {log.user_id for log in repo.get_all()} == {"user-9"}
        assert {r["user_id"] for r in cache.read_logs()} == {"user-9"}
        assert cache.get_device_id() is None
        assert (EVENT_WORKOUTS_MIGRATED, result) in events

        snapshot = store.load_all("user-9")
        assert {e.id for e in snapshot.entries} == {"local_1_aaa", "r1", "r2"}

    def test_migration_is_idempotent(self, store, repo, anonymous_history):
        store.migrate(DEVICE_ID, "user-9")

        again = store.migrate(DEVICE_ID, "user-9")

        assert again.success
        assert again.migrated_count == 0
        assert len(repo.get_all()) == 2

    def test_promote_without_device_is_noop(self, store, repo):
        result = store.promote_device("user-9")

        assert result.success
        assert result.migrated_count == 0
        assert repo.calls == []

    @pytest.mark.parametrize("from_id", [None, "", "user-2", "user-9"])
    def test_non_device_source_is_noop(self, store, repo, from_id):
        result = store.migrate(from_id, "user-9")

        assert result.success
        assert repo.calls == []

    def test_remote_failure_leaves_everything(self, store, repo, cache, events, anonymous_history):
        repo.fail_with = RemoteUnavailableError("network down")

        result = store.promote_device("user-9")

        assert not result.success
        assert "network down" in result.error
        assert cache.get_device_id() == DEVICE_ID
        assert {r["user_id"] for r in cache.read_logs()} == {DEVICE_ID}
        assert events == []

    def test_local_failure_after_remote_keeps_device_id(self, store, repo, cache, anonymous_history):
        cache.fail_writes = True

        result = store.promote_device("user-9")

        assert not result.success
        assert result.migrated_count == 2
        assert cache.get_device_id() == DEVICE_ID

        cache.fail_writes = False
        retry = store.promote_device("user-9")
        assert retry.success
        assert {r["user_id"] for r in cache.read_logs()} == {"user-9"}

    def test_every_cached_entry_is_reowned(self, store, cache, anonymous_history):
        cache.seed_logs(cache.read_logs() + [make_log("r7", user_id="user-2").to_record()])

        store.promote_device("user-9")

        assert {r["user_id"] for r in cache.read_logs()} == {"user-9"}

    def test_malformed_cached_rows_are_left_alone(self, store, cache, anonymous_history):
        broken = {"id": "local_2_bbb", "user_id": DEVICE_ID, "sets": "many"}
        cache.seed_logs(cache.read_logs() + [broken])

        result = store.promote_device("user-9")

        assert result.success
        records = cache.read_logs()
        assert broken in records
        assert {r["user_id"] for r in records if r != broken} == {"user-9"}


# =============================================================================
# Clearing
# =============================================================================


@pytest.mark.unit
class TestClearAll:
    def test_clears_remote_then_local(self, store, repo, cache, events):
        repo.seed([make_log("r1"), make_log("r2", user_id="someone-else")])
        cache.seed_logs([make_log("r1").to_record()])

        result = store.clear_all("user-1")

        assert result.remote_cleared
        assert result.remote_deleted == 1
        assert [log.id for log in repo.get_all()] == ["r2"]
        assert not cache.has_logs_key
        assert (EVENT_LOGS_CLEARED, result) in events

    def test_remote_failure_still_clears_local(self, store, repo, cache):
        repo.seed([make_log("r1")])
        cache.seed_logs([make_log("r1").to_record()])
        repo.fail_with = RemoteUnavailableError("network down")

        result = store.clear_all("user-1")

        assert not result.remote_cleared
        assert result.error
        assert cache.read_logs() == []

        # Remote rows come back on the next successful load
        repo.fail_with = None
        assert [e.id for e in store.load_all("user-1").entries] == ["r1"]

    def test_local_failure_raises(self, store, cache):
        cache.fail_writes = True
        with pytest.raises(LocalPersistenceError):
            store.clear_all("user-1")


# =============================================================================
# Listeners
# =============================================================================


@pytest.mark.unit
class TestListeners:
    def test_failing_listener_does_not_break_record(self, store, cache, exercise, events):
        def broken(event, payload):
            raise RuntimeError("boom")

        store.subscribe(broken)

        entry = store.record("user-1", exercise)

        assert cache.read_logs()[0]["exercise_id"] == "push_ups"
        assert (EVENT_WORKOUT_LOGGED, entry) in events

    def test_unsubscribe(self, store, exercise):
        received = []
        unsubscribe = store.subscribe(lambda event, payload: received.append(event))

        store.record("user-1", exercise)
        unsubscribe()
        unsubscribe()
        store.record("user-1", exercise)

        assert received == [EVENT_WORKOUT_LOGGED]
