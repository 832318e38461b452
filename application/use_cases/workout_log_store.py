"""
WorkoutLogStore Use Case.

Offline-first workout history. Writes land in the local cache first and
are synced to the remote store in the background; reads merge both
sources with the remote copy winning. Remote failures never surface as
errors: they are logged and reported through RemoteStatus.

Entry lifecycle:
    record()          -> PENDING (temporary id, local only)
    record_session()  -> PENDING, same path for manually logged sessions
    background sync   -> SYNCED  (remote id patched into the cache)
    migrate()         -> owner rewritten from the device id to the user
"""

import logging
import threading
from concurrent import futures
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from pydantic import ValidationError

from application.exceptions import (
    InvalidSyncTransition,
    LocalPersistenceError,
    RemoteUnavailableError,
)
from application.ports import LocalCache, WorkoutLogRepository
from application.use_cases.device_identity import DeviceIdentityService, is_anonymous_id
from application.use_cases.remote_call import RemoteCaller
from domain.models import Exercise, ExerciseCategory, WorkoutLog
from domain.services.progress import DailyLogGroup, group_by_date

logger = logging.getLogger(__name__)

DEFAULT_READ_TIMEOUT = 2.0
DEFAULT_WRITE_TIMEOUT = 5.0
SYNC_WORKERS = 2

EVENT_WORKOUT_LOGGED = "workout_logged"
EVENT_WORKOUTS_MIGRATED = "workouts_migrated"
EVENT_LOGS_CLEARED = "logs_cleared"

Listener = Callable[[str, Any], None]


class RemoteStatus(str, Enum):
    """How the remote half of a read went."""

    OK = "ok"
    UNAVAILABLE = "unavailable"  # failed or timed out
    OFFLINE = "offline"  # not attempted, no connectivity


@dataclass
class LogSnapshot:
    """Merged, newest-first view of a user's history."""

    entries: List[WorkoutLog] = field(default_factory=list)
    status: RemoteStatus = RemoteStatus.OK
    local_count: int = 0
    remote_count: int = 0

    @property
    def groups(self) -> List[DailyLogGroup]:
        return group_by_date(self.entries)

    @property
    def is_degraded(self) -> bool:
        return self.status is not RemoteStatus.OK


@dataclass
class MigrationResult:
    """Result of moving anonymous history to a signed-in user."""

    success: bool
    migrated_count: int = 0
    from_user_id: Optional[str] = None
    to_user_id: Optional[str] = None
    error: Optional[str] = None


@dataclass
class ClearResult:
    """Result of clear_all. The local cache is always cleared."""

    remote_cleared: bool
    remote_deleted: int = 0
    error: Optional[str] = None


def merge_logs(local: Iterable[WorkoutLog], remote: Iterable[WorkoutLog]) -> List[WorkoutLog]:
    """
    Union of both sources keyed by id, remote winning, newest first.

    Temporary and remote ids never collide, so a pending entry and its
    synced remote row appear once each only if the id patch was lost.
    """
    by_id: Dict[str, WorkoutLog] = {}
    for entry in local:
        by_id[entry.id] = entry
    for entry in remote:
        by_id[entry.id] = entry

    return sorted(by_id.values(), key=lambda e: e.completed_at, reverse=True)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class WorkoutLogStore:
    """
    Offline-first store for workout logs.

    The local cache is the source of truth for the device; the remote
    store is the source of truth across devices. A lock serialises every
    read-modify-write of the cached log list, so background id patches and
    foreground writes never lose each other's changes.

    Usage:
        >>> store = WorkoutLogStore(remote=repo, cache=cache)
        >>> entry = store.record("user-123", exercise)   # returns immediately
        >>> snapshot = store.load_all("user-123")
        >>> snapshot.entries, snapshot.status
    """

    def __init__(
        self,
        remote: WorkoutLogRepository,
        cache: LocalCache,
        *,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        write_timeout: float = DEFAULT_WRITE_TIMEOUT,
        is_online: Optional[Callable[[], bool]] = None,
        clock: Optional[Callable[[], datetime]] = None,
        identity: Optional[DeviceIdentityService] = None,
    ) -> None:
        """
        Initialize the store with its collaborators.

        Args:
            remote: Remote workout_logs repository
            cache: Device-local cache
            read_timeout: Seconds to wait for remote reads
            write_timeout: Seconds to wait for remote writes
            is_online: Connectivity check; reads are skipped when it returns False
            clock: Source of completion timestamps (UTC)
            identity: Device identity service (built on `cache` if omitted)
        """
        self._remote = remote
        self._cache = cache
        self._read_timeout = read_timeout
        self._write_timeout = write_timeout
        self._is_online = is_online or (lambda: True)
        self._clock = clock or _utc_now
        self._identity = identity or DeviceIdentityService(cache)

        self._lock = threading.Lock()
        self._remote_caller = RemoteCaller(thread_name_prefix="workout_remote_")
        # Stalled syncs hold their workers past the timeout; keep them off
        # the pool that serves reads.
        self._sync_executor = futures.ThreadPoolExecutor(
            max_workers=SYNC_WORKERS, thread_name_prefix="workout_sync_"
        )
        self._sync_caller = RemoteCaller(
            max_workers=SYNC_WORKERS, thread_name_prefix="workout_sync_remote_"
        )
        self._pending: Set[futures.Future] = set()
        self._pending_lock = threading.Lock()
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def record(self, user_id: str, exercise: Exercise) -> WorkoutLog:
        """
        Record a completed exercise.

        The entry is persisted locally before this returns; the remote
        sync runs in the background and is not awaited.

        Raises:
            LocalPersistenceError: If the entry could not be cached. Nothing
                is synced or announced in that case.
        """
        entry = WorkoutLog.snapshot(exercise, user_id=user_id, completed_at=self._clock())
        return self._record(entry)

    def record_session(
        self,
        user_id: str,
        category: ExerciseCategory,
        duration_minutes: int,
    ) -> WorkoutLog:
        """
        Record a manually logged session of `duration_minutes`.

        Takes the same local-first path as record().

        Raises:
            ValueError: If the duration is negative
            LocalPersistenceError: If the entry could not be cached
        """
        if duration_minutes < 0:
            raise ValueError(f"duration_minutes must be >= 0, got {duration_minutes}")
        entry = WorkoutLog.session(
            category, duration_minutes, user_id=user_id, completed_at=self._clock()
        )
        return self._record(entry)

    def _record(self, entry: WorkoutLog) -> WorkoutLog:
        with self._lock:
            records = self._cache.read_logs()
            try:
                self._cache.write_logs([entry.to_record()] + records)
            except LocalPersistenceError as e:
                logger.error(f"Failed to cache workout log for {entry.exercise_id}: {e}")
                raise

        logger.info(f"Recorded {entry.exercise_id} for {entry.user_id} as {entry.id}")
        self._notify(EVENT_WORKOUT_LOGGED, entry)

        future = self._sync_executor.submit(self._sync, entry)
        with self._pending_lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)
        return entry

    def _forget(self, future: futures.Future) -> None:
        with self._pending_lock:
            self._pending.discard(future)

    def _sync(self, entry: WorkoutLog) -> Optional[WorkoutLog]:
        """Push one pending entry and patch its id on success. Never raises."""
        try:
            stored = self._sync_caller.call(
                self._remote.create, entry, timeout=self._write_timeout
            )
        except RemoteUnavailableError as e:
            logger.warning(f"Workout log {entry.id} kept local only: {e}")
            return None

        try:
            return self._patch_id(entry.id, stored.id)
        except (InvalidSyncTransition, LocalPersistenceError) as e:
            logger.warning(f"Could not patch synced id for {entry.id}: {e}")
            return None

    def _patch_id(self, temp_id: str, remote_id: str) -> Optional[WorkoutLog]:
        """Swap a cached entry's temporary id for its remote id, nothing else."""
        with self._lock:
            records = self._cache.read_logs()
            for idx, record in enumerate(records):
                if record.get("id") == temp_id:
                    synced = WorkoutLog.model_validate(record).mark_synced(remote_id)
                    records[idx] = synced.to_record()
                    self._cache.write_logs(records)
                    logger.info(f"Synced workout log {temp_id} -> {remote_id}")
                    return synced

        logger.info(f"Workout log {temp_id} left the cache before sync finished")
        return None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def load_all(self, user_id: str) -> LogSnapshot:
        """Everything `user_id` has logged, from both sources."""
        remote, status = self._fetch_remote(self._remote.list_for_user, user_id)
        local = [e for e in self._read_local() if e.user_id == user_id]
        return self._snapshot(local, remote, status)

    def load_range(self, user_id: str, start: datetime, end: datetime) -> LogSnapshot:
        """Entries completed within [start, end], inclusive."""
        start, end = _as_aware(start), _as_aware(end)
        remote, status = self._fetch_remote(self._remote.list_by_date_range, user_id, start, end)
        local = [
            e
            for e in self._read_local()
            if e.user_id == user_id and start <= e.completed_at <= end
        ]
        return self._snapshot(local, remote, status)

    def _snapshot(
        self,
        local: List[WorkoutLog],
        remote: List[WorkoutLog],
        status: RemoteStatus,
    ) -> LogSnapshot:
        return LogSnapshot(
            entries=merge_logs(local, remote),
            status=status,
            local_count=len(local),
            remote_count=len(remote),
        )

    def _fetch_remote(self, fn: Callable[..., List[WorkoutLog]], *args: Any):
        if not self._is_online():
            return [], RemoteStatus.OFFLINE
        try:
            return list(self._remote_caller.call(fn, *args, timeout=self._read_timeout)), RemoteStatus.OK
        except RemoteUnavailableError as e:
            logger.warning(f"Remote workout logs unavailable, using local cache: {e}")
            return [], RemoteStatus.UNAVAILABLE

    def _read_local(self) -> List[WorkoutLog]:
        entries = []
        for record in self._cache.read_logs():
            try:
                entries.append(WorkoutLog.model_validate(record))
            except ValidationError as e:
                logger.warning(f"Skipping malformed cached workout log: {e.error_count()} errors")
        return entries

    # ------------------------------------------------------------------
    # Identity migration
    # ------------------------------------------------------------------

    def migrate(self, from_device_id: Optional[str], to_user_id: str) -> MigrationResult:
        """
        Move anonymous history from a device id to a signed-in user.

        Idempotent: running it again after success moves nothing. A remote
        failure leaves the cache and the device identity untouched so the
        migration can be retried.
        """
        if (
            not from_device_id
            or not is_anonymous_id(from_device_id)
            or from_device_id == to_user_id
        ):
            return MigrationResult(
                success=True, from_user_id=from_device_id, to_user_id=to_user_id
            )

        try:
            count = self._remote_caller.call(
                self._remote.reassign_owner,
                from_device_id,
                to_user_id,
                timeout=self._write_timeout,
            )
        except RemoteUnavailableError as e:
            logger.warning(f"Migration {from_device_id} -> {to_user_id} failed: {e}")
            return MigrationResult(
                success=False,
                from_user_id=from_device_id,
                to_user_id=to_user_id,
                error=str(e),
            )

        try:
            self._reassign_cached(to_user_id)
            self._identity.discard()
        except LocalPersistenceError as e:
            logger.error(f"Migrated {count} remote logs but local update failed: {e}")
            return MigrationResult(
                success=False,
                migrated_count=count,
                from_user_id=from_device_id,
                to_user_id=to_user_id,
                error=str(e),
            )

        result = MigrationResult(
            success=True,
            migrated_count=count,
            from_user_id=from_device_id,
            to_user_id=to_user_id,
        )
        logger.info(f"Migrated {count} workout logs from {from_device_id} to {to_user_id}")
        self._notify(EVENT_WORKOUTS_MIGRATED, result)
        return result

    def promote_device(self, to_user_id: str) -> MigrationResult:
        """Migrate whatever the current device identity owns to `to_user_id`."""
        return self.migrate(self._identity.current(), to_user_id)

    def _reassign_cached(self, to_user_id: str) -> None:
        """Re-own every valid cached entry; malformed rows are left as they are."""
        with self._lock:
            records = self._cache.read_logs()
            for idx, record in enumerate(records):
                try:
                    entry = WorkoutLog.model_validate(record)
                except ValidationError:
                    continue
                records[idx] = entry.reassigned_to(to_user_id).to_record()
            self._cache.write_logs(records)

    # ------------------------------------------------------------------
    # Clearing
    # ------------------------------------------------------------------

    def clear_all(self, user_id: str) -> ClearResult:
        """
        Delete the user's remote history, then wipe the local log cache.

        The local wipe happens even when the remote delete fails, so the
        remote rows can reappear on the next load.

        Raises:
            LocalPersistenceError: If the local cache could not be cleared
        """
        try:
            deleted = self._remote_caller.call(
                self._remote.delete_for_user, user_id, timeout=self._write_timeout
            )
            result = ClearResult(remote_cleared=True, remote_deleted=deleted)
        except RemoteUnavailableError as e:
            logger.warning(f"Remote clear for {user_id} failed, clearing local only: {e}")
            result = ClearResult(remote_cleared=False, error=str(e))

        with self._lock:
            self._cache.clear_logs()

        self._notify(EVENT_LOGS_CLEARED, result)
        return result

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register `listener(event, payload)` for change events.

        Returns:
            A callable that unregisters the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: str, payload: Any) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, payload)
            except Exception as e:
                logger.warning(f"Listener failed on {event}: {e}")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def flush(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for outstanding background syncs.

        Returns:
            True if every sync finished within `timeout`
        """
        with self._pending_lock:
            pending = set(self._pending)
        if not pending:
            return True
        _, not_done = futures.wait(pending, timeout=timeout)
        return not not_done

    def close(self) -> None:
        self.flush(timeout=self._write_timeout)
        self._sync_executor.shutdown(wait=False)
        self._sync_caller.shutdown()
        self._remote_caller.shutdown()
