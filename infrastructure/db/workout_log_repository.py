"""
Supabase implementation of WorkoutLogRepository.

Rows live in the workout_logs table. Supabase assigns the id and
created_at on insert; every query filters on user_id.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List

from pydantic import ValidationError
from supabase import Client

from application.exceptions import RemoteUnavailableError
from domain.models import WorkoutLog

logger = logging.getLogger(__name__)

TABLE = "workout_logs"


class SupabaseWorkoutLogRepository:
    """
    Supabase implementation of WorkoutLogRepository protocol.

    Errors are logged and re-raised as RemoteUnavailableError so the store
    can degrade to its local cache.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def create(self, log: WorkoutLog) -> WorkoutLog:
        try:
            result = self._client.table(TABLE) \
                .insert(log.to_remote_record()) \
                .execute()
        except Exception as e:
            logger.error(f"Error inserting workout log {log.id}: {e}")
            raise RemoteUnavailableError(str(e)) from e

        if not result.data:
            raise RemoteUnavailableError(f"Insert of workout log {log.id} returned no row")
        return WorkoutLog.model_validate(result.data[0])

    def list_for_user(self, user_id: str) -> List[WorkoutLog]:
        try:
            result = self._client.table(TABLE) \
                .select("*") \
                .eq("user_id", user_id) \
                .order("completed_at", desc=True) \
                .execute()
        except Exception as e:
            logger.error(f"Error fetching workout logs for {user_id}: {e}")
            raise RemoteUnavailableError(str(e)) from e

        return self._parse_rows(result.data)

    def list_by_date_range(
        self,
        user_id: str,
        start: datetime,
        end: datetime,
    ) -> List[WorkoutLog]:
        try:
            result = self._client.table(TABLE) \
                .select("*") \
                .eq("user_id", user_id) \
                .gte("completed_at", start.isoformat()) \
                .lte("completed_at", end.isoformat()) \
                .order("completed_at", desc=True) \
                .execute()
        except Exception as e:
            logger.error(f"Error fetching workout logs for {user_id} in range: {e}")
            raise RemoteUnavailableError(str(e)) from e

        return self._parse_rows(result.data)

    def reassign_owner(self, from_user_id: str, to_user_id: str) -> int:
        """Bulk owner update. Zero matching rows is not an error."""
        try:
            result = self._client.table(TABLE) \
                .update({"user_id": to_user_id}) \
                .eq("user_id", from_user_id) \
                .execute()
        except Exception as e:
            logger.error(f"Error migrating workout logs {from_user_id} -> {to_user_id}: {e}")
            raise RemoteUnavailableError(str(e)) from e

        return len(result.data) if result.data else 0

    def delete_for_user(self, user_id: str) -> int:
        try:
            result = self._client.table(TABLE) \
                .delete() \
                .eq("user_id", user_id) \
                .execute()
        except Exception as e:
            logger.error(f"Error deleting workout logs for {user_id}: {e}")
            raise RemoteUnavailableError(str(e)) from e

        return len(result.data) if result.data else 0

    @staticmethod
    def _parse_rows(rows: List[Dict[str, Any]]) -> List[WorkoutLog]:
        logs = []
        for row in rows or []:
            try:
                logs.append(WorkoutLog.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping malformed workout_logs row {row.get('id')}: {e}")
        return logs


class UnconfiguredWorkoutLogRepository:
    """
    Stand-in remote used when Supabase credentials are not set.

    Every call fails fast, so the store runs purely on its local cache and
    reports the remote as unavailable.
    """

    def _fail(self, *args, **kwargs):
        raise RemoteUnavailableError("Supabase is not configured")

    create = _fail
    list_for_user = _fail
    list_by_date_range = _fail
    reassign_owner = _fail
    delete_for_user = _fail
