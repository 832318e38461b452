"""
Workout Log Repository Interface (Port).

Remote, user-scoped persistence for workout logs. Implementations raise
RemoteUnavailableError on any transport or server failure; callers bound
each call with their own timeout.
"""
from datetime import datetime
from typing import List, Protocol

from domain.models import WorkoutLog


class WorkoutLogRepository(Protocol):
    """
    Abstract interface for the remote workout_logs store.

    Every query is scoped to a single owner. The store assigns permanent
    ids on insert.
    """

    def create(self, log: WorkoutLog) -> WorkoutLog:
        """
        Insert a log entry.

        Args:
            log: Pending entry; its temporary id is not sent

        Returns:
            The stored entry carrying the remote id

        Raises:
            RemoteUnavailableError: If the insert fails
        """
        ...

    def list_for_user(self, user_id: str) -> List[WorkoutLog]:
        """All entries owned by `user_id`, newest first."""
        ...

    def list_by_date_range(
        self,
        user_id: str,
        start: datetime,
        end: datetime,
    ) -> List[WorkoutLog]:
        """Entries owned by `user_id` completed within [start, end]."""
        ...

    def reassign_owner(self, from_user_id: str, to_user_id: str) -> int:
        """
        Move every entry owned by `from_user_id` to `to_user_id`.

        Returns:
            Number of entries reassigned (0 is a valid outcome)
        """
        ...

    def delete_for_user(self, user_id: str) -> int:
        """Delete every entry owned by `user_id`. Returns rows deleted."""
        ...
