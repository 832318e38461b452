"""
Profile Repository Interface (Port).

Remote storage for the user_profiles table.
"""
from typing import Optional, Protocol

from domain.models import UserProfile


class ProfileRepository(Protocol):
    """Remote profile store keyed by user id."""

    def get(self, user_id: str) -> Optional[UserProfile]:
        """
        Fetch a profile.

        Returns:
            The profile, or None if the user has none yet

        Raises:
            RemoteUnavailableError: If the store cannot be reached
        """
        ...

    def upsert(self, profile: UserProfile) -> UserProfile:
        """Create or replace the row for `profile.id`."""
        ...
