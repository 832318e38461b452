"""
Supabase implementation of ProfileRepository.

The user_profiles row stores a single display name and an upper-case
location ("GYM" / "HOME"); this adapter maps it to and from UserProfile.
"""
import logging
from typing import Any, Dict, Optional

from supabase import Client

from application.exceptions import RemoteUnavailableError
from domain.models import UserProfile

logger = logging.getLogger(__name__)

TABLE = "user_profiles"


def profile_to_row(profile: UserProfile) -> Dict[str, Any]:
    return {
        "id": profile.id,
        "email": profile.email,
        "name": f"{profile.first_name} {profile.last_name}".strip(),
        "height": profile.height,
        "weight": profile.weight,
        "location": profile.location.value.upper(),
        "available_equipment": list(profile.available_equipment),
    }


def row_to_profile(row: Dict[str, Any]) -> UserProfile:
    """Split the stored name on the first space into first/last name."""
    first_name, _, last_name = (row.get("name") or "").strip().partition(" ")
    return UserProfile(
        id=row.get("id"),
        email=row.get("email"),
        first_name=first_name or "FitGuide",
        last_name=last_name or "User",
        height=row["height"],
        weight=row["weight"],
        location=str(row.get("location") or "Home").title(),
        available_equipment=row.get("available_equipment") or [],
    )


class SupabaseProfileRepository:
    """Supabase implementation of ProfileRepository protocol."""

    def __init__(self, client: Client):
        self._client = client

    def get(self, user_id: str) -> Optional[UserProfile]:
        try:
            result = self._client.table(TABLE) \
                .select("*") \
                .eq("id", user_id) \
                .limit(1) \
                .execute()
        except Exception as e:
            logger.error(f"Error fetching profile for {user_id}: {e}")
            raise RemoteUnavailableError(str(e)) from e

        if not result.data:
            return None
        return row_to_profile(result.data[0])

    def upsert(self, profile: UserProfile) -> UserProfile:
        try:
            result = self._client.table(TABLE) \
                .upsert(profile_to_row(profile)) \
                .execute()
        except Exception as e:
            logger.error(f"Error saving profile {profile.id}: {e}")
            raise RemoteUnavailableError(str(e)) from e

        logger.info(f"Saved profile {profile.id}")
        return row_to_profile(result.data[0]) if result.data else profile
