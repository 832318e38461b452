"""
ProfileService Use Case.

The profile captured at onboarding is cached on the device and, for a
signed-in user, mirrored to the user_profiles table.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from application.exceptions import LocalPersistenceError, RemoteUnavailableError
from application.ports import LocalCache, ProfileRepository
from application.use_cases.remote_call import RemoteCaller
from domain.models import UserProfile

logger = logging.getLogger(__name__)


@dataclass
class SaveProfileResult:
    profile: UserProfile
    remote_saved: bool = False
    error: Optional[str] = None


class ProfileService:
    """
    Loads and saves the user profile.

    The cached copy is authoritative on the device. The remote row is only
    consulted when nothing is cached yet, and a remote hit is cached.
    """

    def __init__(
        self,
        cache: LocalCache,
        remote_profiles: Optional[ProfileRepository] = None,
        *,
        timeout: float = 5.0,
        remote_caller: Optional[RemoteCaller] = None,
    ) -> None:
        self._cache = cache
        self._remote = remote_profiles
        self._timeout = timeout
        self._remote_caller = remote_caller or RemoteCaller(thread_name_prefix="profile_remote_")

    def save(self, profile: UserProfile) -> SaveProfileResult:
        """
        Cache the profile, then upsert it remotely when it has a user id.

        Raises:
            LocalPersistenceError: If the profile could not be cached
        """
        self._cache.write_profile(profile.model_dump(mode="json"))

        if not profile.id or self._remote is None:
            return SaveProfileResult(profile=profile)

        try:
            self._remote_caller.call(self._remote.upsert, profile, timeout=self._timeout)
        except RemoteUnavailableError as e:
            logger.warning(f"Profile {profile.id} saved locally only: {e}")
            return SaveProfileResult(profile=profile, error=str(e))

        return SaveProfileResult(profile=profile, remote_saved=True)

    def load(self, user_id: Optional[str] = None) -> Optional[UserProfile]:
        cached = self._cached_profile()
        if cached is not None and (user_id is None or cached.id in (None, user_id)):
            return cached

        if not user_id or self._remote is None:
            return cached

        try:
            profile = self._remote_caller.call(self._remote.get, user_id, timeout=self._timeout)
        except RemoteUnavailableError as e:
            logger.warning(f"Could not load remote profile for {user_id}: {e}")
            return cached

        if profile is None:
            return cached

        try:
            self._cache.write_profile(profile.model_dump(mode="json"))
        except LocalPersistenceError as e:
            logger.warning(f"Could not cache profile for {user_id}: {e}")
        return profile

    def _cached_profile(self) -> Optional[UserProfile]:
        record = self._cache.read_profile()
        if not record:
            return None
        try:
            return UserProfile.model_validate(record)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed cached profile: {e.error_count()} errors")
            return None
