"""
Anonymous device identity.

A user who has not signed in still owns their workout history through a
device id generated on first use and kept in the local cache. Once the
user signs in, that history is migrated and the device id discarded.
"""

import logging
import secrets
import string
import time
from typing import Optional

from application.ports import LocalCache

logger = logging.getLogger(__name__)

DEVICE_ID_PREFIX = "device_"
_BASE36 = string.digits + string.ascii_lowercase


def generate_device_id() -> str:
    """``device_<epoch-ms>_<9 base36 chars>``"""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"{DEVICE_ID_PREFIX}{int(time.time() * 1000)}_{suffix}"


def is_anonymous_id(user_id: Optional[str]) -> bool:
    """True only for ids minted by generate_device_id."""
    return bool(user_id) and user_id.startswith(DEVICE_ID_PREFIX)


class DeviceIdentityService:
    """
    Lazily creates, reads and discards the device identity.

    Usage:
        >>> identity = DeviceIdentityService(cache)
        >>> owner = identity.get_or_create()
    """

    def __init__(self, cache: LocalCache) -> None:
        self._cache = cache

    def get_or_create(self) -> str:
        """
        Return the stored device id, generating and storing one if absent.

        Raises:
            LocalPersistenceError: If a new id cannot be stored
        """
        existing = self._cache.get_device_id()
        if existing:
            return existing

        device_id = generate_device_id()
        self._cache.set_device_id(device_id)
        logger.info(f"Created device identity {device_id}")
        return device_id

    def current(self) -> Optional[str]:
        return self._cache.get_device_id() or None

    def discard(self) -> None:
        self._cache.clear_device_id()

    @staticmethod
    def is_anonymous(user_id: Optional[str]) -> bool:
        return is_anonymous_id(user_id)
