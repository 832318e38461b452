"""
Application-layer exceptions.

These exceptions are used across application and infrastructure layers.
Only LocalPersistenceError is ever surfaced to a caller as a failed
operation; remote and AI failures are absorbed by the use cases.
"""

from domain.models.workout_log import InvalidSyncTransition


class FitGuideError(Exception):
    """Base class for FitGuide errors."""

    pass


class LocalPersistenceError(FitGuideError):
    """Writing to the device-local cache failed.

    Fatal to the operation that attempted the write: a workout that cannot
    be cached locally is reported as not recorded.
    """

    pass


class RemoteUnavailableError(FitGuideError):
    """The remote store failed, timed out, or is not configured."""

    pass


class CatalogError(FitGuideError):
    """The static exercise catalog is missing or violates its invariants."""

    pass


__all__ = [
    "FitGuideError",
    "LocalPersistenceError",
    "RemoteUnavailableError",
    "CatalogError",
    "InvalidSyncTransition",
]
