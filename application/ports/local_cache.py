"""
Local Cache Interface (Port).

Device-local key/value storage that survives restarts: the workout log
list, the anonymous device identity and the last saved profile.
"""
from typing import Any, Dict, List, Optional, Protocol


class LocalCache(Protocol):
    """
    Abstract interface for device-local storage.

    Reads never raise: missing or unreadable data reads as empty. Writes
    raise LocalPersistenceError when the data could not be persisted.
    """

    def read_logs(self) -> List[Dict[str, Any]]:
        """Cached log records, newest first as written."""
        ...

    def write_logs(self, records: List[Dict[str, Any]]) -> None:
        """Replace the cached log records."""
        ...

    def clear_logs(self) -> None:
        """Remove the whole log list."""
        ...

    def get_device_id(self) -> Optional[str]:
        ...

    def set_device_id(self, device_id: str) -> None:
        ...

    def clear_device_id(self) -> None:
        ...

    def read_profile(self) -> Optional[Dict[str, Any]]:
        ...

    def write_profile(self, record: Dict[str, Any]) -> None:
        ...
