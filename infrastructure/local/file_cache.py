"""
JSON-file implementation of LocalCache.

All keys live in one JSON document on disk. Each write replaces the file
atomically (write to a sibling temp file, then rename), so a crash never
leaves a half-written cache behind.
"""

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from application.exceptions import LocalPersistenceError

logger = logging.getLogger(__name__)

LOGS_KEY = "fitguide_workout_logs"
DEVICE_ID_KEY = "fitguide_device_id"
PROFILE_KEY = "fitguide_user"


class JsonFileCache:
    """
    LocalCache backed by a single JSON file.

    Unreadable or corrupt files read as empty so the app keeps working;
    the next successful write replaces them.
    """

    def __init__(self, path: Path):
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, Any]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Local cache {self._path} unreadable, treating as empty: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, Any]) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write local cache {self._path}: {e}")
            raise LocalPersistenceError(f"Could not write local cache: {e}") from e

    def _set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._save(data)

    def _remove(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if key in data:
                del data[key]
                self._save(data)

    # Workout logs

    def read_logs(self) -> List[Dict[str, Any]]:
        with self._lock:
            records = self._load().get(LOGS_KEY)
        if not isinstance(records, list):
            return []
        return [r for r in records if isinstance(r, dict)]

    def write_logs(self, records: List[Dict[str, Any]]) -> None:
        self._set(LOGS_KEY, records)

    def clear_logs(self) -> None:
        self._remove(LOGS_KEY)

    # Device identity

    def get_device_id(self) -> Optional[str]:
        with self._lock:
            value = self._load().get(DEVICE_ID_KEY)
        return value if isinstance(value, str) and value else None

    def set_device_id(self, device_id: str) -> None:
        self._set(DEVICE_ID_KEY, device_id)

    def clear_device_id(self) -> None:
        self._remove(DEVICE_ID_KEY)

    # Profile

    def read_profile(self) -> Optional[Dict[str, Any]]:
        with self._lock:
            value = self._load().get(PROFILE_KEY)
        return value if isinstance(value, dict) else None

    def write_profile(self, record: Dict[str, Any]) -> None:
        self._set(PROFILE_KEY, record)
