"""Device-local storage adapters."""

from infrastructure.local.file_cache import JsonFileCache

__all__ = ["JsonFileCache"]
