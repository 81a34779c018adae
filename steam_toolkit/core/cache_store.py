# ===== IMPORTS & DEPENDENCIES =====
import logging
import os
import hashlib
from typing import Dict, Optional, Protocol

from steam_toolkit.core.errors import CacheFault

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== TYPES & INTERFACES =====
class KeyValueStore(Protocol):
    """The storage surface the toolkit caches records in. Any method may raise CacheFault."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...

# ===== CORE BUSINESS LOGIC =====
class MemoryStore:
    """A dict-backed store that lives as long as the process."""

    def __init__(self):
        self._items: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)


class FileStore:
    """Stores each value in its own file under `cache_dir`, named by the key's hash."""

    def __init__(self, cache_dir: str):
        self._cache_dir = cache_dir
        try:
            os.makedirs(self._cache_dir, exist_ok=True)
        except OSError as e:
            raise CacheFault(f"Cannot create cache dir {self._cache_dir}: {e}") from e
        logger.debug(f"[{self.__class__.__name__}] Initialized with cache dir: {self._cache_dir}")

    def _get_cache_path(self, key: str) -> str:
        """Generates a cache file path from a given key."""
        hashed_key = hashlib.sha256(key.encode('utf-8')).hexdigest()
        return os.path.join(self._cache_dir, f"{hashed_key}.json")

    def get(self, key: str) -> Optional[str]:
        cache_path = self._get_cache_path(key)
        if not os.path.exists(cache_path):
            return None
        try:
            with open(cache_path, 'r', encoding='utf-8') as f:
                return f.read()
        except OSError as e:
            raise CacheFault(f"Cannot read {cache_path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        cache_path = self._get_cache_path(key)
        try:
            with open(cache_path, 'w', encoding='utf-8') as f:
                f.write(value)
        except OSError as e:
            raise CacheFault(f"Cannot write {cache_path}: {e}") from e
        logger.debug(f"[{self.__class__.__name__}] Saved '{key}' to {cache_path}")

    def remove(self, key: str) -> None:
        cache_path = self._get_cache_path(key)
        try:
            os.remove(cache_path)
        except FileNotFoundError:
            return
        except OSError as e:
            raise CacheFault(f"Cannot remove {cache_path}: {e}") from e
