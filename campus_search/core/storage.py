"""Durable key/value storage backends for client-side caching."""

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import quote

from ..exceptions import CacheError


class KeyValueStorage(ABC):
    """String key/value store with the semantics of browser local storage."""
    
    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value or None if the key is absent."""
    
    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
    
    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove a key; removing an absent key is not an error."""


class MemoryStorage(KeyValueStorage):
    """Process-local storage, optionally with a size quota in characters."""
    
    def __init__(self, quota: Optional[int] = None) -> None:
        self._items: Dict[str, str] = {}
        self.quota = quota
    
    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)
    
    def set_item(self, key: str, value: str) -> None:
        if self.quota is not None:
            used = sum(len(k) + len(v) for k, v in self._items.items() if k != key)
            if used + len(key) + len(value) > self.quota:
                raise CacheError(f"Storage quota of {self.quota} exceeded")
        self._items[key] = value
    
    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
    
    def __len__(self) -> int:
        return len(self._items)


class FileStorage(KeyValueStorage):
    """Stores every key as a UTF-8 file inside a directory."""
    
    def __init__(self, directory: str) -> None:
        self.directory = Path(directory)
    
    def _path(self, key: str) -> Path:
        return self.directory / quote(key, safe="")
    
    def get_item(self, key: str) -> Optional[str]:
        try:
            return self._path(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CacheError(f"Failed to read '{key}': {e}") from e
    
    def set_item(self, key: str, value: str) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            # Write to a temporary file first so readers never see partial data
            fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=".tmp-")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_path, self._path(key))
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise CacheError(f"Failed to write '{key}': {e}") from e
    
    def remove_item(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise CacheError(f"Failed to remove '{key}': {e}") from e
