"""
Key-value storage service for onboarding state.

Stands in for the browser's localStorage: string values under string keys,
durable across runs. OnboardingState only ever touches one key.

Backends:
- InMemoryStore: process-local dict (tests, embedding hosts)
- JsonFileStore: one JSON object file on disk, keys -> string values
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal string-keyed store used by OnboardingState."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored string, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a string under a key, replacing any previous value."""
        ...

    def delete(self, key: str) -> None:
        """Remove a key. Deleting an absent key is not an error."""
        ...


class InMemoryStore:
    """Dict-backed KeyValueStore."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class JsonFileStore:
    """
    KeyValueStore persisted as a single JSON object file.

    The file is read on every call so separate processes sharing the path see
    each other's writes (last writer wins, no locking).

    Args:
        path: File location, e.g. ".automata/onboarding.json".
              Parent directories are created on first write.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, Any]:
        """
        Load the whole file.

        A missing file is an empty store. A corrupt or non-object file is also
        treated as empty (and overwritten on the next write). Values are
        returned as stored so writes leave other keys untouched.
        """
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Unreadable key-value file {self.path}, treating as empty: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Key-value file {self.path} does not hold a JSON object, treating as empty")
            return {}

        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(data, indent=2, ensure_ascii=False),
                encoding="utf-8"
            )
        except OSError as e:
            logger.error(f"Failed to write key-value file {self.path}: {e}", exc_info=True)
            raise

    def get(self, key: str) -> Optional[str]:
        """Stored string for a key; non-string values read as absent."""
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)
        logger.debug(f"Stored key={key} in {self.path} ({len(value)} chars)")

    def delete(self, key: str) -> None:
        data = self._read_all()
        if key not in data:
            return
        del data[key]
        self._write_all(data)
        logger.debug(f"Deleted key={key} from {self.path}")
