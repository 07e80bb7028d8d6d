"""Simple cache abstractions."""

import hashlib
import json
import pickle
from collections.abc import Hashable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


class Cache(Protocol):
    """Cache interface keyed by call arguments."""

    def get(self, key: Hashable) -> object | None:
        """Return a cached value if present."""

    def set(self, key: Hashable, value: object) -> None:
        """Store a value for the key."""


@dataclass
class InMemoryCache(Cache):
    """Process-local cache; entries never expire."""

    _entries: dict[Hashable, object]

    def __init__(self) -> None:
        self._entries = {}

    def get(self, key: Hashable) -> object | None:
        """Return the cached value for the key, if any."""
        return self._entries.get(key)

    def set(self, key: Hashable, value: object) -> None:
        """Store a value unless one is already cached for the key."""
        self._entries.setdefault(key, value)


@dataclass
class FileCache(Cache):
    """Cache persisted as one file per key under a directory.

    Keys are tuples of JSON-serializable values; the file name is a digest of
    the JSON-encoded key. Values are pickled since they are domain objects.
    """

    directory: Path

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def get(self, key: Hashable) -> object | None:
        """Return the stored value for the key, if a file exists."""
        path = self._path_for(key)
        if not path.exists():
            return None
        with path.open("rb") as handle:
            return pickle.load(handle)

    def set(self, key: Hashable, value: object) -> None:
        """Persist a value unless one is already stored for the key."""
        path = self._path_for(key)
        if path.exists():
            return
        with path.open("wb") as handle:
            pickle.dump(value, handle)

    def _path_for(self, key: Hashable) -> Path:
        encoded = json.dumps(list(key) if isinstance(key, tuple) else key)
        digest = hashlib.sha256(encoded.encode("utf-8")).hexdigest()
        return self.directory / f"{digest}.pickle"
