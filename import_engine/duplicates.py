"""
import_engine.duplicates - Per-run duplicate key index.

Seeded from storage when a run starts, then grows with every record
the run accepts, so a repeat later in the same file is caught too.
"""

from __future__ import annotations

from typing import Hashable, Iterable


class DuplicateIndex:

    def __init__(self, keys: Iterable[Hashable] = ()):
        self._keys: set[Hashable] = set(keys)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def seed(self, keys: Iterable[Hashable]) -> int:
        """Add keys already in storage.  Returns the index size."""
        self._keys.update(keys)
        return len(self._keys)

    def add(self, key: Hashable) -> None:
        self._keys.add(key)
