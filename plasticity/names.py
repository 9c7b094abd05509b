"""Bidirectional name table for hashed parameter keys.

Keys in a parameter container are one-way CRC32 hashes. ``NameTable`` keeps
the forward hash function and a reverse map from hash to name, fed from:

1. a bundled reference table (``hashes.json``),
2. names known to the class catalog (child slots, instance parameters),
3. every string observed while walking a loaded container.

Entries that are still unknown may be synthetic record keys such as
``AI_12``. Those are precomputed once per table for every segment prefix up
to ``Config.NUMBERED_NAME_LIMIT`` so lookups never search at runtime.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterable, Optional

from .config import Config
from .schemas import (
    BEHAVIOR_IDX,
    CHILD_IDX,
    CLASS_NAME,
    DEF,
    DEMO_AI_ACTION_IDX,
    GROUP_NAME,
    NAME,
    SINST,
    ParameterList,
    Segment,
    hash_name,
)

# Names every AI program uses regardless of the loaded tables
BUILTIN_NAMES = (
    DEF,
    CHILD_IDX,
    BEHAVIOR_IDX,
    SINST,
    DEMO_AI_ACTION_IDX,
    NAME,
    CLASS_NAME,
    GROUP_NAME,
    *(segment.value for segment in Segment),
)


def numbered_name(segment: Segment, index: int) -> str:
    """Synthetic key name of the ``index``-th record of ``segment``."""

    return f"{segment.value}_{index}"


class NameTable:
    """Hash -> name reverse lookup with numbered fallbacks."""

    def __init__(self, names: Iterable[str] = (), *, numbered_limit: Optional[int] = None):
        self._names: Dict[int, str] = {}
        self.add_names(BUILTIN_NAMES)
        self.add_names(names)

        limit = Config.NUMBERED_NAME_LIMIT if numbered_limit is None else numbered_limit
        self._numbered: Dict[int, str] = {}
        for index in range(limit + 1):
            for segment in Segment:
                name = numbered_name(segment, index)
                self._numbered[hash_name(name)] = name

    @classmethod
    def from_file(cls, path: Path | str, *, numbered_limit: Optional[int] = None) -> "NameTable":
        """Load a reference table.

        Accepts either a JSON list of names or a ``{hash: name}`` object; in
        the latter case only the names are used, each is re-hashed.
        """

        payload = json.loads(Path(path).read_text("utf-8"))
        names = payload.values() if isinstance(payload, dict) else payload
        return cls(names, numbered_limit=numbered_limit)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, key: int) -> bool:
        return key in self._names

    def add_name(self, name: str) -> int:
        key = hash_name(name)
        self._names.setdefault(key, name)
        return key

    def add_names(self, names: Iterable[str]) -> None:
        for name in names:
            self.add_name(name)

    def add_names_from(self, plist: ParameterList) -> int:
        """Register every string value found anywhere under ``plist``.

        Returns the number of names that were not known before.
        """

        before = len(self._names)
        stack = [plist]
        while stack:
            current = stack.pop()
            for obj in current.objects.values():
                for param in obj.params.values():
                    text = param.as_str()
                    if text:
                        self.add_name(text)
            stack.extend(current.lists.values())
        return len(self._names) - before

    def get_name(self, key: int) -> Optional[str]:
        """Exact match only."""

        return self._names.get(key)

    def numbered_name(self, key: int) -> Optional[str]:
        return self._numbered.get(key)

    def try_name(self, key: int) -> str:
        """Best-effort human-readable name for ``key``.

        Exact match, then a synthetic ``<Segment>_<n>`` name, then the raw
        hash as decimal text.
        """

        name = self._names.get(key)
        if name is not None:
            return name
        name = self._numbered.get(key)
        if name is not None:
            return name
        return str(key)

    def resolve(self, key: int) -> Optional[str]:
        """Like ``try_name`` but returns None instead of the raw hash."""

        return self._names.get(key) or self._numbered.get(key)
