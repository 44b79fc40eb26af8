"""IgnoreMatcher: decides whether a difference is suppressed by configuration.

An ignore entry suppresses a difference found at ``parent_path.name`` when it
names:

- the bare name (``id`` matches ``root.id`` and ``root.user.id``),
- the fully qualified path (``root.meta.created``),
- any ancestor of that path (``root.meta`` matches ``root.meta.created.by``),
- or a segment-aligned tail of the path or of an ancestor (``meta.created``
  matches ``root.meta.created``; ``meta`` matches everything under any
  ``meta`` element).

Positional indices are optional when matching: ``items.item`` covers
``items.item[0]`` and ``items.item[7].sku`` while ``items.item[7]`` only
covers that one position.

Matching only ever sets ``Difference.ignored``; it never drops a difference.
"""

from __future__ import annotations

from collections.abc import Iterable

from xml_compare.algorithm.paths import join, segments, strip_index


class IgnoreMatcher:
    """Read-only matcher over a fixed set of ignore entries.

    Example::

        matcher = IgnoreMatcher(["id", "root.metadata"])
        matcher.is_ignored("id", "root")                    # True
        matcher.is_ignored("created", "root.metadata")      # True
        matcher.is_ignored("name", "root")                  # False
    """

    def __init__(self, ignored: Iterable[str] = ()) -> None:
        self._entries: frozenset[str] = frozenset(
            entry.strip() for entry in ignored if entry and entry.strip()
        )

    @property
    def entries(self) -> frozenset[str]:
        return self._entries

    def __bool__(self) -> bool:
        return bool(self._entries)

    def is_ignored(self, name: str, parent_path: str) -> bool:
        """Return True when a difference at ``parent_path.name`` is suppressed.

        Args:
            name:        Last path segment of the difference (tag, attribute
                         name or text key), optionally index-stamped.
            parent_path: Path of the containing element ("" at the root).
        """
        if not self._entries:
            return False
        if name in self._entries or strip_index(name) in self._entries:
            return True

        raw = segments(join(parent_path, name))
        if self._matches_run(raw):
            return True
        bare = [strip_index(segment) for segment in raw]
        return bare != raw and self._matches_run(bare)

    def _matches_run(self, path_segments: list[str]) -> bool:
        # Any contiguous run of segments: covers self, ancestors and tails.
        count = len(path_segments)
        for end in range(count, 0, -1):
            for start in range(end):
                if ".".join(path_segments[start:end]) in self._entries:
                    return True
        return False
