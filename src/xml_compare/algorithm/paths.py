"""Path construction helpers for difference locations.

Paths are dotted strings built during traversal:

- ``join("", "root")``         -> ``"root"``
- ``join("root", "id")``       -> ``"root.id"``
- ``index("root.item", 2)``    -> ``"root.item[2]"``

They double as the matching key for the ignore-list.
"""

from __future__ import annotations

import re

# Trailing positional index on a single segment, e.g. "item[3]"
_INDEX = re.compile(r"\[\d+\]$")


def join(parent: str, name: str) -> str:
    """Append ``name`` to ``parent`` with a dot (no dot at the root)."""
    return f"{parent}.{name}" if parent else name


def index(path: str, position: int) -> str:
    """Stamp a positional index onto the last segment of ``path``."""
    return f"{path}[{position}]"


def segments(path: str) -> list[str]:
    """Split a path into its dotted segments (empty path -> no segments)."""
    return path.split(".") if path else []


def strip_index(segment: str) -> str:
    """Drop a trailing ``[n]`` index from one segment."""
    return _INDEX.sub("", segment)
