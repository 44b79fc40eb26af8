"""algorithm subpackage: public API for the XML diff algorithm.

Provides the diff engine, the ignore-list matcher, the match-ratio metric and
the comparison options.  Import from this module (not from sub-modules
directly) to stay on the stable public interface.

Example::

    from xml_compare.algorithm import DiffEngine, IgnoreMatcher, match_ratio
    from xml_compare.tree import XmlParser

    parser = XmlParser()
    left = parser.parse("<r><i>1</i><i>2</i></r>")
    right = parser.parse("<r><i>1</i></r>")
    diffs = DiffEngine(IgnoreMatcher()).diff(left, right)
    # lengths differ at "r.i", "r.i[1]" missing in second document
    match_ratio(left, right, diffs)   # 0.0
"""

from __future__ import annotations

from xml_compare.algorithm.config import DEFAULT_THRESHOLD, ComparisonOptions
from xml_compare.algorithm.differ import DiffEngine, diff
from xml_compare.algorithm.ignore import IgnoreMatcher
from xml_compare.algorithm.ratio import count_leaves, match_ratio

__all__ = [
    "DEFAULT_THRESHOLD",
    "ComparisonOptions",
    "DiffEngine",
    "IgnoreMatcher",
    "count_leaves",
    "diff",
    "match_ratio",
]
