"""Match ratio: 0-100 similarity from leaf count and counted differences.

Formula::

    total  = leaves(left) + leaves(right)
    ratio  = 100                                         if total == 0
           = max(0, 100 - (2 * n_differences / total) * 100)   otherwise

Each difference is charged twice because it affects both documents.  The
result is rounded to 2 decimal places.  Only differences that are not
ignored should be passed in.
"""

from __future__ import annotations

from collections.abc import Sequence

from xml_compare.result import Difference
from xml_compare.tree.nodes import Document, NodeType, XmlNode


def count_leaves(node: Document | XmlNode) -> int:
    """Count scalar leaves: one per text run and one per attribute value.

    Elements themselves are containers and contribute nothing, so an empty
    element (``<a/>``) counts 0.
    """
    if isinstance(node, Document):
        node = node.root
    if node.node_type == NodeType.TEXT:
        return 1
    return len(node.attributes) + sum(count_leaves(child) for child in node.children)


def match_ratio(
    left: Document,
    right: Document,
    differences: Sequence[Difference],
) -> float:
    """Return the match ratio in [0, 100] for two documents.

    Args:
        left:        First parsed document.
        right:       Second parsed document.
        differences: The non-ignored differences between them.

    Returns:
        100.0 when both documents have no leaves; otherwise the formula in
        the module docstring, rounded to 2 decimals.
    """
    total = count_leaves(left) + count_leaves(right)
    if total == 0:
        return 100.0
    weight = len(differences) * 2
    return round(max(0.0, 100.0 - (weight / total) * 100.0), 2)
