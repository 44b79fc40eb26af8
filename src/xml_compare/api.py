"""Public API functions for xml-compare.

This module provides the four user-facing functions: compare, compare_batch,
is_match and match_ratio_of.  Each call creates a fresh XmlComparator (or
BatchComparator) to guarantee zero global state mutation between calls.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from xml_compare.algorithm.config import DEFAULT_THRESHOLD, ComparisonOptions
from xml_compare.batch import BatchComparator, BatchItem
from xml_compare.comparator import XmlComparator
from xml_compare.result import BatchResult, ComparisonResult

__all__ = ["compare", "compare_batch", "is_match", "match_ratio_of"]


def compare(
    left: str | bytes,
    right: str | bytes,
    ignored_properties: Iterable[str] = (),
    threshold: float = DEFAULT_THRESHOLD,
) -> ComparisonResult:
    """Compare two XML documents and return a ComparisonResult.

    Args:
        left:               First XML document.
        right:              Second XML document.
        ignored_properties: Names or dotted paths whose differences are
                            reported but not counted.
        threshold:          Minimum match ratio in [0, 100] for ``is_match``.
                            Defaults to 95.

    Returns:
        A ``ComparisonResult`` with match_ratio, is_match, differences and
        processing_time_ms populated.

    Raises:
        ParseError: One of the inputs is not well-formed XML.
        ComparisonError: The tree walk failed.
    """
    options = ComparisonOptions(threshold=threshold).merged(ignored_properties)
    return XmlComparator(options).compare(left, right)


def compare_batch(
    items: Sequence[BatchItem | tuple[str | bytes, str | bytes]],
    ignored_properties: Iterable[str] = (),
    threshold: float = DEFAULT_THRESHOLD,
    max_workers: int | None = None,
) -> BatchResult:
    """Compare many document pairs and summarise the outcome.

    Args:
        items:              ``BatchItem`` objects or plain ``(left, right)``
                            tuples.
        ignored_properties: Batch-wide ignore-list, merged into every item's.
        threshold:          Batch-wide threshold; items may override it.
        max_workers:        Thread pool size (None: executor default).

    Returns:
        A ``BatchResult`` in input order.  Items that fail to parse are
        reported as ``ComparisonFailure`` in their own slot.
    """
    options = ComparisonOptions(threshold=threshold).merged(ignored_properties)
    batch_items = [
        item if isinstance(item, BatchItem) else BatchItem(*item) for item in items
    ]
    return BatchComparator(options, max_workers=max_workers).compare(batch_items)


def is_match(
    left: str | bytes,
    right: str | bytes,
    threshold: float = DEFAULT_THRESHOLD,
    ignored_properties: Iterable[str] = (),
) -> bool:
    """Return True if the match ratio reaches ``threshold``.

    Returns:
        True if ``compare(left, right, ...).match_ratio >= threshold``.
    """
    result = compare(left, right, ignored_properties, threshold)
    return result.is_match


def match_ratio_of(
    left: str | bytes,
    right: str | bytes,
    ignored_properties: Iterable[str] = (),
) -> float:
    """Return the match ratio in [0, 100] for two XML documents."""
    result = compare(left, right, ignored_properties)
    return result.match_ratio
