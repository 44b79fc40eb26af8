"""BatchComparator: runs many independent XML comparisons and aggregates them.

Each item carries its own pair of documents plus optional overrides:

    effective ignore-list = item ignores | base ignores    (union)
    effective threshold   = item threshold if given, else base threshold

Items are fanned out over a ``ThreadPoolExecutor``.  They share only
read-only objects (options, parser configuration), so no locking is needed.
``results[i]`` always belongs to ``items[i]`` whatever the completion order.

A failing item never aborts its siblings: a ``ParseError``, a
``ComparisonError`` or any other exception raised for one item is captured
as a ``ComparisonFailure`` in that item's slot.

Summary::

    total    = len(items)
    passed   = successful items with is_match
    failed   = total - passed          (errored items count as failed)
    errored  = items that raised
    average_match_ratio = mean over successful items, 2 decimals (0 if none)
    total_processing_time_ms = wall clock of the whole batch
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import numpy as np

from xml_compare.algorithm.config import ComparisonOptions
from xml_compare.comparator import XmlComparator
from xml_compare.errors import ParseError, XmlCompareError
from xml_compare.result import (
    BatchResult,
    BatchSummary,
    ComparisonFailure,
    ComparisonResult,
)
from xml_compare.tree.parser import ParserConfig

__all__ = ["BatchComparator", "BatchItem"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BatchItem:
    """One pair of documents in a batch.

    Attributes:
        left:  First XML document.
        right: Second XML document.
        ignored_properties: Extra ignore entries for this item only; merged
            with the batch-wide list.
        threshold: Threshold override for this item; None keeps the
            batch-wide threshold.
    """

    left: str | bytes
    right: str | bytes
    ignored_properties: Iterable[str] | None = None
    threshold: float | None = None


class BatchComparator:
    """Runs a list of ``BatchItem`` comparisons and summarises them.

    Example::

        from xml_compare.batch import BatchComparator, BatchItem

        batch = BatchComparator(ComparisonOptions(threshold=90))
        result = batch.compare([
            BatchItem("<a>1</a>", "<a>1</a>"),
            BatchItem("<a>1</a>", "<a>"),         # malformed: captured
        ])
        result.summary.passed    # 1
        result.summary.errored   # 1
    """

    def __init__(
        self,
        options: ComparisonOptions | None = None,
        parser_config: ParserConfig | None = None,
        max_workers: int | None = None,
    ) -> None:
        """Initialise the batch comparator.

        Args:
            options:       Batch-wide ignore-list and threshold.  Defaults to
                ``ComparisonOptions()``.
            parser_config: Parser conventions for every item.
            max_workers:   Thread pool size.  None uses the
                ``ThreadPoolExecutor`` default.
        """
        if max_workers is not None and max_workers < 1:
            msg = f"max_workers must be >= 1, got {max_workers}"
            raise ValueError(msg)
        self._options = options if options is not None else ComparisonOptions()
        self._parser_config = parser_config
        self._max_workers = max_workers

    def compare(self, items: Sequence[BatchItem]) -> BatchResult:
        """Compare every item and return results in input order.

        Args:
            items: The pairs to compare.  May be empty.

        Returns:
            A ``BatchResult`` whose ``results[i]`` is the outcome of
            ``items[i]``: a ``ComparisonResult`` or a ``ComparisonFailure``.
        """
        t0 = time.perf_counter()
        logger.info("Starting batch comparison of %d items", len(items))

        results: list[ComparisonResult | ComparisonFailure]
        if items:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                # map() yields in submission order regardless of completion
                results = list(
                    executor.map(self._run_item, range(len(items)), items)
                )
        else:
            results = []

        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        summary = self._summarise(results, elapsed_ms)

        logger.info(
            "Batch comparison finished: %d passed, %d failed (%d errored) in %.2fms",
            summary.passed,
            summary.failed,
            summary.errored,
            elapsed_ms,
        )
        return BatchResult(results=results, summary=summary)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run_item(
        self, position: int, item: BatchItem
    ) -> ComparisonResult | ComparisonFailure:
        try:
            options = self._options.merged(item.ignored_properties, item.threshold)
        except (TypeError, ValueError) as exc:
            logger.warning("Batch item %d has invalid options: %s", position, exc)
            return ComparisonFailure(
                index=position,
                error_type=type(exc).__name__,
                message=str(exc),
            )
        comparator = XmlComparator(options, parser_config=self._parser_config)
        try:
            return comparator.compare(item.left, item.right)
        except XmlCompareError as exc:
            logger.warning("Batch item %d failed: %s", position, exc)
            return ComparisonFailure(
                index=position,
                error_type=type(exc).__name__,
                message=exc.message,
                source=exc.source if isinstance(exc, ParseError) else None,
            )
        except Exception as exc:
            # one item must never abort the others
            logger.exception("Batch item %d failed unexpectedly", position)
            return ComparisonFailure(
                index=position,
                error_type=type(exc).__name__,
                message=str(exc),
            )

    @staticmethod
    def _summarise(
        results: list[ComparisonResult | ComparisonFailure],
        elapsed_ms: float,
    ) -> BatchSummary:
        successes = [r for r in results if isinstance(r, ComparisonResult)]
        passed = sum(1 for r in successes if r.is_match)
        if successes:
            ratios = np.array([r.match_ratio for r in successes], dtype=float)
            average = round(float(np.mean(ratios)), 2)
        else:
            average = 0.0
        return BatchSummary(
            total=len(results),
            passed=passed,
            failed=len(results) - passed,
            errored=len(results) - len(successes),
            average_match_ratio=average,
            total_processing_time_ms=elapsed_ms,
        )
