"""Result dataclasses for XML comparison output.

This module provides the types returned by ``compare()`` and
``compare_batch()`` together with their wire rendering (``to_dict``) and the
``{success, data, message}`` envelope a transport layer sends back.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

__all__ = [
    "BatchResult",
    "BatchSummary",
    "ComparisonFailure",
    "ComparisonResult",
    "Difference",
    "DifferenceKind",
    "envelope",
]


class DifferenceKind(StrEnum):
    """What kind of mismatch a Difference records.

    - ATTRIBUTE -> "attribute" : attribute missing on one side or values differ
    - ELEMENT   -> "element"   : child tag present on one side only
    - TEXT      -> "text"      : text content differs or a text run is missing
    - STRUCTURE -> "structure" : node missing, sibling count or order differs
    """

    ATTRIBUTE = auto()
    ELEMENT = auto()
    TEXT = auto()
    STRUCTURE = auto()


@dataclass(frozen=True, slots=True)
class Difference:
    """One path-addressed mismatch between the two documents.

    Attributes:
        kind:        Category of the mismatch.
        path:        Dotted/indexed location, e.g. ``"root.items.item[1]"``.
        left:        Value on the first document, None when absent there.
        right:       Value on the second document, None when absent there.
        description: Short human-readable explanation.
        ignored:     True when the ignore-list suppresses this difference.
            Ignored differences stay in the output but do not lower the
            match ratio.
    """

    kind: DifferenceKind
    path: str
    left: str | None
    right: str | None
    description: str
    ignored: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": str(self.kind),
            "path": self.path,
            "description": self.description,
            "ignored": self.ignored,
        }
        if self.left is not None:
            data["value1"] = self.left
        if self.right is not None:
            data["value2"] = self.right
        return data


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Result of a single two-document comparison.

    Attributes:
        match_ratio:        Similarity in [0, 100]; 100 means no counted
            differences.
        is_match:           ``match_ratio >= threshold``.
        differences:        Every difference found, ignored ones included,
            in traversal order (attribute pass first, then structure).
        processing_time_ms: Wall-clock duration of the comparison.
    """

    match_ratio: float
    is_match: bool
    differences: list[Difference]
    processing_time_ms: float

    @property
    def counted_differences(self) -> list[Difference]:
        """Differences that were not suppressed by the ignore-list."""
        return [d for d in self.differences if not d.ignored]

    def to_dict(self) -> dict[str, Any]:
        return {
            "matchRatio": self.match_ratio,
            "isMatch": self.is_match,
            "differences": [d.to_dict() for d in self.differences],
            "processingTime": self.processing_time_ms,
        }


@dataclass(frozen=True, slots=True)
class ComparisonFailure:
    """A batch slot whose comparison raised instead of producing a result.

    Attributes:
        index:      Position of the item in the batch input.
        error_type: Exception class name (``"ParseError"``,
            ``"ComparisonError"``).
        message:    The error message.
        source:     "first" / "second" for parse errors, else None.
    """

    index: int
    error_type: str
    message: str
    source: str | None = None

    @property
    def is_match(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "index": self.index,
            "error": self.error_type,
            "message": self.message,
        }
        if self.source is not None:
            data["source"] = self.source
        return data


@dataclass(frozen=True, slots=True)
class BatchSummary:
    """Aggregate counters for one batch.

    Attributes:
        total:       Number of items.
        passed:      Items that compared successfully and matched.
        failed:      ``total - passed`` (errored items count as failed).
        errored:     Items whose comparison raised.
        average_match_ratio: Mean match ratio of the successful items,
            rounded to 2 decimals; 0.0 when none succeeded.
        total_processing_time_ms: Wall-clock span of the whole batch.
    """

    total: int
    passed: int
    failed: int
    errored: int
    average_match_ratio: float
    total_processing_time_ms: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalComparisons": self.total,
            "passedComparisons": self.passed,
            "failedComparisons": self.failed,
            "erroredComparisons": self.errored,
            "averageMatchRatio": self.average_match_ratio,
            "totalProcessingTime": self.total_processing_time_ms,
        }


@dataclass(frozen=True, slots=True)
class BatchResult:
    """Result of ``compare_batch()``.

    Attributes:
        results: One entry per input item, in input order.  Each entry is a
            ``ComparisonResult`` or, when that item raised, a
            ``ComparisonFailure``.
        summary: Aggregate counters.
    """

    results: list[ComparisonResult | ComparisonFailure]
    summary: BatchSummary

    @property
    def failures(self) -> list[ComparisonFailure]:
        return [r for r in self.results if isinstance(r, ComparisonFailure)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "summary": self.summary.to_dict(),
        }


def envelope(
    data: ComparisonResult | BatchResult | None = None,
    error: Exception | None = None,
) -> dict[str, Any]:
    """Wrap a result or an error in the ``{success, data, message}`` shape.

    Exactly one of ``data`` / ``error`` must be given.
    """
    if data is not None and error is None:
        return {"success": True, "data": data.to_dict()}
    if error is not None and data is None:
        return {"success": False, "data": None, "message": str(error)}
    msg = "envelope() needs exactly one of data or error"
    raise ValueError(msg)
