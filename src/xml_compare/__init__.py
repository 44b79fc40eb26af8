"""xml-compare - structural difference reports and match ratios for XML."""

from __future__ import annotations

from xml_compare.algorithm.config import DEFAULT_THRESHOLD, ComparisonOptions
from xml_compare.api import compare, compare_batch, is_match, match_ratio_of
from xml_compare.batch import BatchComparator, BatchItem
from xml_compare.comparator import XmlComparator
from xml_compare.errors import ComparisonError, ParseError, XmlCompareError
from xml_compare.result import (
    BatchResult,
    BatchSummary,
    ComparisonFailure,
    ComparisonResult,
    Difference,
    DifferenceKind,
    envelope,
)
from xml_compare.tree.parser import ParserConfig, XmlParser

__version__: str = "0.1.0"
__all__: list[str] = [
    "DEFAULT_THRESHOLD",
    "BatchComparator",
    "BatchItem",
    "BatchResult",
    "BatchSummary",
    "ComparisonError",
    "ComparisonFailure",
    "ComparisonOptions",
    "ComparisonResult",
    "Difference",
    "DifferenceKind",
    "ParseError",
    "ParserConfig",
    "XmlComparator",
    "XmlCompareError",
    "XmlParser",
    "compare",
    "compare_batch",
    "envelope",
    "is_match",
    "match_ratio_of",
]
