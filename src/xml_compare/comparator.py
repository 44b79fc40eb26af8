"""XmlComparator: orchestrator that wires XmlParser + DiffEngine + match ratio.

This is the central wiring layer between the raw algorithm and the public
API.  It turns two raw XML strings into a ``ComparisonResult`` with the full
difference list, the match ratio, the pass/fail flag and timing data.

Architecture:
- compare() starts a wall-clock timer, parses both inputs (labelled "first"
  and "second" so a ``ParseError`` says which one was bad), runs
  ``DiffEngine.diff()``, scores the non-ignored differences and applies the
  threshold.
- Parser, engine and options are read-only after construction.  All
  traversal state is per call, so one comparator may be used from several
  threads at once.
- Failures are terminal: a ``ParseError`` propagates unchanged, any other
  failure during the tree walk is wrapped in ``ComparisonError``.
"""

from __future__ import annotations

import logging
import time

from xml_compare.algorithm.config import ComparisonOptions
from xml_compare.algorithm.differ import DiffEngine
from xml_compare.algorithm.ignore import IgnoreMatcher
from xml_compare.algorithm.ratio import match_ratio
from xml_compare.errors import ComparisonError, ParseError
from xml_compare.result import ComparisonResult
from xml_compare.tree.nodes import Document
from xml_compare.tree.parser import ParserConfig, XmlParser

__all__ = ["XmlComparator"]

logger = logging.getLogger(__name__)


class XmlComparator:
    """Orchestrator for a single XML-vs-XML comparison.

    Example::

        from xml_compare.algorithm.config import ComparisonOptions
        from xml_compare.comparator import XmlComparator

        cmp = XmlComparator(ComparisonOptions(ignored_properties={"id"}))
        result = cmp.compare(
            "<root><id>1</id><name>Bob</name></root>",
            "<root><id>2</id><name>Bob</name></root>",
        )
        print(result.match_ratio)   # 100.0
        print(result.is_match)      # True
    """

    def __init__(
        self,
        options: ComparisonOptions | None = None,
        parser_config: ParserConfig | None = None,
    ) -> None:
        """Initialise the comparator.

        Args:
            options:       Ignore-list and threshold.  Defaults to
                ``ComparisonOptions()`` (nothing ignored, threshold 95).
            parser_config: Parser conventions.  Defaults to
                ``ParserConfig()``.
        """
        self._options = options if options is not None else ComparisonOptions()
        self._parser = XmlParser(parser_config)
        self._engine = DiffEngine(
            IgnoreMatcher(self._options.ignored_properties),
            text_key=self._parser.config.text_key,
        )

    @property
    def options(self) -> ComparisonOptions:
        return self._options

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compare(self, left: str | bytes, right: str | bytes) -> ComparisonResult:
        """Compare two XML documents and return a ComparisonResult.

        Args:
            left:  First XML document.
            right: Second XML document.

        Returns:
            A ``ComparisonResult`` with all differences (ignored ones
            included), the match ratio, ``is_match`` and timing.

        Raises:
            ParseError: One of the inputs is not well-formed XML.
            ComparisonError: The tree walk failed.
        """
        t0 = time.perf_counter()

        try:
            left_doc = self._parser.parse(left, source="first")
            right_doc = self._parser.parse(right, source="second")
        except ParseError as exc:
            logger.warning("Error comparing XML: %s", exc)
            raise

        return self._compare_documents(left_doc, right_doc, t0)

    def compare_documents(self, left: Document, right: Document) -> ComparisonResult:
        """Compare two already-parsed documents."""
        return self._compare_documents(left, right, time.perf_counter())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _compare_documents(
        self,
        left: Document,
        right: Document,
        t0: float,
    ) -> ComparisonResult:
        try:
            differences = self._engine.diff(left, right)
            counted = [d for d in differences if not d.ignored]
            ratio = match_ratio(left, right, counted)
        except ComparisonError:
            logger.exception("Error comparing XML")
            raise
        except RecursionError as exc:
            logger.exception("Error comparing XML")
            msg = "document nesting is too deep to compare"
            raise ComparisonError(msg) from exc
        except (AttributeError, TypeError) as exc:
            # hand-built documents with a node that is not an XmlNode
            logger.exception("Error comparing XML")
            msg = f"unexpected node shape: {exc}"
            raise ComparisonError(msg) from exc

        is_match = ratio >= self._options.threshold

        elapsed_ms = (time.perf_counter() - t0) * 1000.0

        logger.info(
            "XML comparison completed in %.2fms with %.2f%% match ratio",
            elapsed_ms,
            ratio,
        )
        logger.debug(
            "%d differences (%d ignored)",
            len(differences),
            len(differences) - len(counted),
        )

        return ComparisonResult(
            match_ratio=ratio,
            is_match=is_match,
            differences=differences,
            processing_time_ms=elapsed_ms,
        )
