"""Exception hierarchy for xml-compare.

Two terminal failures exist for a single comparison:

- ``ParseError``: one of the input documents is not well-formed XML.  The
  ``source`` attribute says which input ("first" or "second") was rejected.
- ``ComparisonError``: the tree walk itself failed (unexpected node shape,
  recursion limit on pathologically deep input, ...).

Both derive from ``XmlCompareError`` so callers can catch everything the
library raises with a single ``except`` clause.
"""

from __future__ import annotations

__all__ = ["ComparisonError", "ParseError", "XmlCompareError"]


class XmlCompareError(Exception):
    """Base class for every error raised by xml-compare."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ParseError(XmlCompareError):
    """Raised when an input document is not well-formed XML.

    Attributes:
        reason:  Parser description of the syntax error (without prefix).
        source:  Which input failed ("first" / "second"), or None when the
                 parser was called directly without a label.
        line:    1-based line of the error when the parser reports one.
        column:  1-based column of the error when the parser reports one.
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.reason = message
        self.source = source
        self.line = line
        self.column = column
        prefix = f"Invalid XML in {source} document" if source else "Invalid XML"
        super().__init__(f"{prefix}: {message}")


class ComparisonError(XmlCompareError):
    """Raised when the diff traversal fails on otherwise parsed documents."""
