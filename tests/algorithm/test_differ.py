"""Tests for DiffEngine.

Covers:
- Identical documents produce no differences
- Attribute pass: missing on either side, differing values, ordering
- Element presence, text mismatches and mixed content
- Repeated sibling tags: positional pairing, length and missing-node reports
- Child order changes
- Ignore-list tagging (differences are kept, never dropped)
- Unreachable-from-parser branches exercised on hand-built nodes
"""

from __future__ import annotations

import pytest

from xml_compare.algorithm.differ import DiffEngine, _DiffState, diff
from xml_compare.algorithm.ignore import IgnoreMatcher
from xml_compare.errors import ComparisonError
from xml_compare.result import Difference, DifferenceKind
from xml_compare.tree.nodes import XmlNode
from xml_compare.tree.parser import ParserConfig, XmlParser

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_PARSER = XmlParser()


def _diff(left: str, right: str, ignored: tuple[str, ...] = ()) -> list[Difference]:
    return diff(_PARSER.parse(left), _PARSER.parse(right), ignored=ignored)


def _paths(differences: list[Difference]) -> list[str]:
    return [d.path for d in differences]


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


class TestIdentical:
    @pytest.mark.parametrize(
        "xml",
        [
            "<r/>",
            "<a>t</a>",
            '<a x="1" y="2"><b>1</b><b>2</b><c z="3"/></a>',
            "<p>Hello <b>big</b> world</p>",
        ],
    )
    def test_no_differences(self, xml: str) -> None:
        assert _diff(xml, xml) == []

    def test_attribute_order_is_irrelevant(self) -> None:
        assert _diff('<a x="1" y="2"/>', '<a y="2" x="1"/>') == []


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------


class TestAttributes:
    def test_value_differs(self) -> None:
        diffs = _diff('<a x="1">t</a>', '<a x="2">t</a>')
        assert diffs == [
            Difference(
                kind=DifferenceKind.ATTRIBUTE,
                path="a.x",
                left="1",
                right="2",
                description="Attribute values differ",
            )
        ]

    def test_missing_on_either_side(self) -> None:
        diffs = _diff('<a x="1" y="2"/>', '<a x="1" z="3"/>')
        assert [(d.path, d.left, d.right, d.description) for d in diffs] == [
            ("a.y", "2", None, "Attribute missing in second document"),
            ("a.z", None, "3", "Attribute missing in first document"),
        ]
        assert all(d.kind == DifferenceKind.ATTRIBUTE for d in diffs)

    def test_nested_element_attribute(self) -> None:
        diffs = _diff(
            '<r><item sku="A1"/></r>',
            '<r><item sku="B2"/></r>',
        )
        assert _paths(diffs) == ["r.item.sku"]

    def test_repeated_element_attribute_is_indexed(self) -> None:
        diffs = _diff(
            '<r><i k="1"/><i k="2"/></r>',
            '<r><i k="1"/><i k="3"/></r>',
        )
        assert len(diffs) == 1
        assert diffs[0].path == "r.i[1].k"
        assert (diffs[0].left, diffs[0].right) == ("2", "3")

    def test_attribute_differences_come_first(self) -> None:
        diffs = _diff('<r x="1"><a>1</a></r>', '<r x="2"><a>2</a></r>')
        assert [d.kind for d in diffs] == [
            DifferenceKind.ATTRIBUTE,
            DifferenceKind.TEXT,
        ]

    def test_attribute_vs_text_only_element(self) -> None:
        """Attributes are compared independently of the element's text."""
        diffs = _diff('<a x="1">t</a>', "<a>t</a>")
        assert len(diffs) == 1
        assert diffs[0].kind == DifferenceKind.ATTRIBUTE
        assert diffs[0].description == "Attribute missing in second document"


# ---------------------------------------------------------------------------
# Elements and text
# ---------------------------------------------------------------------------


class TestElementsAndText:
    def test_text_differs(self) -> None:
        diffs = _diff("<r><name>Bob</name></r>", "<r><name>Alice</name></r>")
        assert diffs == [
            Difference(
                kind=DifferenceKind.TEXT,
                path="r.name",
                left="Bob",
                right="Alice",
                description="Text values differ",
            )
        ]

    def test_element_missing_in_second(self) -> None:
        diffs = _diff("<r><a>1</a><b>2</b></r>", "<r><a>1</a></r>")
        assert len(diffs) == 1
        d = diffs[0]
        assert d.kind == DifferenceKind.ELEMENT
        assert d.path == "r.b"
        assert d.left == "2"
        assert d.right is None
        assert d.description == "Element missing in second document"

    def test_element_missing_in_first(self) -> None:
        diffs = _diff("<r/>", "<r><c><d/></c></r>")
        assert len(diffs) == 1
        assert diffs[0].path == "r.c"
        assert diffs[0].left is None
        assert diffs[0].right == "<c>"
        assert diffs[0].description == "Element missing in first document"

    def test_missing_repeated_element_is_summarised(self) -> None:
        diffs = _diff("<r><i>1</i><i>2</i></r>", "<r/>")
        assert len(diffs) == 1
        assert diffs[0].path == "r.i"
        assert diffs[0].left == "2 nodes"

    def test_different_root_tags(self) -> None:
        diffs = _diff("<a/>", "<b/>")
        assert [(d.kind, d.path) for d in diffs] == [
            (DifferenceKind.ELEMENT, "a"),
            (DifferenceKind.ELEMENT, "b"),
        ]

    def test_text_only_vs_nested_element(self) -> None:
        diffs = _diff("<r><a>1</a></r>", "<r><a><b>2</b></a></r>")
        assert len(diffs) == 1
        assert diffs[0].kind == DifferenceKind.TEXT
        assert diffs[0].path == "r.a"
        assert (diffs[0].left, diffs[0].right) == ("1", "<a>")

    def test_same_text_wrapped_in_element_is_reported(self) -> None:
        diffs = _diff("<r><a>x</a></r>", "<r><a><b>x</b></a></r>")
        assert diffs == [
            Difference(
                kind=DifferenceKind.TEXT,
                path="r.a",
                left="x",
                right="<a>",
                description="Text values differ",
            )
        ]

    def test_text_split_across_elements_is_reported(self) -> None:
        diffs = _diff("<a>xy</a>", "<a><b>x</b><c>y</c></a>")
        assert len(diffs) == 1
        assert (diffs[0].path, diffs[0].left, diffs[0].right) == ("a", "xy", "<a>")

    def test_text_run_missing(self) -> None:
        diffs = _diff("<p>a<b/></p>", "<p><b/></p>")
        assert diffs == [
            Difference(
                kind=DifferenceKind.TEXT,
                path="p.#text",
                left="a",
                right=None,
                description="Text missing in second document",
            )
        ]

    def test_text_run_missing_in_first(self) -> None:
        diffs = _diff("<p><b/></p>", "<p><b/>z</p>")
        assert len(diffs) == 1
        assert diffs[0].kind == DifferenceKind.TEXT
        assert diffs[0].description == "Text missing in first document"

    def test_empty_vs_text(self) -> None:
        diffs = _diff("<r><a/></r>", "<r><a>x</a></r>")
        assert len(diffs) == 1
        assert diffs[0].path == "r.a"
        assert (diffs[0].left, diffs[0].right) == ("", "x")

    def test_mixed_content_text_run(self) -> None:
        diffs = _diff("<p>Hello <b>x</b></p>", "<p>Bye <b>x</b></p>")
        assert len(diffs) == 1
        assert diffs[0].kind == DifferenceKind.TEXT
        assert diffs[0].path == "p.#text"

    def test_custom_text_key(self) -> None:
        parser = XmlParser(ParserConfig(text_key="_text"))
        engine = DiffEngine(text_key="_text")
        diffs = engine.diff(
            parser.parse("<p>a<b/></p>"),
            parser.parse("<p>c<b/></p>"),
        )
        assert _paths(diffs) == ["p._text"]

    def test_deep_path(self) -> None:
        diffs = _diff(
            "<root><a><b><c>1</c></b></a></root>",
            "<root><a><b><c>2</c></b></a></root>",
        )
        assert _paths(diffs) == ["root.a.b.c"]


# ---------------------------------------------------------------------------
# Repeated siblings
# ---------------------------------------------------------------------------


class TestRepeatedSiblings:
    def test_lengths_differ(self) -> None:
        diffs = _diff("<r><i>1</i><i>2</i></r>", "<r><i>1</i></r>")
        assert diffs == [
            Difference(
                kind=DifferenceKind.STRUCTURE,
                path="r.i",
                left="2",
                right="1",
                description="Sibling list lengths differ",
            ),
            Difference(
                kind=DifferenceKind.STRUCTURE,
                path="r.i[1]",
                left="2",
                right=None,
                description="Node missing in second document",
            ),
        ]

    def test_node_missing_in_first(self) -> None:
        diffs = _diff("<r><i>1</i></r>", "<r><i>1</i><i><x/></i></r>")
        assert diffs[-1].path == "r.i[1]"
        assert diffs[-1].left is None
        assert diffs[-1].right == "<i>"
        assert diffs[-1].description == "Node missing in first document"

    def test_positional_pairing(self) -> None:
        diffs = _diff(
            "<r><i>1</i><i>2</i><i>3</i></r>",
            "<r><i>1</i><i>9</i><i>3</i></r>",
        )
        assert diffs == [
            Difference(
                kind=DifferenceKind.TEXT,
                path="r.i[1]",
                left="2",
                right="9",
                description="Text values differ",
            )
        ]

    def test_no_alignment_search(self) -> None:
        """An insertion at the front shifts every position."""
        diffs = _diff(
            "<r><i>1</i><i>2</i></r>",
            "<r><i>0</i><i>1</i><i>2</i></r>",
        )
        assert _paths(diffs) == ["r.i", "r.i[0]", "r.i[1]", "r.i[2]"]

    def test_nested_paths_below_repeated_element(self) -> None:
        diffs = _diff(
            "<r><i><sku>A</sku></i><i><sku>B</sku></i></r>",
            "<r><i><sku>A</sku></i><i><sku>C</sku></i></r>",
        )
        assert _paths(diffs) == ["r.i[1].sku"]

    def test_paths_are_unique(self) -> None:
        diffs = _diff(
            "<r><i>1</i><i>2</i><j><k>a</k><k>b</k></j></r>",
            "<r><i>3</i><j><k>c</k></j></r>",
        )
        paths = _paths(diffs)
        assert len(paths) == len(set(paths))


class TestChildOrder:
    def test_reordered_children(self) -> None:
        diffs = _diff("<r><a>1</a><b>2</b></r>", "<r><b>2</b><a>1</a></r>")
        assert diffs == [
            Difference(
                kind=DifferenceKind.STRUCTURE,
                path="r",
                left="a, b",
                right="b, a",
                description="Child element order differs",
            )
        ]

    def test_not_reported_when_counts_differ(self) -> None:
        diffs = _diff("<r><a/><b/></r>", "<r><b/></r>")
        assert all(d.description != "Child element order differs" for d in diffs)

    def test_moved_text_run_is_reordering(self) -> None:
        diffs = _diff("<p>x<a/><b/></p>", "<p><a/><b/>x</p>")
        assert diffs == [
            Difference(
                kind=DifferenceKind.STRUCTURE,
                path="p",
                left="#text, a, b",
                right="a, b, #text",
                description="Child element order differs",
            )
        ]


# ---------------------------------------------------------------------------
# Ignore-list
# ---------------------------------------------------------------------------


class TestIgnore:
    def test_ignored_difference_is_kept_and_tagged(self) -> None:
        diffs = _diff(
            "<root><id>1</id><name>Bob</name></root>",
            "<root><id>2</id><name>Bob</name></root>",
            ignored=("id",),
        )
        assert diffs == [
            Difference(
                kind=DifferenceKind.TEXT,
                path="root.id",
                left="1",
                right="2",
                description="Text values differ",
                ignored=True,
            )
        ]

    def test_ignore_attribute(self) -> None:
        diffs = _diff('<a x="1"/>', '<a x="2"/>', ignored=("x",))
        assert diffs[0].ignored

    def test_ignore_applies_below_ancestor(self) -> None:
        diffs = _diff(
            "<r><meta><ts>1</ts></meta><v>1</v></r>",
            "<r><meta><ts>2</ts></meta><v>2</v></r>",
            ignored=("meta",),
        )
        assert [(d.path, d.ignored) for d in diffs] == [
            ("r.meta.ts", True),
            ("r.v", False),
        ]

    def test_ignore_unindexed_repeated_path(self) -> None:
        diffs = _diff(
            "<r><i>1</i><i>2</i></r>",
            "<r><i>3</i><i>4</i></r>",
            ignored=("r.i",),
        )
        assert len(diffs) == 2
        assert all(d.ignored for d in diffs)

    def test_engine_accepts_matcher(self) -> None:
        engine = DiffEngine(IgnoreMatcher(["name"]))
        diffs = engine.diff(
            _PARSER.parse("<r><name>a</name></r>"),
            _PARSER.parse("<r><name>b</name></r>"),
        )
        assert diffs[0].ignored


# ---------------------------------------------------------------------------
# Hand-built slots (shapes the parser never produces)
# ---------------------------------------------------------------------------


class TestValueSlots:
    def test_list_vs_single_node(self) -> None:
        engine = DiffEngine()
        state = _DiffState()
        engine._compare_values(
            [XmlNode.element("i"), XmlNode.element("i")],
            XmlNode.element("i"),
            "r.i",
            "i",
            "r",
            state,
        )
        assert len(state.differences) == 1
        d = state.differences[0]
        assert d.kind == DifferenceKind.STRUCTURE
        assert d.description == "type mismatch: array vs object"
        assert (d.left, d.right) == ("array", "object")
        assert d.path == "r.i"

    def test_text_vs_element_raises(self) -> None:
        engine = DiffEngine()
        with pytest.raises(ComparisonError, match="cannot compare a text node"):
            engine._compare_values(
                XmlNode.text("x"),
                XmlNode.element("b"),
                "r.x",
                "x",
                "r",
                _DiffState(),
            )

    def test_both_absent_is_silent(self) -> None:
        state = _DiffState()
        DiffEngine()._compare_values(None, None, "r.x", "x", "r", state)
        assert state.differences == []

    def test_path_visited_once(self) -> None:
        engine = DiffEngine()
        state = _DiffState()
        for _ in range(2):
            engine._compare_values(
                XmlNode.text("a"), XmlNode.text("b"), "p", "p", "", state
            )
        assert len(state.differences) == 1
        assert state.visited == {"p"}

    def test_engine_is_reusable(self) -> None:
        """Traversal state is per call: a second diff() starts clean."""
        engine = DiffEngine()
        left = _PARSER.parse("<r><a>1</a></r>")
        right = _PARSER.parse("<r><a>2</a></r>")
        assert engine.diff(left, right) == engine.diff(left, right)
