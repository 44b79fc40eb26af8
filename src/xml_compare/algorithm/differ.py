"""DiffEngine: recursive lock-step comparison of two XmlNode trees.

Walks two parsed documents together and emits a flat, path-addressed list of
``Difference`` objects.

Architecture:
- Child pairing: an element's children are grouped by key (tag for elements,
  the text key for text runs) in first-appearance order.  A key seen once on
  both sides pairs the two nodes at ``path.key``.  A key seen more than once
  on either side is an array context: its nodes pair positionally at
  ``path.key[i]``.  No alignment search is done.
- Attribute pass: pre-order over the paired elements, comparing attribute
  maps literally.
- Structural pass: pre-order over the same pairing, reporting missing nodes,
  text mismatches, sibling count and sibling order changes.  Each path is
  visited at most once per ``diff()`` call.
- Ignore-list: every difference is checked against the ``IgnoreMatcher``
  and tagged ``ignored=True`` when suppressed.  Nothing is dropped.

All traversal state lives in a ``_DiffState`` created per ``diff()`` call,
so a single engine can serve concurrent comparisons.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from xml_compare.algorithm.ignore import IgnoreMatcher
from xml_compare.algorithm.paths import index, join
from xml_compare.errors import ComparisonError
from xml_compare.result import Difference, DifferenceKind
from xml_compare.tree.nodes import Document, NodeType, XmlNode

__all__ = ["DiffEngine", "diff"]

# A slot in the walk: one node, a positional sibling list, or nothing.
_Value = XmlNode | list[XmlNode] | None

# Group key: text runs and elements never share a group, whatever their names.
_GroupKey = tuple[NodeType, str]


@dataclass(slots=True)
class _DiffState:
    """Per-call traversal state passed down the recursion."""

    differences: list[Difference] = field(default_factory=list)
    visited: set[str] = field(default_factory=set)


class DiffEngine:
    """Structural and attribute diff over two parsed documents.

    Example::

        from xml_compare.algorithm.differ import DiffEngine
        from xml_compare.algorithm.ignore import IgnoreMatcher
        from xml_compare.tree.parser import XmlParser

        parser = XmlParser()
        engine = DiffEngine(IgnoreMatcher(["id"]))
        diffs = engine.diff(
            parser.parse("<root><id>1</id></root>"),
            parser.parse("<root><id>2</id></root>"),
        )
        # [Difference(kind=TEXT, path="root.id", left="1", right="2", ...,
        #             ignored=True)]
    """

    def __init__(
        self,
        ignore: IgnoreMatcher | None = None,
        text_key: str = "#text",
    ) -> None:
        """Initialise the engine.

        Args:
            ignore:   Matcher deciding which differences are suppressed.
                Defaults to an empty matcher (nothing ignored).
            text_key: Path segment for text runs in mixed content.  Should
                match the ``ParserConfig.text_key`` the documents were
                parsed with.
        """
        self._ignore = ignore if ignore is not None else IgnoreMatcher()
        self._text_key = text_key

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def diff(self, left: Document, right: Document) -> list[Difference]:
        """Return every difference between ``left`` and ``right``.

        Attribute differences come first (pre-order), followed by structural
        and text differences (pre-order).  The document roots are treated as
        the only child of an empty container, so differing root tags are
        reported as element differences.
        """
        state = _DiffState()
        self._attribute_pass([left.root], [right.root], "", state)
        self._compare_children([left.root], [right.root], "", "", "", state)
        return state.differences

    # ------------------------------------------------------------------
    # Child pairing
    # ------------------------------------------------------------------

    def _group(self, children: Iterable[XmlNode]) -> dict[_GroupKey, list[XmlNode]]:
        groups: dict[_GroupKey, list[XmlNode]] = {}
        for child in children:
            key = (child.node_type, child.name)
            groups.setdefault(key, []).append(child)
        return groups

    def _segment(self, key: _GroupKey) -> str:
        node_type, name = key
        return self._text_key if node_type == NodeType.TEXT else name

    def _paired_elements(
        self,
        left_children: list[XmlNode],
        right_children: list[XmlNode],
        path: str,
    ) -> Iterator[tuple[str, XmlNode, XmlNode]]:
        """Yield ``(child_path, left, right)`` for element pairs on both sides."""
        right_groups = self._group(right_children)
        for key, left_nodes in self._group(left_children).items():
            right_nodes = right_groups.get(key)
            if right_nodes is None or key[0] != NodeType.ELEMENT:
                continue
            key_path = join(path, self._segment(key))
            if len(left_nodes) == 1 and len(right_nodes) == 1:
                yield key_path, left_nodes[0], right_nodes[0]
                continue
            for position in range(min(len(left_nodes), len(right_nodes))):
                yield (
                    index(key_path, position),
                    left_nodes[position],
                    right_nodes[position],
                )

    # ------------------------------------------------------------------
    # Attribute pass
    # ------------------------------------------------------------------

    def _attribute_pass(
        self,
        left_children: list[XmlNode],
        right_children: list[XmlNode],
        path: str,
        state: _DiffState,
    ) -> None:
        for child_path, left, right in self._paired_elements(
            left_children, right_children, path
        ):
            self._compare_attributes(left, right, child_path, state)
            self._attribute_pass(left.children, right.children, child_path, state)

    def _compare_attributes(
        self,
        left: XmlNode,
        right: XmlNode,
        path: str,
        state: _DiffState,
    ) -> None:
        left_attrs = left.attributes
        right_attrs = right.attributes

        for name, value in left_attrs.items():
            if name not in right_attrs:
                self._emit(
                    state,
                    DifferenceKind.ATTRIBUTE,
                    name=name,
                    parent=path,
                    left=value,
                    right=None,
                    description="Attribute missing in second document",
                )
        for name, value in right_attrs.items():
            if name not in left_attrs:
                self._emit(
                    state,
                    DifferenceKind.ATTRIBUTE,
                    name=name,
                    parent=path,
                    left=None,
                    right=value,
                    description="Attribute missing in first document",
                )
        for name, value in left_attrs.items():
            other = right_attrs.get(name)
            if other is not None and other != value:
                self._emit(
                    state,
                    DifferenceKind.ATTRIBUTE,
                    name=name,
                    parent=path,
                    left=value,
                    right=other,
                    description="Attribute values differ",
                )

    # ------------------------------------------------------------------
    # Structural pass
    # ------------------------------------------------------------------

    def _compare_children(
        self,
        left_children: list[XmlNode],
        right_children: list[XmlNode],
        path: str,
        name: str,
        parent: str,
        state: _DiffState,
    ) -> None:
        """Compare two child lists as keyed containers."""
        left_groups = self._group(left_children)
        right_groups = self._group(right_children)

        self._check_order(left_children, right_children, name, parent, state)

        for key, nodes in left_groups.items():
            if key not in right_groups:
                kind, label = _missing_kind(key)
                self._emit(
                    state,
                    kind,
                    name=self._segment(key),
                    parent=path,
                    left=_describe_all(nodes),
                    right=None,
                    description=f"{label} missing in second document",
                )
        for key, nodes in right_groups.items():
            if key not in left_groups:
                kind, label = _missing_kind(key)
                self._emit(
                    state,
                    kind,
                    name=self._segment(key),
                    parent=path,
                    left=None,
                    right=_describe_all(nodes),
                    description=f"{label} missing in first document",
                )

        for key, left_nodes in left_groups.items():
            right_nodes = right_groups.get(key)
            if right_nodes is None:
                continue
            segment = self._segment(key)
            key_path = join(path, segment)
            if len(left_nodes) == 1 and len(right_nodes) == 1:
                self._compare_values(
                    left_nodes[0], right_nodes[0], key_path, segment, path, state
                )
            else:
                self._compare_values(
                    left_nodes, right_nodes, key_path, segment, path, state
                )

    def _check_order(
        self,
        left_children: list[XmlNode],
        right_children: list[XmlNode],
        name: str,
        parent: str,
        state: _DiffState,
    ) -> None:
        """Report same children in a different document order.

        Text runs take part under the text key, so moving text across its
        element siblings counts as a reorder.  Only fires when both sides
        carry the same keys with the same counts: any other change is
        already reported as a missing node or a length difference.
        """
        left_keys = [(c.node_type, c.name) for c in left_children]
        right_keys = [(c.node_type, c.name) for c in right_children]
        if left_keys == right_keys or Counter(left_keys) != Counter(right_keys):
            return
        left_tags = [self._segment(key) for key in left_keys]
        right_tags = [self._segment(key) for key in right_keys]
        self._emit(
            state,
            DifferenceKind.STRUCTURE,
            name=name,
            parent=parent,
            left=", ".join(left_tags),
            right=", ".join(right_tags),
            description="Child element order differs",
        )

    def _compare_values(
        self,
        left: _Value,
        right: _Value,
        path: str,
        name: str,
        parent: str,
        state: _DiffState,
    ) -> None:
        """Compare one slot (node, sibling list or absent) on both sides."""
        if path in state.visited:
            return
        state.visited.add(path)

        if left is None or right is None:
            if left is None and right is None:
                return
            description = (
                "Node missing in first document"
                if left is None
                else "Node missing in second document"
            )
            self._emit(
                state,
                DifferenceKind.STRUCTURE,
                name=name,
                parent=parent,
                left=_describe(left),
                right=_describe(right),
                description=description,
            )
            return

        if isinstance(left, list) and isinstance(right, list):
            self._compare_sequences(left, right, path, name, parent, state)
            return

        if isinstance(left, list) or isinstance(right, list):
            self._emit(
                state,
                DifferenceKind.STRUCTURE,
                name=name,
                parent=parent,
                left="array" if isinstance(left, list) else "object",
                right="array" if isinstance(right, list) else "object",
                description="type mismatch: array vs object",
            )
            return

        if left.is_text and right.is_text:
            if left.value != right.value:
                self._emit(
                    state,
                    DifferenceKind.TEXT,
                    name=name,
                    parent=parent,
                    left=left.value,
                    right=right.value,
                    description="Text values differ",
                )
            return

        if left.is_text or right.is_text:
            msg = f"cannot compare a text node with an element at {path!r}"
            raise ComparisonError(msg)

        if left.text_payload is not None or right.text_payload is not None:
            left_text = _flat_text(left)
            right_text = _flat_text(right)
            if left_text is None or right_text is None or left_text != right_text:
                self._emit(
                    state,
                    DifferenceKind.TEXT,
                    name=name,
                    parent=parent,
                    left=left_text if left_text is not None else f"<{left.name}>",
                    right=right_text if right_text is not None else f"<{right.name}>",
                    description="Text values differ",
                )
            return

        self._compare_children(left.children, right.children, path, name, parent, state)

    def _compare_sequences(
        self,
        left: list[XmlNode],
        right: list[XmlNode],
        path: str,
        name: str,
        parent: str,
        state: _DiffState,
    ) -> None:
        """Positional comparison of two same-key sibling lists."""
        if len(left) != len(right):
            self._emit(
                state,
                DifferenceKind.STRUCTURE,
                name=name,
                parent=parent,
                left=str(len(left)),
                right=str(len(right)),
                description="Sibling list lengths differ",
            )
        for position in range(max(len(left), len(right))):
            self._compare_values(
                left[position] if position < len(left) else None,
                right[position] if position < len(right) else None,
                index(path, position),
                index(name, position),
                parent,
                state,
            )

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def _emit(
        self,
        state: _DiffState,
        kind: DifferenceKind,
        name: str,
        parent: str,
        left: str | None,
        right: str | None,
        description: str,
    ) -> None:
        state.differences.append(
            Difference(
                kind=kind,
                path=join(parent, name),
                left=left,
                right=right,
                description=description,
                ignored=self._ignore.is_ignored(name, parent),
            )
        )


def _describe(value: _Value) -> str | None:
    """Short rendering of a slot for a Difference's left/right field."""
    if value is None:
        return None
    if isinstance(value, list):
        return _describe_all(value)
    if value.is_text:
        return value.value
    payload = value.text_payload
    return payload if payload is not None else f"<{value.name}>"


def _missing_kind(key: _GroupKey) -> tuple[DifferenceKind, str]:
    """Difference kind and label for a child group present on one side only."""
    if key[0] == NodeType.TEXT:
        return DifferenceKind.TEXT, "Text"
    return DifferenceKind.ELEMENT, "Element"


def _flat_text(node: XmlNode) -> str | None:
    """Text of an element without element children, else None."""
    payload = node.text_payload
    if payload is not None:
        return payload
    if any(child.is_element for child in node.children):
        return None
    return node.text_content()


def _describe_all(nodes: list[XmlNode]) -> str:
    if len(nodes) == 1:
        return _describe(nodes[0]) or ""
    return f"{len(nodes)} nodes"


def diff(
    left: Document,
    right: Document,
    ignored: Iterable[str] = (),
    text_key: str = "#text",
) -> list[Difference]:
    """Convenience wrapper: diff two documents under an ignore-list."""
    return DiffEngine(IgnoreMatcher(ignored), text_key=text_key).diff(left, right)
