"""XmlNode dataclass and NodeType StrEnum for the parsed document tree.

Provides the foundational data types produced by XmlParser and walked by
DiffEngine.  A node is tagged as either an ELEMENT or a TEXT run; element
attributes are held apart from element children so the two can be compared
independently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum, auto


class NodeType(StrEnum):
    """Enumeration of the two node kinds in a parsed XML tree.

    - ELEMENT -> "element" : A tag with attributes and ordered children
    - TEXT    -> "text"    : A run of character data (leaf)
    """

    ELEMENT = auto()
    TEXT = auto()


@dataclass(slots=True)
class XmlNode:
    """A node in the parsed XML tree.

    Attributes:
        node_type:  Which kind of node this is (see NodeType).
        name:       Tag name as written (prefix kept, e.g. "soap:Body") for
                    ELEMENT nodes; empty string for TEXT nodes.
        value:      Character data for TEXT nodes; empty string for ELEMENT.
        attributes: Attribute name -> value, in document order.  Always empty
                    for TEXT nodes.
        children:   Child nodes (elements and text runs interleaved in
                    document order).  Always empty for TEXT nodes.
    """

    node_type: NodeType
    name: str = ""
    value: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[XmlNode] = field(default_factory=list)

    @classmethod
    def element(
        cls,
        name: str,
        attributes: dict[str, str] | None = None,
        children: list[XmlNode] | None = None,
    ) -> XmlNode:
        """Build an ELEMENT node."""
        return cls(
            node_type=NodeType.ELEMENT,
            name=name,
            attributes=dict(attributes or {}),
            children=list(children or []),
        )

    @classmethod
    def text(cls, value: str) -> XmlNode:
        """Build a TEXT node."""
        return cls(node_type=NodeType.TEXT, value=value)

    @property
    def is_element(self) -> bool:
        return self.node_type == NodeType.ELEMENT

    @property
    def is_text(self) -> bool:
        return self.node_type == NodeType.TEXT

    @property
    def text_payload(self) -> str | None:
        """Return the text of an element that wraps a single text run.

        An ELEMENT with no attributes whose only child is a TEXT node is the
        "element containing only text" pattern (``<a>x</a>``).  For that shape
        the text is returned; for any other node ``None`` is returned.
        """
        if self.node_type != NodeType.ELEMENT or self.attributes:
            return None
        if len(self.children) != 1:
            return None
        only = self.children[0]
        if only.node_type != NodeType.TEXT:
            return None
        return only.value

    def text_content(self) -> str:
        """Concatenate every descendant text run in document order."""
        if self.node_type == NodeType.TEXT:
            return self.value
        return "".join(child.text_content() for child in self.children)


@dataclass(slots=True)
class Document:
    """A parsed XML document: the root element plus nothing else.

    Attributes:
        root: The document element.
    """

    root: XmlNode
