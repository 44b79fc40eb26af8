"""Tree subpackage for XML-to-tree conversion primitives.

Re-exports the public API for the tree module:
- XmlNode: dataclass representing an element or a text run
- NodeType: StrEnum of the two node kinds (ELEMENT, TEXT)
- Document: wrapper around the root element
- XmlParser / ParserConfig: lxml-backed parser and its conventions
"""

from xml_compare.tree.nodes import Document, NodeType, XmlNode
from xml_compare.tree.parser import ParserConfig, XmlParser

__all__ = ["Document", "NodeType", "ParserConfig", "XmlNode", "XmlParser"]
