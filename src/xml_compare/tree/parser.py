"""XmlParser: converts raw XML text into a typed XmlNode tree.

Parsing is delegated to ``lxml.etree`` with recovery disabled, so malformed
input (unterminated or mismatched tags, invalid characters) fails fast with
a ``ParseError`` instead of producing a best-effort partial tree.

The lxml tree is then normalised into ``XmlNode`` objects:

- Element and attribute names keep their namespace prefix as written
  (``soap:Body``, ``xml:lang``); no namespace-aware rewriting is done.
- Attribute order and child order are preserved.
- Comments and processing instructions are dropped.  Text on either side of
  a dropped node is merged into a single text run.
- With ``strip_whitespace`` enabled, text runs are trimmed and runs that are
  pure indentation disappear, so pretty-printed and minified documents yield
  the same tree.
"""

from __future__ import annotations

from dataclasses import dataclass

from lxml import etree

from xml_compare.errors import ParseError
from xml_compare.tree.nodes import Document, XmlNode

_XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Immutable parser conventions.

    Attributes:
        text_key: Path segment used to address text runs inside mixed
            content (``p.#text``).  Must be non-empty and must not contain
            ``.`` or ``[``.
        strip_whitespace: Trim text runs and drop whitespace-only runs.
            Defaults to True.
    """

    text_key: str = "#text"
    strip_whitespace: bool = True

    def __post_init__(self) -> None:
        if not self.text_key:
            msg = "text_key must be a non-empty string"
            raise ValueError(msg)
        if "." in self.text_key or "[" in self.text_key:
            msg = f"text_key must not contain '.' or '[', got {self.text_key!r}"
            raise ValueError(msg)


class XmlParser:
    """Parses XML text into a ``Document`` of ``XmlNode`` objects.

    The parser holds only its immutable ``ParserConfig``; a fresh lxml parser
    is created per call, so one ``XmlParser`` can be shared between threads.

    Example::

        parser = XmlParser()
        doc = parser.parse("<root><id>1</id></root>")
        doc.root.name                       # "root"
        doc.root.children[0].text_payload   # "1"
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self._config = config if config is not None else ParserConfig()

    @property
    def config(self) -> ParserConfig:
        return self._config

    def parse(self, text: str | bytes, source: str | None = None) -> Document:
        """Parse ``text`` into a ``Document``.

        Args:
            text:   XML document as ``str`` or ``bytes``.  Byte input honours
                    its XML encoding declaration; ``str`` input is parsed as
                    already-decoded text.
            source: Optional label ("first" / "second") copied onto any
                    ``ParseError`` so callers can tell which input was bad.

        Returns:
            The parsed ``Document``.

        Raises:
            ParseError: If the input is not ``str``/``bytes``, cannot be
                encoded, is empty or is not well-formed XML.
        """
        encoding: str | None
        if isinstance(text, str):
            try:
                data = text.encode("utf-8")
            except UnicodeError as exc:
                raise ParseError(str(exc), source=source) from exc
            encoding = "utf-8"
        elif isinstance(text, bytes):
            data = text
            encoding = None
        else:
            msg = f"expected str or bytes, got {type(text).__name__}"
            raise ParseError(msg, source=source)

        if not data.strip():
            raise ParseError("document is empty", source=source)

        lxml_parser = etree.XMLParser(
            encoding=encoding,
            recover=False,
            resolve_entities=False,
            no_network=True,
        )
        try:
            root = etree.fromstring(data, parser=lxml_parser)
        except etree.XMLSyntaxError as exc:
            raise ParseError(
                exc.msg or str(exc),
                source=source,
                line=exc.lineno,
                column=exc.offset,
            ) from exc
        except ValueError as exc:
            raise ParseError(str(exc), source=source) from exc

        return Document(root=self._build(root))

    # ------------------------------------------------------------------
    # Tree conversion
    # ------------------------------------------------------------------

    def _build(self, element: etree._Element) -> XmlNode:
        node = XmlNode.element(
            _qualified_name(element.tag, element.prefix),
            self._attributes(element),
        )

        pending: list[str] = [element.text or ""]
        for child in element:
            if isinstance(child.tag, str):
                self._flush_text(pending, node)
                node.children.append(self._build(child))
            elif child.tag is etree.Entity:
                # unresolved entity reference: keep it literally
                pending.append(child.text or "")
            pending.append(child.tail or "")
        self._flush_text(pending, node)

        return node

    def _flush_text(self, pending: list[str], node: XmlNode) -> None:
        text = "".join(pending)
        pending.clear()
        if self._config.strip_whitespace:
            text = text.strip()
        if text:
            node.children.append(XmlNode.text(text))

    def _attributes(self, element: etree._Element) -> dict[str, str]:
        if not element.attrib:
            return {}
        prefixes = {uri: prefix for prefix, uri in element.nsmap.items() if prefix}
        prefixes[_XML_NAMESPACE] = "xml"
        attributes: dict[str, str] = {}
        for key, value in element.attrib.items():
            qname = etree.QName(key)
            if qname.namespace is None:
                attributes[qname.localname] = value
            else:
                prefix = prefixes.get(qname.namespace)
                attributes[f"{prefix}:{qname.localname}" if prefix else key] = value
        return attributes


def _qualified_name(tag: str, prefix: str | None) -> str:
    """Return ``prefix:local`` for a Clark-notation tag, or ``local``."""
    localname = etree.QName(tag).localname
    return f"{prefix}:{localname}" if prefix else localname
