"""Integrations subpackage for xml-compare.

Contains integration adapters for external frameworks:
- pytest plugin (auto-discovered via pytest11 entry point), providing the
  ``assert_xml_match`` fixture
"""

from __future__ import annotations

__all__: list[str] = []
