"""pytest plugin for xml-compare.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import pytest

from xml_compare import DEFAULT_THRESHOLD, compare


@pytest.fixture(scope="session")
def assert_xml_match() -> Any:
    """Fixture that returns a callable XML match asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to compare() which creates a fresh XmlComparator per call).

    Usage in tests::

        def test_render(assert_xml_match):
            assert_xml_match(render(), "<root><id>1</id></root>")

        def test_render_ignoring_ids(assert_xml_match):
            assert_xml_match(actual, expected, ignored_properties=["id"])

    Returns:
        A callable ``_assert(actual, expected, threshold=95.0,
        ignored_properties=()) -> None`` that raises ``AssertionError`` when
        the match ratio is below threshold.
    """

    def _assert(
        actual: str | bytes,
        expected: str | bytes,
        threshold: float = DEFAULT_THRESHOLD,
        ignored_properties: Iterable[str] = (),
    ) -> None:
        """Assert that two XML documents match.

        Args:
            actual:             The XML produced by the code under test.
            expected:           The reference XML.
            threshold:          Minimum match ratio in [0, 100].
            ignored_properties: Names or paths excluded from the ratio.

        Raises:
            AssertionError: When match_ratio < threshold, with a message
                listing the ratio, the threshold and every counted
                difference.
        """
        result = compare(
            actual,
            expected,
            ignored_properties=ignored_properties,
            threshold=threshold,
        )
        if not result.is_match:
            lines = [
                f"  {d.kind} {d.path}: {d.left!r} != {d.right!r} ({d.description})"
                for d in result.counted_differences
            ]
            raise AssertionError(
                f"XML documents do not match: "
                f"match_ratio={result.match_ratio:.2f} < threshold={threshold}\n"
                f"  differences ({len(lines)}):\n" + "\n".join(lines)
            )

    return _assert
