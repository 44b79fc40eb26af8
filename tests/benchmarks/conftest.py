"""Deterministic document generators for performance benchmarks.

All generators produce fixed, reproducible XML. No random values.
Three tiers: 10, 100 and 500 leaf elements.
Each tier provides both "similar" (one value changed) and "dissimilar"
(every value changed, half the tags renamed) pair generators.

Documents use nesting so that every tier exercises repeated siblings,
attributes and text leaves together.
"""

from __future__ import annotations

import pytest


def generate_flat_document(num_fields: int, prefix: str = "field") -> str:
    """Generate a flat document with one text element per field."""
    fields = "".join(
        f"<{prefix}_{i}>value_{i}</{prefix}_{i}>" for i in range(num_fields)
    )
    return f"<record>{fields}</record>"


def _make_similar_flat(num_fields: int) -> tuple[str, str]:
    """Generate flat similar pair: last value differs."""
    left = generate_flat_document(num_fields)
    right = left.replace(f"value_{num_fields - 1}<", f"changed_{num_fields - 1}<")
    return left, right


def _make_orders(
    sections: int,
    lines: int,
    value_prefix: str = "v",
    tag: str = "line",
) -> str:
    """Generate ``sections`` orders with ``lines`` repeated line items each."""
    parts = ["<orders>"]
    for i in range(sections):
        parts.append(f'<order id="{i}">')
        for j in range(lines):
            parts.append(
                f'<{tag} sku="S{i}-{j}"><qty>{j}</qty>'
                f"<note>{value_prefix}_{i}_{j}</note></{tag}>"
            )
        parts.append("</order>")
    parts.append("</orders>")
    return "".join(parts)


def _make_similar_nested_100() -> tuple[str, str]:
    """10 orders x 5 lines x 2 text leaves = 100 leaf elements."""
    left = _make_orders(10, 5)
    right = left.replace("<note>v_9_4</note>", "<note>x_9_4</note>")
    return left, right


def _make_dissimilar_nested_100() -> tuple[str, str]:
    return _make_orders(10, 5), _make_orders(10, 5, value_prefix="w", tag="item")


def _make_similar_nested_500() -> tuple[str, str]:
    """25 orders x 10 lines x 2 text leaves = 500 leaf elements."""
    left = _make_orders(25, 10)
    right = left.replace("<note>v_24_9</note>", "<note>x_24_9</note>")
    return left, right


def _make_dissimilar_nested_500() -> tuple[str, str]:
    return _make_orders(25, 10), _make_orders(25, 10, value_prefix="w", tag="item")


def _make_dissimilar_flat(num_fields: int) -> tuple[str, str]:
    """Generate flat dissimilar pair (different tag names)."""
    return (
        generate_flat_document(num_fields),
        generate_flat_document(num_fields, prefix="attr"),
    )


# --- Fixtures for each size tier ---


@pytest.fixture
def pair_10_similar() -> tuple[str, str]:
    """10-element flat similar pair."""
    return _make_similar_flat(10)


@pytest.fixture
def pair_10_dissimilar() -> tuple[str, str]:
    """10-element flat dissimilar pair."""
    return _make_dissimilar_flat(10)


@pytest.fixture
def pair_100_similar() -> tuple[str, str]:
    """100-leaf nested similar pair."""
    return _make_similar_nested_100()


@pytest.fixture
def pair_100_dissimilar() -> tuple[str, str]:
    """100-leaf nested dissimilar pair."""
    return _make_dissimilar_nested_100()


@pytest.fixture
def pair_500_similar() -> tuple[str, str]:
    """500-leaf nested similar pair."""
    return _make_similar_nested_500()


@pytest.fixture
def pair_500_dissimilar() -> tuple[str, str]:
    """500-leaf nested dissimilar pair."""
    return _make_dissimilar_nested_500()
