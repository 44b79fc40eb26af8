"""ComparisonOptions: immutable per-comparison configuration.

ComparisonOptions is a frozen (immutable) dataclass holding the ignore-list
and the pass/fail threshold.  One instance is read-only for the duration of
a comparison and may be shared by reference across concurrent comparisons.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

DEFAULT_THRESHOLD: float = 95.0


@dataclass(frozen=True, slots=True)
class ComparisonOptions:
    """Immutable configuration for one comparison.

    Attributes:
        ignored_properties: Names or dotted paths whose differences are
            marked ``ignored=True`` (kept in the output, excluded from the
            match ratio).  Any iterable of strings is accepted and frozen.
        threshold: Minimum match ratio in [0, 100] for ``is_match``.
            Defaults to 95.
    """

    ignored_properties: frozenset[str] = field(default_factory=frozenset)
    threshold: float = DEFAULT_THRESHOLD

    def __post_init__(self) -> None:
        if isinstance(self.ignored_properties, str):
            msg = "ignored_properties must be an iterable of strings, not a string"
            raise TypeError(msg)
        if not isinstance(self.ignored_properties, frozenset):
            # frozen dataclass: bypass __setattr__ to normalise the container
            object.__setattr__(
                self, "ignored_properties", frozenset(self.ignored_properties)
            )
        if not 0.0 <= self.threshold <= 100.0:
            msg = f"threshold must be in [0, 100], got {self.threshold}"
            raise ValueError(msg)

    def merged(
        self,
        ignored_properties: Iterable[str] | None = None,
        threshold: float | None = None,
    ) -> ComparisonOptions:
        """Derive options for one batch item.

        The ignore-list is the union of ``ignored_properties`` and this
        instance's list; ``threshold`` overrides this instance's threshold
        only when given.
        """
        if isinstance(ignored_properties, str):
            msg = "ignored_properties must be an iterable of strings, not a string"
            raise TypeError(msg)
        extra = frozenset(ignored_properties or ())
        return ComparisonOptions(
            ignored_properties=self.ignored_properties | extra,
            threshold=self.threshold if threshold is None else threshold,
        )
