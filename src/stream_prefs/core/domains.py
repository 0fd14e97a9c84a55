"""Value domains — the closed set of shapes a preference value can take.

// [LAW:one-type-per-behavior] One frozen dataclass per domain kind, each carrying
//   only the fields its kind needs. ValueDomain is the closed union.
// [LAW:single-enforcer] Membership checks live here; the resolver and the
//   facade never inspect raw values themselves.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar


# A label is a translation key, or a tuple of keys joined by spaces; a part
# written as "(key)" is translated and kept in parentheses.
Label = str | tuple[str, ...]


def _render_part(part: str, tr) -> str:
    if len(part) > 2 and part.startswith("(") and part.endswith(")"):
        return f"({tr(part[1:-1])})"
    return tr(part)


def render_label(label: Label, translate=None) -> str:
    """Translate a label through an opaque lookup (identity when None)."""
    tr = translate or (lambda text: text)
    if isinstance(label, tuple):
        return " ".join(_render_part(part, tr) for part in label)
    return tr(label)


def _freeze_options(options: Mapping[str, Label] | Iterable[tuple[str, Label]]) -> Mapping[str, Label]:
    return MappingProxyType(dict(options))


@dataclass(frozen=True)
class BoolDomain:
    kind: ClassVar[str] = "bool"

    def check(self, value: object, anchor: object = None) -> str | None:
        """Return a rejection reason, or None when value is a member."""
        # exact type: 0/1 are not booleans
        if type(value) is not bool:
            return "expected a boolean"
        return None

    def accepts(self, value: object, anchor: object = None) -> bool:
        return self.check(value, anchor) is None


@dataclass(frozen=True)
class NumberRangeDomain:
    """Closed numeric interval walked in fixed steps from an anchor value.

    The anchor is the definition's default; without one the minimum is used.
    Values outside the interval or between steps are rejected, never clamped.
    """

    kind: ClassVar[str] = "number"

    min: float
    max: float
    step: float = 1

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError(f"range min {self.min} exceeds max {self.max}")
        if self.step <= 0:
            raise ValueError(f"range step must be positive, got {self.step}")

    def check(self, value: object, anchor: object = None) -> str | None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return "expected a number"
        if math.isnan(value):
            return "expected a number"
        if value < self.min or value > self.max:
            return f"outside [{self.min}, {self.max}]"
        base = self.min if anchor is None or isinstance(anchor, bool) else anchor
        steps = (value - base) / self.step
        if not math.isclose(steps, round(steps), abs_tol=1e-9):
            return f"not a multiple of step {self.step} from {base}"
        return None

    def accepts(self, value: object, anchor: object = None) -> bool:
        return self.check(value, anchor) is None


@dataclass(frozen=True)
class StringEnumDomain:
    """One choice out of an ordered value -> label mapping."""

    kind: ClassVar[str] = "enum"

    options: Mapping[str, Label] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", _freeze_options(self.options))

    def check(self, value: object, anchor: object = None) -> str | None:
        if not isinstance(value, str) or value not in self.options:
            return f"not one of {list(self.options)}"
        return None

    def accepts(self, value: object, anchor: object = None) -> bool:
        return self.check(value, anchor) is None

    def first(self) -> str | None:
        return next(iter(self.options), None)

    def without(self, *values: str) -> StringEnumDomain:
        drop = set(values)
        return StringEnumDomain({k: v for k, v in self.options.items() if k not in drop})


@dataclass(frozen=True)
class MultiSelectDomain:
    """Any subset of an ordered value -> label mapping.

    Validation is atomic: one foreign element rejects the whole selection.
    """

    kind: ClassVar[str] = "multi"

    options: Mapping[str, Label] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", _freeze_options(self.options))

    def check(self, value: object, anchor: object = None) -> str | None:
        if not isinstance(value, (list, tuple)):
            return "expected a list of options"
        seen: set[str] = set()
        for item in value:
            if not isinstance(item, str) or item not in self.options:
                return f"{item!r} is not one of {list(self.options)}"
            if item in seen:
                return f"{item!r} is selected more than once"
            seen.add(item)
        return None

    def accepts(self, value: object, anchor: object = None) -> bool:
        return self.check(value, anchor) is None

    def without(self, *values: str) -> MultiSelectDomain:
        drop = set(values)
        return MultiSelectDomain({k: v for k, v in self.options.items() if k not in drop})


@dataclass(frozen=True)
class OpaqueDomain:
    """Unvalidated passthrough (counters, timestamps, ids with no UI)."""

    kind: ClassVar[str] = "opaque"

    def check(self, value: object, anchor: object = None) -> str | None:
        return None

    def accepts(self, value: object, anchor: object = None) -> bool:
        return True


ValueDomain = BoolDomain | NumberRangeDomain | StringEnumDomain | MultiSelectDomain | OpaqueDomain

OPTION_DOMAINS = (StringEnumDomain, MultiSelectDomain)
