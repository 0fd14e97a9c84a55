"""Setting definitions — raw registry entries and their resolved, frozen form.

// [LAW:one-source-of-truth] DefinitionSpec is what the catalog authors declare;
//   SettingDefinition is the only shape the rest of the engine ever sees.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from stream_prefs.core.domains import OPTION_DOMAINS, Label, MultiSelectDomain, ValueDomain

if TYPE_CHECKING:
    from stream_prefs.core.capabilities import CapabilitySnapshot
    from stream_prefs.core.resolver import ResolvedView


class _Missing:
    """Marker for "no value" where None is a legitimate value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


@dataclass(frozen=True)
class Suggest:
    """Bounds for an automatic quality search. Either end may be absent."""

    lowest: object = None
    highest: object = None

    def ends(self) -> tuple[tuple[str, object], ...]:
        return tuple(
            (name, value)
            for name, value in (("lowest", self.lowest), ("highest", self.highest))
            if value is not None
        )


@dataclass(frozen=True)
class SettingDefinition:
    """A resolved definition. Immutable for the lifetime of the process."""

    key: str
    domain: ValueDomain
    default: object
    label: Label = ""
    note: Label = ""
    required_capability: str | tuple[str, ...] | None = None
    unsupported: bool = False
    suggest: Suggest | None = None
    experimental: bool = False

    @property
    def options(self):
        """Read-only value -> label mapping, or None for non-option domains."""
        if isinstance(self.domain, OPTION_DOMAINS):
            return self.domain.options
        return None

    def check(self, value: object) -> str | None:
        return self.domain.check(value, self.default)

    def accepts(self, value: object) -> bool:
        return self.check(value) is None

    def fresh_default(self) -> object:
        """Default as a caller-owned value (multi-select defaults become lists)."""
        if isinstance(self.domain, MultiSelectDomain):
            return list(self.default)
        return self.default


ReadyHook = Callable[["SettingDefinition", "CapabilitySnapshot", "ResolvedView"], "SettingDefinition"]


@dataclass(frozen=True)
class DefinitionSpec:
    """A raw registry entry, as declared at configuration-build time.

    ``neutral`` replaces the default whenever the definition resolves
    unsupported. ``ready`` is the per-key finalization step: a pure function
    from the gated draft to its final form.
    """

    key: str
    domain: ValueDomain
    default: object
    label: Label = ""
    note: Label = ""
    required_capability: str | tuple[str, ...] | None = None
    unsupported: bool = False
    suggest: Suggest | None = None
    experimental: bool = False
    neutral: object = MISSING
    ready: ReadyHook | None = None

    def draft(self) -> SettingDefinition:
        default = self.default
        if isinstance(self.domain, MultiSelectDomain) and isinstance(default, list):
            default = tuple(default)
        return SettingDefinition(
            key=self.key,
            domain=self.domain,
            default=default,
            label=self.label,
            note=self.note,
            required_capability=self.required_capability,
            unsupported=self.unsupported,
            suggest=self.suggest,
            experimental=self.experimental,
        )
