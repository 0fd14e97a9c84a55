"""Definition resolver — the one-time "ready" pass over a namespace.

Each key is resolved by a pure function of its raw spec, the capability
snapshot and the definitions resolved before it in declaration order.

// [LAW:dataflow-not-control-flow] Gating, finalization, neutral default and
//   default settlement always run, in that order, for every key.
// [LAW:one-way-deps] A key may read keys declared before it, never after.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, replace
from types import MappingProxyType

from stream_prefs.core.capabilities import CapabilitySnapshot
from stream_prefs.core.definitions import MISSING, DefinitionSpec, SettingDefinition
from stream_prefs.core.domains import MultiSelectDomain, StringEnumDomain
from stream_prefs.errors import DefinitionError

logger = logging.getLogger(__name__)


class ResolvedView(Mapping[str, SettingDefinition]):
    """Read-only view of the definitions resolved so far in one namespace pass.

    Asking for a key declared later (or for the key being resolved) is a
    configuration error, not a miss.
    """

    def __init__(
        self,
        resolved: Mapping[str, SettingDefinition],
        declared: Sequence[str] = (),
        current: str = "",
    ):
        self._resolved = MappingProxyType(dict(resolved))
        self._declared = frozenset(declared)
        self._current = current

    def _reject_forward(self, key: object) -> None:
        if key in self._declared and key not in self._resolved:
            raise DefinitionError(
                f"'{self._current}' reads '{key}', which is not resolved before it; "
                "only keys declared earlier may be read"
            )

    def __getitem__(self, key: str) -> SettingDefinition:
        self._reject_forward(key)
        if key in self._resolved:
            return self._resolved[key]
        raise DefinitionError(f"'{self._current}' reads unknown key '{key}'")

    def __contains__(self, key: object) -> bool:
        # Membership of a later key is still a forward read.
        self._reject_forward(key)
        return key in self._resolved

    def __iter__(self) -> Iterator[str]:
        return iter(self._resolved)

    def __len__(self) -> int:
        return len(self._resolved)


@dataclass(frozen=True)
class ResolvedNamespace:
    """The frozen output of one namespace pass, in declaration order."""

    name: str
    storage_key: str
    definitions: Mapping[str, SettingDefinition]

    def __post_init__(self) -> None:
        object.__setattr__(self, "definitions", MappingProxyType(dict(self.definitions)))


def _settle_default(definition: SettingDefinition) -> SettingDefinition:
    """Make the default a member of the (possibly narrowed) domain."""
    domain = definition.domain
    default = definition.default

    if isinstance(domain, StringEnumDomain):
        if domain.accepts(default):
            return definition
        substitute = domain.first()
        if substitute is None:
            raise DefinitionError(f"'{definition.key}' has no options left")
        logger.debug("'%s': default %r narrowed away, using %r", definition.key, default, substitute)
        return replace(definition, default=substitute)

    if isinstance(domain, MultiSelectDomain):
        if not isinstance(default, (list, tuple)):
            raise DefinitionError(f"'{definition.key}' default must be a list, got {default!r}")
        # A selection shrinks with its options; dropped members fall out of the default.
        kept = tuple(item for item in default if item in domain.options)
        if kept != tuple(default):
            logger.debug("'%s': default trimmed to %r", definition.key, kept)
        return replace(definition, default=kept)

    reason = domain.check(default, default)
    if reason is not None:
        raise DefinitionError(f"'{definition.key}' default {default!r} is invalid: {reason}")
    return definition


def _check_suggest(definition: SettingDefinition) -> None:
    if definition.suggest is None:
        return
    for end, value in definition.suggest.ends():
        if not definition.accepts(value):
            raise DefinitionError(
                f"'{definition.key}' suggest.{end} {value!r} is not in the resolved domain"
            )


def resolve_definition(
    spec: DefinitionSpec,
    capabilities: CapabilitySnapshot,
    prior: ResolvedView | None = None,
) -> SettingDefinition:
    """Turn one raw spec into its environment-correct, frozen definition."""
    prior = prior if prior is not None else ResolvedView({}, (), spec.key)
    definition = spec.draft()

    absent = capabilities.missing(spec.required_capability)
    if absent:
        logger.debug("'%s': capabilities %s absent, unsupported", spec.key, list(absent))
        definition = replace(definition, unsupported=True)

    if spec.ready is not None:
        finalized = spec.ready(definition, capabilities, prior)
        if not isinstance(finalized, SettingDefinition):
            raise DefinitionError(f"ready hook for '{spec.key}' returned {finalized!r}")
        if finalized.key != spec.key:
            raise DefinitionError(f"ready hook for '{spec.key}' renamed it to '{finalized.key}'")
        definition = finalized

    if definition.unsupported and spec.neutral is not MISSING:
        neutral = tuple(spec.neutral) if isinstance(spec.neutral, list) else spec.neutral
        definition = replace(definition, default=neutral)

    definition = _settle_default(definition)
    _check_suggest(definition)
    return definition


def resolve_namespace(
    name: str,
    storage_key: str,
    specs: Sequence[DefinitionSpec],
    capabilities: CapabilitySnapshot,
) -> ResolvedNamespace:
    """Resolve every spec of a namespace once, strictly in declaration order."""
    declared = [spec.key for spec in specs]
    seen: set[str] = set()
    for key in declared:
        if key in seen:
            raise DefinitionError(f"duplicate key '{key}' in namespace '{name}'")
        seen.add(key)

    resolved: dict[str, SettingDefinition] = {}
    for spec in specs:
        view = ResolvedView(resolved, declared, spec.key)
        resolved[spec.key] = resolve_definition(spec, capabilities, view)

    unsupported = sum(1 for d in resolved.values() if d.unsupported)
    logger.info("Resolved namespace '%s': %d keys (%d unsupported)", name, len(resolved), unsupported)
    return ResolvedNamespace(name=name, storage_key=storage_key, definitions=resolved)
