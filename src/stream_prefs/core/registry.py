"""Definition registry — namespaces of raw specs, built once by a factory.

// [LAW:one-source-of-truth] A registry value is passed explicitly to whoever
//   resolves it; there is no module-level registry.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from stream_prefs.core.capabilities import CapabilitySnapshot
from stream_prefs.core.definitions import DefinitionSpec
from stream_prefs.core.resolver import ResolvedNamespace, resolve_namespace
from stream_prefs.errors import DefinitionError


@dataclass(frozen=True)
class Namespace:
    """A named group of specs bound to one persistence key."""

    name: str
    storage_key: str
    specs: tuple[DefinitionSpec, ...]

    def keys(self) -> tuple[str, ...]:
        return tuple(spec.key for spec in self.specs)

    def resolve(self, capabilities: CapabilitySnapshot) -> ResolvedNamespace:
        return resolve_namespace(self.name, self.storage_key, self.specs, capabilities)


class DefinitionRegistry:
    """Immutable collection of namespaces, in declaration order."""

    def __init__(self, namespaces: Iterable[Namespace]):
        by_name: dict[str, Namespace] = {}
        storage_keys: set[str] = set()
        for ns in namespaces:
            if ns.name in by_name:
                raise DefinitionError(f"duplicate namespace '{ns.name}'")
            if ns.storage_key in storage_keys:
                raise DefinitionError(f"storage key '{ns.storage_key}' bound twice")
            by_name[ns.name] = ns
            storage_keys.add(ns.storage_key)
        self._namespaces = by_name

    def namespace(self, name: str) -> Namespace:
        try:
            return self._namespaces[name]
        except KeyError:
            raise KeyError(f"unknown namespace '{name}'") from None

    def names(self) -> tuple[str, ...]:
        return tuple(self._namespaces)

    def __iter__(self) -> Iterator[Namespace]:
        return iter(self._namespaces.values())

    def __len__(self) -> int:
        return len(self._namespaces)
