"""Preference engine — the single process-scoped context.

Boot awaits the capability probe exactly once. After that every operation is
synchronous: each namespace is resolved on first use, frozen, and served
through one SettingsFacade.

// [LAW:one-source-of-truth] The engine owns the registry, the snapshot and
//   the facades; nothing reaches them through module globals.
"""

from __future__ import annotations

import logging
from typing import Callable

from stream_prefs.app.settings import SettingsFacade
from stream_prefs.core.capabilities import CapabilityProber, CapabilitySnapshot, probe_capabilities
from stream_prefs.core.registry import DefinitionRegistry
from stream_prefs.io.storage import StorageBackend, ValueStore

logger = logging.getLogger(__name__)


class PreferenceEngine:
    def __init__(
        self,
        registry: DefinitionRegistry,
        capabilities: CapabilitySnapshot,
        backend: StorageBackend,
        translate: Callable[[str], str] | None = None,
    ):
        self._registry = registry
        self._capabilities = capabilities
        self._backend = backend
        self._translate = translate
        self._facades: dict[str, SettingsFacade] = {}

    @classmethod
    async def boot(
        cls,
        registry: DefinitionRegistry,
        prober: CapabilityProber,
        backend: StorageBackend,
        translate: Callable[[str], str] | None = None,
    ) -> PreferenceEngine:
        """Probe capabilities once and return a ready engine."""
        capabilities = await probe_capabilities(prober)
        logger.info("Preference engine booted with %d namespaces", len(registry))
        return cls(registry, capabilities, backend, translate)

    @property
    def capabilities(self) -> CapabilitySnapshot:
        return self._capabilities

    @property
    def registry(self) -> DefinitionRegistry:
        return self._registry

    def resolved_namespaces(self) -> tuple[str, ...]:
        return tuple(self._facades)

    def settings(self, namespace: str) -> SettingsFacade:
        """Facade for namespace, resolving it on first use."""
        facade = self._facades.get(namespace)
        if facade is None:
            resolved = self._registry.namespace(namespace).resolve(self._capabilities)
            store = ValueStore(self._backend, resolved.storage_key)
            facade = SettingsFacade(resolved, store, self._translate)
            self._facades[namespace] = facade
        return facade
