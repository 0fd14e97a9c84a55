"""Preference catalog of the streaming client.

build_registry() is the one factory for the definition registry; callers
hold the returned value and pass it to the engine.
"""

from __future__ import annotations

from stream_prefs.catalog.global_prefs import global_definitions
from stream_prefs.core.registry import DefinitionRegistry, Namespace

GLOBAL_NAMESPACE = "global"
GLOBAL_STORAGE_KEY = "stream_prefs.global"


def build_registry() -> DefinitionRegistry:
    return DefinitionRegistry([
        Namespace(GLOBAL_NAMESPACE, GLOBAL_STORAGE_KEY, global_definitions()),
    ])
