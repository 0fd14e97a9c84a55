"""Settings facade — validated get/set/describe over one resolved namespace.

// [LAW:single-enforcer] set() is the only path that writes a value; it validates
//   against the resolved domain before anything changes.
// [LAW:dataflow-not-control-flow] get() always yields a domain member: stored
//   value when valid, resolved default otherwise.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Callable

from stream_prefs.core.definitions import MISSING, SettingDefinition, Suggest
from stream_prefs.core.domains import NumberRangeDomain, render_label
from stream_prefs.core.resolver import ResolvedNamespace
from stream_prefs.errors import InvalidValueError, UnknownKeyError
from stream_prefs.io.storage import ValueStore

logger = logging.getLogger(__name__)

Listener = Callable[[str, object], None]


@dataclass(frozen=True)
class SettingDescription:
    """Read-only, translated view of one setting for UI builders and tuners."""

    key: str
    kind: str
    label: str
    note: str
    value: object
    default: object
    unsupported: bool
    experimental: bool
    options: tuple[tuple[str, str], ...] | None = None
    range: tuple[float, float, float] | None = None
    suggest: Suggest | None = None


class SettingsFacade:
    """Public surface of one namespace: resolved definitions + value store."""

    def __init__(
        self,
        resolved: ResolvedNamespace,
        store: ValueStore,
        translate: Callable[[str], str] | None = None,
    ):
        self._resolved = resolved
        self._store = store
        self._translate = translate
        self._listeners: list[Listener] = []

    @property
    def name(self) -> str:
        return self._resolved.name

    def keys(self) -> tuple[str, ...]:
        return tuple(self._resolved.definitions)

    def get_definition(self, key: str) -> SettingDefinition:
        try:
            return self._resolved.definitions[key]
        except KeyError:
            raise UnknownKeyError(key, self.name) from None

    def get(self, key: str, *, check_unsupported: bool = True) -> object:
        """Return the effective value of key.

        Unsupported settings read as their default unless check_unsupported
        is False. Stored values outside the domain are ignored, never raised.
        """
        definition = self.get_definition(key)
        if check_unsupported and definition.unsupported:
            return definition.fresh_default()

        stored = self._store.read(key)
        if stored is MISSING:
            return definition.fresh_default()
        reason = definition.check(stored)
        if reason is not None:
            logger.debug("Stored value %r for '%s' ignored: %s", stored, key, reason)
            return definition.fresh_default()
        return copy.deepcopy(stored)

    def set(self, key: str, value: object) -> object:
        """Validate and store value; raises InvalidValueError and changes nothing on rejection."""
        definition = self.get_definition(key)
        reason = definition.check(value)
        if reason is not None:
            raise InvalidValueError(key, value, reason)

        stored = list(value) if isinstance(value, tuple) else copy.deepcopy(value)
        # An unsupported key reads as its default, so only the default can be written.
        if definition.unsupported and stored != definition.fresh_default():
            raise InvalidValueError(key, value, "unsupported in this environment")
        self._store.write(key, stored)
        self._notify(key, copy.deepcopy(stored))
        return value

    def reset(self, key: str) -> object:
        """Forget the stored value; returns the default now in effect."""
        definition = self.get_definition(key)
        self._store.remove(key)
        value = definition.fresh_default()
        self._notify(key, value)
        return value

    def values(self) -> dict[str, object]:
        """Effective value of every key, in declaration order."""
        return {key: self.get(key) for key in self._resolved.definitions}

    def describe(self, key: str) -> SettingDescription:
        definition = self.get_definition(key)
        options = definition.options
        domain = definition.domain
        return SettingDescription(
            key=key,
            kind=domain.kind,
            label=render_label(definition.label, self._translate),
            note=render_label(definition.note, self._translate),
            value=self.get(key),
            default=definition.fresh_default(),
            unsupported=definition.unsupported,
            experimental=definition.experimental,
            options=(
                tuple((value, render_label(label, self._translate)) for value, label in options.items())
                if options is not None
                else None
            ),
            range=(
                (domain.min, domain.max, domain.step)
                if isinstance(domain, NumberRangeDomain)
                else None
            ),
            suggest=definition.suggest,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener(key, value) after each successful change. Returns a disposer."""
        self._listeners.append(listener)

        def dispose() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return dispose

    def _notify(self, key: str, value: object) -> None:
        for listener in list(self._listeners):
            try:
                listener(key, value)
            except Exception:
                logger.exception("Settings listener failed for '%s'", key)
