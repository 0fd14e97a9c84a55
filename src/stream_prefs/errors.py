"""Exception taxonomy for the preference engine.

Only UnknownKeyError and InvalidValueError reach callers of the facade.
PersistenceReadError and CapabilityProbeError are raised at the storage and
probe seams and absorbed there. DefinitionError signals a broken registry.
"""

from __future__ import annotations


class PreferenceError(Exception):
    """Base class for all preference engine errors."""


class UnknownKeyError(PreferenceError, KeyError):
    """A key was referenced that no namespace ever registered."""

    def __init__(self, key: str, namespace: str = ""):
        self.key = key
        self.namespace = namespace
        where = f" in namespace '{namespace}'" if namespace else ""
        super().__init__(f"unknown preference key '{key}'{where}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class InvalidValueError(PreferenceError, ValueError):
    """A value outside the resolved domain was offered to set()."""

    def __init__(self, key: str, value: object, reason: str = ""):
        self.key = key
        self.value = value
        self.reason = reason
        message = f"invalid value {value!r} for '{key}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class PersistenceReadError(PreferenceError):
    """The backend returned a blob that does not decode to a value bag."""


class CapabilityProbeError(PreferenceError):
    """A capability probe failed or is unavailable."""


class DefinitionError(PreferenceError):
    """The definition registry is inconsistent (a configuration error)."""
