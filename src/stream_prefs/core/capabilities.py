"""Capability snapshot — environment facts probed once at boot.

The snapshot is pure data after construction. Every probe failure records
the capability as absent (fail-safe), never as present.

// [LAW:single-enforcer] probe_capabilities() is the only suspension point and
//   the only place that talks to the environment.
// [LAW:dataflow-not-control-flow] Codec tiers are classified by prefix table.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from stream_prefs.errors import CapabilityProbeError

logger = logging.getLogger(__name__)


TAG_TOUCH = "touch"
TAG_MKB = "mkb"
TAG_BATTERY_API = "battery-api"
TAG_MOBILE = "mobile"
TAG_APP_WRAPPER = "app-wrapper"
TAG_FULL_VARIANT = "variant:full"

TARGET_CODEC_FAMILY = "video/h264"


class CodecTier(Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"

    @property
    def tag(self) -> str:
        return f"codec:{self.value}"


# Ascending quality order.
TIER_ORDER: tuple[CodecTier, ...] = (CodecTier.LOW, CodecTier.NORMAL, CodecTier.HIGH)

# [LAW:one-source-of-truth] profile-level-id prefixes per tier (disjoint).
TIER_PREFIXES: dict[CodecTier, tuple[str, ...]] = {
    CodecTier.HIGH: ("4d",),
    CodecTier.NORMAL: ("42e",),
    CodecTier.LOW: ("420",),
}


@dataclass(frozen=True)
class CodecCapability:
    """One reported video decode capability entry."""

    mime_type: str
    sdp_fmtp_line: str = ""


def _fmtp_params(line: str) -> dict[str, str]:
    params: dict[str, str] = {}
    for part in line.split(";"):
        name, sep, value = part.strip().partition("=")
        if sep:
            params[name.strip().lower()] = value.strip().lower()
    return params


def classify_codec_tier(entry: CodecCapability, codec_family: str = TARGET_CODEC_FAMILY) -> CodecTier | None:
    """Return the tier for one capability entry, or None when it does not match."""
    if str(entry.mime_type or "").lower() != codec_family.lower() or not entry.sdp_fmtp_line:
        return None
    profile = _fmtp_params(entry.sdp_fmtp_line).get("profile-level-id", "")
    for tier, prefixes in TIER_PREFIXES.items():
        if profile.startswith(prefixes):
            return tier
    return None


def classify_codec_tiers(
    entries: Sequence[CodecCapability],
    codec_family: str = TARGET_CODEC_FAMILY,
) -> frozenset[CodecTier]:
    """Return the tiers with at least one matching entry."""
    tiers = (classify_codec_tier(entry, codec_family) for entry in entries)
    return frozenset(tier for tier in tiers if tier is not None)


@dataclass(frozen=True)
class CapabilitySnapshot:
    """Immutable environment fact sheet consumed by the resolver."""

    touch: bool = False
    mkb: bool = False
    battery_api: bool = False
    mobile: bool = False
    app_wrapper: bool = False
    full_variant: bool = False
    device_class: str = "unknown"
    codec_tiers: frozenset[CodecTier] = field(default_factory=frozenset)

    @property
    def tags(self) -> frozenset[str]:
        flags = {
            TAG_TOUCH: self.touch,
            TAG_MKB: self.mkb,
            TAG_BATTERY_API: self.battery_api,
            TAG_MOBILE: self.mobile,
            TAG_APP_WRAPPER: self.app_wrapper,
            TAG_FULL_VARIANT: self.full_variant,
        }
        present = {tag for tag, on in flags.items() if on}
        present.update(tier.tag for tier in self.codec_tiers)
        return frozenset(present)

    def has(self, tag: str) -> bool:
        return tag in self.tags

    def missing(self, required: str | tuple[str, ...] | None) -> tuple[str, ...]:
        """Return the required tags that are absent (all must be present)."""
        if not required:
            return ()
        wanted = (required,) if isinstance(required, str) else tuple(required)
        tags = self.tags
        return tuple(tag for tag in wanted if tag not in tags)


class CapabilityProber(Protocol):
    """External collaborator that knows how to ask the environment."""

    def environment_facts(self) -> Mapping[str, object]:
        ...

    async def video_codecs(self) -> Sequence[CodecCapability]:
        ...


_BOOL_FACTS = ("touch", "mkb", "battery_api", "mobile", "app_wrapper", "full_variant")


@dataclass(frozen=True)
class StaticProber:
    """Prober over fixed data: offline tools, tests, recorded environments."""

    facts: Mapping[str, object] = field(default_factory=dict)
    codecs: tuple[CodecCapability, ...] = ()

    def environment_facts(self) -> Mapping[str, object]:
        return self.facts

    async def video_codecs(self) -> Sequence[CodecCapability]:
        return self.codecs

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> StaticProber:
        """Build from a JSON-style mapping; ``codecs`` holds mimeType/sdpFmtpLine dicts."""
        facts = {k: v for k, v in data.items() if k != "codecs"}
        raw_codecs = data.get("codecs")
        codecs = tuple(
            CodecCapability(
                mime_type=str(item.get("mimeType", "")),
                sdp_fmtp_line=str(item.get("sdpFmtpLine", "") or ""),
            )
            for item in (raw_codecs if isinstance(raw_codecs, list) else [])
            if isinstance(item, Mapping)
        )
        return cls(facts=facts, codecs=codecs)


def _probe_facts(prober: CapabilityProber) -> Mapping[str, object]:
    try:
        facts = prober.environment_facts()
    except Exception as e:
        raise CapabilityProbeError(f"environment facts unavailable: {e}") from e
    if not isinstance(facts, Mapping):
        raise CapabilityProbeError("environment facts are not a mapping")
    return facts


async def _probe_codecs(prober: CapabilityProber) -> tuple[CodecCapability, ...]:
    try:
        entries = await prober.video_codecs()
    except Exception as e:
        raise CapabilityProbeError(f"codec capabilities unavailable: {e}") from e
    return tuple(entry for entry in (entries or ()) if isinstance(entry, CodecCapability))


async def probe_capabilities(prober: CapabilityProber) -> CapabilitySnapshot:
    """Run the one asynchronous probe and freeze the result.

    Failures never propagate: a failed probe leaves its capabilities absent.
    """
    try:
        facts = _probe_facts(prober)
    except CapabilityProbeError as e:
        logger.warning("Capability probe failed, assuming absent: %s", e)
        facts = {}

    try:
        codecs = await _probe_codecs(prober)
    except CapabilityProbeError as e:
        logger.warning("Codec probe failed, assuming no codec tiers: %s", e)
        codecs = ()

    device_class = facts.get("device_class")
    snapshot = CapabilitySnapshot(
        # [LAW:dataflow-not-control-flow] Only an explicit True counts as present.
        **{name: facts.get(name) is True for name in _BOOL_FACTS},
        device_class=device_class if isinstance(device_class, str) and device_class else "unknown",
        codec_tiers=classify_codec_tiers(codecs),
    )
    logger.debug("Capability snapshot: tags=%s device=%s", sorted(snapshot.tags), snapshot.device_class)
    return snapshot
