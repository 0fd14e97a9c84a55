"""Shared fixtures for stream-prefs tests."""

import pytest

from stream_prefs.core.capabilities import CapabilitySnapshot, CodecCapability, CodecTier
from stream_prefs.io.storage import MemoryBackend


@pytest.fixture
def h264():
    """Factory: H.264 capability entry as a browser reports it for one profile."""

    def _make(profile_level_id: str, mime_type: str = "video/H264") -> CodecCapability:
        return CodecCapability(
            mime_type=mime_type,
            sdp_fmtp_line="level-asymmetry-allowed=1;packetization-mode=1;profile-level-id={}".format(
                profile_level_id
            ),
        )

    return _make


@pytest.fixture
def make_snapshot():
    """Factory: snapshot with everything present unless overridden."""

    def _make(**overrides) -> CapabilitySnapshot:
        values = dict(
            touch=True,
            mkb=True,
            battery_api=True,
            mobile=False,
            app_wrapper=False,
            full_variant=True,
            device_class="unknown",
            codec_tiers=frozenset(CodecTier),
        )
        values.update(overrides)
        return CapabilitySnapshot(**values)

    return _make


@pytest.fixture
def caps(make_snapshot):
    return make_snapshot()


@pytest.fixture
def backend():
    return MemoryBackend()
