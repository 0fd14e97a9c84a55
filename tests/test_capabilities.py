"""Tests for capability probing and codec-tier classification."""

import logging

from stream_prefs.core.capabilities import (
    TAG_APP_WRAPPER,
    TAG_FULL_VARIANT,
    TAG_TOUCH,
    CapabilitySnapshot,
    CodecCapability,
    CodecTier,
    StaticProber,
    classify_codec_tier,
    classify_codec_tiers,
    probe_capabilities,
)


class TestCodecClassification:
    def test_prefixes_map_to_tiers(self, h264):
        assert classify_codec_tier(h264("42001f")) is CodecTier.LOW
        assert classify_codec_tier(h264("42e01f")) is CodecTier.NORMAL
        assert classify_codec_tier(h264("4d001f")) is CodecTier.HIGH

    def test_mime_match_is_case_insensitive(self, h264):
        assert classify_codec_tier(h264("42e01f", mime_type="VIDEO/h264")) is CodecTier.NORMAL

    def test_other_codecs_and_bare_entries_are_ignored(self, h264):
        assert classify_codec_tier(h264("42e01f", mime_type="video/VP9")) is None
        assert classify_codec_tier(CodecCapability("video/H264", "")) is None
        assert classify_codec_tier(h264("64001f")) is None

    def test_profile_is_read_from_parameter_line(self):
        entry = CodecCapability("video/H264", "PROFILE-LEVEL-ID=4D0032; packetization-mode=0")
        assert classify_codec_tier(entry) is CodecTier.HIGH

    def test_tiers_without_entries_are_absent(self, h264):
        tiers = classify_codec_tiers([h264("42001f"), h264("420029"), h264("4d0032")])
        assert tiers == frozenset({CodecTier.LOW, CodecTier.HIGH})

    def test_no_entries_no_tiers(self):
        assert classify_codec_tiers([]) == frozenset()


class TestSnapshot:
    def test_tags_reflect_facts(self):
        snapshot = CapabilitySnapshot(touch=True, app_wrapper=True, codec_tiers=frozenset({CodecTier.NORMAL}))
        assert snapshot.tags == frozenset({TAG_TOUCH, TAG_APP_WRAPPER, "codec:normal"})
        assert snapshot.has(TAG_TOUCH)
        assert not snapshot.has(TAG_FULL_VARIANT)

    def test_missing_reports_all_absent_tags(self):
        snapshot = CapabilitySnapshot(full_variant=True)
        assert snapshot.missing(None) == ()
        assert snapshot.missing(TAG_FULL_VARIANT) == ()
        assert snapshot.missing((TAG_FULL_VARIANT, TAG_TOUCH)) == (TAG_TOUCH,)

    def test_default_snapshot_has_nothing(self):
        assert CapabilitySnapshot().tags == frozenset()


class _BrokenProber:
    def environment_facts(self):
        raise RuntimeError("navigator unavailable")

    async def video_codecs(self):
        raise RuntimeError("getCapabilities missing")


class _CountingProber:
    def __init__(self, codecs):
        self.codecs = codecs
        self.calls = 0

    def environment_facts(self):
        return {"touch": True, "full_variant": True, "device_class": "android-tv"}

    async def video_codecs(self):
        self.calls += 1
        return self.codecs


class TestProbe:
    async def test_static_prober_builds_snapshot(self, h264):
        prober = StaticProber(
            facts={"touch": True, "mobile": True, "device_class": "webos"},
            codecs=(h264("42e01f"),),
        )
        snapshot = await probe_capabilities(prober)
        assert snapshot.touch is True
        assert snapshot.mobile is True
        assert snapshot.mkb is False
        assert snapshot.device_class == "webos"
        assert snapshot.codec_tiers == frozenset({CodecTier.NORMAL})

    async def test_failures_record_capabilities_as_absent(self, caplog):
        with caplog.at_level(logging.WARNING, logger="stream_prefs"):
            snapshot = await probe_capabilities(_BrokenProber())
        assert snapshot == CapabilitySnapshot()
        assert "Capability probe failed" in caplog.text
        assert "Codec probe failed" in caplog.text

    async def test_only_explicit_true_counts(self):
        snapshot = await probe_capabilities(StaticProber(facts={"touch": "yes", "mkb": 1, "battery_api": True}))
        assert snapshot.touch is False
        assert snapshot.mkb is False
        assert snapshot.battery_api is True

    async def test_codec_probe_is_awaited_once(self, h264):
        prober = _CountingProber([h264("42001f"), h264("4d001f")])
        snapshot = await probe_capabilities(prober)
        assert prober.calls == 1
        assert snapshot.device_class == "android-tv"
        assert snapshot.codec_tiers == frozenset({CodecTier.LOW, CodecTier.HIGH})

    async def test_non_string_device_class_falls_back(self):
        snapshot = await probe_capabilities(StaticProber(facts={"device_class": 3}))
        assert snapshot.device_class == "unknown"


class TestFromMapping:
    def test_reads_facts_and_codec_entries(self):
        prober = StaticProber.from_mapping({
            "touch": True,
            "codecs": [
                {"mimeType": "video/H264", "sdpFmtpLine": "profile-level-id=42e01f"},
                {"mimeType": "video/VP8"},
                "garbage",
            ],
        })
        assert prober.environment_facts() == {"touch": True}
        assert prober.codecs == (
            CodecCapability("video/H264", "profile-level-id=42e01f"),
            CodecCapability("video/VP8", ""),
        )
