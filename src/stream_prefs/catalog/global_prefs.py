"""Global namespace — every client-wide preference of the streaming client.

Labels and notes are translation keys; the host supplies the lookup.

// [LAW:one-source-of-truth] All global preferences, their domains and their
//   ready hooks are declared here, in resolution order.
"""

from __future__ import annotations

from dataclasses import replace

from stream_prefs.catalog.keys import (
    TV_DEVICE_CLASSES,
    CodecProfile,
    PrefKey,
    StreamResolution,
    StreamStat,
    TouchController,
    UiSection,
    UserAgentProfile,
)
from stream_prefs.core.capabilities import (
    TAG_FULL_VARIANT,
    TAG_MKB,
    TAG_TOUCH,
    TIER_ORDER,
    CapabilitySnapshot,
    CodecTier,
)
from stream_prefs.core.definitions import DefinitionSpec, SettingDefinition, Suggest
from stream_prefs.core.domains import (
    BoolDomain,
    Label,
    MultiSelectDomain,
    NumberRangeDomain,
    OpaqueDomain,
    StringEnumDomain,
)
from stream_prefs.core.resolver import ResolvedView

FULL = TAG_FULL_VARIANT
FULL_TOUCH = (TAG_FULL_VARIANT, TAG_TOUCH)
FULL_MKB = (TAG_FULL_VARIANT, TAG_MKB)

_BOOL = BoolDomain()
_OPAQUE = OpaqueDomain()

GAME_LANGUAGES: dict[str, str] = {
    "ar-SA": "العربية",
    "bg-BG": "Български",
    "cs-CZ": "čeština",
    "da-DK": "dansk",
    "de-DE": "Deutsch",
    "el-GR": "Ελληνικά",
    "en-GB": "English (UK)",
    "en-US": "English (US)",
    "es-ES": "español (España)",
    "es-MX": "español (Latinoamérica)",
    "fi-FI": "suomi",
    "fr-FR": "français",
    "he-IL": "עברית",
    "hu-HU": "magyar",
    "it-IT": "italiano",
    "ja-JP": "日本語",
    "ko-KR": "한국어",
    "nb-NO": "norsk bokmål",
    "nl-NL": "Nederlands",
    "pl-PL": "polski",
    "pt-BR": "português (Brasil)",
    "pt-PT": "português (Portugal)",
    "ro-RO": "Română",
    "ru-RU": "русский",
    "sk-SK": "slovenčina",
    "sv-SE": "svenska",
    "th-TH": "ไทย",
    "tr-TR": "Türkçe",
    "zh-CN": "中文(简体)",
    "zh-TW": "中文 (繁體)",
}

BYPASS_SERVERS: dict[str, str] = {
    "br": "🇧🇷 Brazil",
    "jp": "🇯🇵 Japan",
    "pl": "🇵🇱 Poland",
    "us": "🇺🇸 United States",
}

_TIER_LABELS: dict[CodecTier, str] = {
    CodecTier.LOW: "visual-quality-low",
    CodecTier.NORMAL: "visual-quality-normal",
    CodecTier.HIGH: "visual-quality-high",
}


# ─── Ready hooks ────────────────────────────────────────────────────────────


def codec_profile_choices(tiers: frozenset[CodecTier]) -> tuple[dict[str, Label], Suggest | None]:
    """Option set and suggestion for the decodable codec tiers.

    One tier collapses into the canonical "default" choice; two or more are
    offered individually, lowest to highest. No tier leaves only "default".
    """
    present = [tier for tier in TIER_ORDER if tier in tiers]
    if not present:
        return {CodecProfile.DEFAULT: "default"}, None
    if len(present) == 1:
        label = (_TIER_LABELS[present[0]], "(default)")
        return {CodecProfile.DEFAULT: label}, Suggest(CodecProfile.DEFAULT, CodecProfile.DEFAULT)
    options: dict[str, Label] = {tier.value: _TIER_LABELS[tier] for tier in present}
    return options, Suggest(present[0].value, present[-1].value)


def _ready_codec_profile(
    definition: SettingDefinition, caps: CapabilitySnapshot, prior: ResolvedView
) -> SettingDefinition:
    options, suggest = codec_profile_choices(caps.codec_tiers)
    definition = replace(definition, domain=StringEnumDomain(options), suggest=suggest)
    if not caps.codec_tiers:
        definition = replace(definition, unsupported=True, note=("⚠️", "browser-unsupported-feature"))
    return definition


def _ready_mkb(definition: SettingDefinition, caps: CapabilitySnapshot, prior: ResolvedView) -> SettingDefinition:
    note = "browser-unsupported-feature" if definition.unsupported else "mkb-disclaimer"
    return replace(definition, note=("⚠️", note))


def _ready_native_mkb(
    definition: SettingDefinition, caps: CapabilitySnapshot, prior: ResolvedView
) -> SettingDefinition:
    if caps.app_wrapper:
        return definition
    if caps.mobile:
        return replace(
            definition,
            unsupported=True,
            default="off",
            domain=definition.domain.without("default", "on"),
        )
    return replace(definition, domain=definition.domain.without("on"))


def _ready_native_mkb_scroll(
    definition: SettingDefinition, caps: CapabilitySnapshot, prior: ResolvedView
) -> SettingDefinition:
    if prior[PrefKey.NATIVE_MKB_ENABLED].unsupported:
        return replace(definition, unsupported=True)
    return definition


def _ready_controller_friendly(
    definition: SettingDefinition, caps: CapabilitySnapshot, prior: ResolvedView
) -> SettingDefinition:
    return replace(definition, default=caps.device_class != "unknown")


def _ready_user_agent(
    definition: SettingDefinition, caps: CapabilitySnapshot, prior: ResolvedView
) -> SettingDefinition:
    if caps.device_class in TV_DEVICE_CLASSES:
        return replace(definition, default=UserAgentProfile.VR_OCULUS)
    return definition


def _ready_stats_items(
    definition: SettingDefinition, caps: CapabilitySnapshot, prior: ResolvedView
) -> SettingDefinition:
    if caps.battery_api:
        return definition
    return replace(definition, domain=definition.domain.without(StreamStat.BATTERY))


# ─── Definitions ────────────────────────────────────────────────────────────


def _stepper(key: str, label: Label, default: int, low: int, high: int, step: int = 1, **extra) -> DefinitionSpec:
    return DefinitionSpec(key=key, label=label, default=default, domain=NumberRangeDomain(low, high, step), **extra)


def _toggle(key: str, label: Label = "", default: bool = False, **extra) -> DefinitionSpec:
    return DefinitionSpec(key=key, label=label, default=default, domain=_BOOL, **extra)


def global_definitions() -> tuple[DefinitionSpec, ...]:
    """Specs of the global namespace, in declaration (= resolution) order."""
    return (
        DefinitionSpec(key=PrefKey.LAST_UPDATE_CHECK, domain=_OPAQUE, default=0),
        DefinitionSpec(key=PrefKey.LATEST_VERSION, domain=_OPAQUE, default=""),
        DefinitionSpec(key=PrefKey.CURRENT_VERSION, domain=_OPAQUE, default=""),
        DefinitionSpec(
            key=PrefKey.LOCALE,
            label="language",
            default="en-US",
            domain=StringEnumDomain(GAME_LANGUAGES),
        ),
        DefinitionSpec(key=PrefKey.SERVER_REGION, label="region", domain=_OPAQUE, default="default"),
        DefinitionSpec(
            key=PrefKey.SERVER_BYPASS_RESTRICTION,
            label="bypass-region-restriction",
            note=("⚠️", "use-this-at-your-own-risk"),
            default="off",
            domain=StringEnumDomain({"off": "off", **BYPASS_SERVERS}),
        ),
        DefinitionSpec(
            key=PrefKey.STREAM_PREFERRED_LOCALE,
            label="preferred-game-language",
            default="default",
            domain=StringEnumDomain({"default": "default", **GAME_LANGUAGES}),
        ),
        DefinitionSpec(
            key=PrefKey.STREAM_TARGET_RESOLUTION,
            label="target-resolution",
            default="auto",
            domain=StringEnumDomain({
                "auto": "default",
                StreamResolution.DIM_720P: "720p",
                StreamResolution.DIM_1080P: "1080p",
            }),
            suggest=Suggest(lowest=StreamResolution.DIM_720P, highest=StreamResolution.DIM_1080P),
        ),
        DefinitionSpec(
            key=PrefKey.STREAM_CODEC_PROFILE,
            label="visual-quality",
            default=CodecProfile.DEFAULT,
            domain=StringEnumDomain({CodecProfile.DEFAULT: "default"}),
            neutral=CodecProfile.DEFAULT,
            ready=_ready_codec_profile,
        ),
        _toggle(PrefKey.PREFER_IPV6_SERVER, "prefer-ipv6-server"),
        _toggle(PrefKey.SCREENSHOT_APPLY_FILTERS, "screenshot-apply-filters", required_capability=FULL),
        _toggle(PrefKey.SKIP_SPLASH_VIDEO, "skip-splash-video"),
        _toggle(PrefKey.HIDE_DOTS_ICON, "hide-system-menu-icon"),
        _toggle(
            PrefKey.STREAM_COMBINE_SOURCES,
            "combine-audio-video-streams",
            note="combine-audio-video-streams-summary",
            experimental=True,
            required_capability=FULL,
        ),
        DefinitionSpec(
            key=PrefKey.STREAM_TOUCH_CONTROLLER,
            label="tc-availability",
            default=TouchController.ALL,
            domain=StringEnumDomain({
                TouchController.DEFAULT: "default",
                TouchController.ALL: "tc-all-games",
                TouchController.OFF: "off",
            }),
            required_capability=FULL_TOUCH,
            neutral=TouchController.DEFAULT,
        ),
        _toggle(
            PrefKey.STREAM_TOUCH_CONTROLLER_AUTO_OFF,
            "tc-auto-off",
            required_capability=FULL_TOUCH,
            neutral=False,
        ),
        _stepper(
            PrefKey.STREAM_TOUCH_CONTROLLER_DEFAULT_OPACITY,
            "tc-default-opacity",
            100, 10, 100, 10,
            required_capability=FULL_TOUCH,
            neutral=100,
        ),
        DefinitionSpec(
            key=PrefKey.STREAM_TOUCH_CONTROLLER_STYLE_STANDARD,
            label="tc-standard-layout-style",
            default="default",
            domain=StringEnumDomain({"default": "default", "white": "tc-all-white", "muted": "tc-muted-colors"}),
            required_capability=FULL_TOUCH,
            neutral="default",
        ),
        DefinitionSpec(
            key=PrefKey.STREAM_TOUCH_CONTROLLER_STYLE_CUSTOM,
            label="tc-custom-layout-style",
            default="default",
            domain=StringEnumDomain({"default": "default", "muted": "tc-muted-colors"}),
            required_capability=FULL_TOUCH,
            neutral="default",
        ),
        _toggle(PrefKey.STREAM_SIMPLIFY_MENU, "simplify-stream-menu"),
        _toggle(PrefKey.MKB_HIDE_IDLE_CURSOR, "hide-idle-cursor", required_capability=FULL),
        _toggle(PrefKey.STREAM_DISABLE_FEEDBACK_DIALOG, "disable-post-stream-feedback-dialog", required_capability=FULL),
        DefinitionSpec(
            key=PrefKey.BITRATE_VIDEO_MAX,
            label="bitrate-video-maximum",
            note=("⚠️", "unexpected-behavior"),
            default=0,
            # 0 means unlimited
            domain=NumberRangeDomain(0, 14 * 1024 * 1000, 100 * 1024),
            suggest=Suggest(highest=0),
            required_capability=FULL,
        ),
        DefinitionSpec(
            key=PrefKey.GAME_BAR_POSITION,
            label="position",
            default="bottom-left",
            domain=StringEnumDomain({"bottom-left": "bottom-left", "bottom-right": "bottom-right", "off": "off"}),
            required_capability=FULL,
        ),
        _toggle(
            PrefKey.LOCAL_CO_OP_ENABLED,
            "enable-local-co-op-support",
            note="enable-local-co-op-support-note",
            required_capability=FULL,
        ),
        _toggle(PrefKey.CONTROLLER_SHOW_CONNECTION_STATUS, "show-controller-connection-status", True),
        _toggle(PrefKey.CONTROLLER_ENABLE_VIBRATION, "controller-vibration", True, required_capability=FULL),
        DefinitionSpec(
            key=PrefKey.CONTROLLER_DEVICE_VIBRATION,
            label="device-vibration",
            default="off",
            domain=StringEnumDomain({"on": "on", "auto": "device-vibration-not-using-gamepad", "off": "off"}),
            required_capability=FULL,
        ),
        _stepper(PrefKey.CONTROLLER_VIBRATION_INTENSITY, "vibration-intensity", 100, 0, 100, 10, required_capability=FULL),
        # Milliseconds between polls; 4ms is the stock rate.
        _stepper(PrefKey.CONTROLLER_POLLING_RATE, "polling-rate", 4, 4, 60, 4, required_capability=FULL),
        _toggle(PrefKey.MKB_ENABLED, "enable-mkb", required_capability=FULL_MKB, neutral=False, ready=_ready_mkb),
        DefinitionSpec(
            key=PrefKey.NATIVE_MKB_ENABLED,
            label="native-mkb",
            default="default",
            domain=StringEnumDomain({"default": "default", "on": "on", "off": "off"}),
            required_capability=FULL,
            ready=_ready_native_mkb,
        ),
        _stepper(
            PrefKey.NATIVE_MKB_SCROLL_HORIZONTAL_SENSITIVITY,
            "horizontal-scroll-sensitivity",
            0, 0, 100 * 100, 10,
            required_capability=FULL,
            neutral=0,
            ready=_ready_native_mkb_scroll,
        ),
        _stepper(
            PrefKey.NATIVE_MKB_SCROLL_VERTICAL_SENSITIVITY,
            "vertical-scroll-sensitivity",
            0, 0, 100 * 100, 10,
            required_capability=FULL,
            neutral=0,
            ready=_ready_native_mkb_scroll,
        ),
        DefinitionSpec(key=PrefKey.MKB_DEFAULT_PRESET_ID, domain=_OPAQUE, default=0, required_capability=FULL),
        _toggle(PrefKey.MKB_ABSOLUTE_MOUSE, required_capability=FULL),
        _toggle(PrefKey.REDUCE_ANIMATIONS, "reduce-animations"),
        _toggle(PrefKey.UI_LOADING_SCREEN_GAME_ART, "show-game-art", True, required_capability=FULL),
        _toggle(PrefKey.UI_LOADING_SCREEN_WAIT_TIME, "show-wait-time", True),
        DefinitionSpec(
            key=PrefKey.UI_LOADING_SCREEN_ROCKET,
            label="rocket-animation",
            default="show",
            domain=StringEnumDomain({
                "show": "rocket-always-show",
                "hide-queue": "rocket-hide-queue",
                "hide": "rocket-always-hide",
            }),
        ),
        _toggle(PrefKey.UI_CONTROLLER_FRIENDLY, "controller-friendly-ui", ready=_ready_controller_friendly),
        DefinitionSpec(
            key=PrefKey.UI_LAYOUT,
            label="layout",
            default="default",
            domain=StringEnumDomain({"default": "default", "normal": "normal", "tv": "smart-tv"}),
            required_capability=FULL,
        ),
        _toggle(PrefKey.UI_SCROLLBAR_HIDE, "hide-scrollbar"),
        DefinitionSpec(
            key=PrefKey.UI_HIDE_SECTIONS,
            label="hide-sections",
            default=[],
            domain=MultiSelectDomain({
                UiSection.NEWS: "section-news",
                UiSection.FRIENDS: "section-play-with-friends",
                UiSection.NATIVE_MKB: "section-native-mkb",
                UiSection.TOUCH: "section-touch",
                UiSection.MOST_POPULAR: "section-most-popular",
                UiSection.ALL_GAMES: "section-all-games",
                UiSection.STREAM_YOUR_OWN_GAME: "section-stream-your-own-game",
            }),
            required_capability=FULL,
        ),
        _toggle(PrefKey.UI_GAME_CARD_SHOW_WAIT_TIME, "show-wait-time-in-game-card", required_capability=FULL),
        _toggle(PrefKey.BLOCK_SOCIAL_FEATURES, "disable-social-features"),
        _toggle(PrefKey.BLOCK_TRACKING, "disable-xcloud-analytics"),
        DefinitionSpec(
            key=PrefKey.USER_AGENT_PROFILE,
            label="user-agent-profile",
            note=("⚠️", "unexpected-behavior"),
            default=UserAgentProfile.DEFAULT,
            domain=StringEnumDomain({
                UserAgentProfile.DEFAULT: "default",
                UserAgentProfile.WINDOWS_EDGE: "Edge + Windows",
                UserAgentProfile.MACOS_SAFARI: "Safari + macOS",
                UserAgentProfile.VR_OCULUS: "Android TV",
                UserAgentProfile.SMART_TV_GENERIC: "Smart TV",
                UserAgentProfile.SMART_TV_TIZEN: "Samsung Smart TV",
                UserAgentProfile.CUSTOM: "custom",
            }),
            ready=_ready_user_agent,
        ),
        DefinitionSpec(
            key=PrefKey.VIDEO_PLAYER_TYPE,
            label="renderer",
            default="default",
            domain=StringEnumDomain({"default": "default", "webgl2": "webgl2"}),
            suggest=Suggest(lowest="default", highest="webgl2"),
        ),
        DefinitionSpec(
            key=PrefKey.VIDEO_PROCESSING,
            label="clarity-boost",
            default="usm",
            domain=StringEnumDomain({"usm": "unsharp-masking", "cas": "amd-fidelity-cas"}),
            suggest=Suggest(lowest="usm", highest="cas"),
        ),
        DefinitionSpec(
            key=PrefKey.VIDEO_POWER_PREFERENCE,
            label="renderer-configuration",
            default="default",
            domain=StringEnumDomain({
                "default": "default",
                "low-power": "battery-saving",
                "high-performance": "high-performance",
            }),
            suggest=Suggest(highest="low-power"),
        ),
        # 60 means unlimited
        _stepper(PrefKey.VIDEO_MAX_FPS, "max-fps", 60, 10, 60, 10),
        _stepper(PrefKey.VIDEO_SHARPNESS, "sharpness", 0, 0, 10, suggest=Suggest(lowest=0, highest=2)),
        DefinitionSpec(
            key=PrefKey.VIDEO_RATIO,
            label="aspect-ratio",
            note="aspect-ratio-note",
            default="16:9",
            domain=StringEnumDomain({
                "16:9": "16:9",
                "18:9": "18:9",
                "21:9": "21:9",
                "16:10": "16:10",
                "4:3": "4:3",
                "fill": "stretch",
            }),
        ),
        _stepper(PrefKey.VIDEO_SATURATION, "saturation", 100, 50, 150),
        _stepper(PrefKey.VIDEO_CONTRAST, "contrast", 100, 50, 150),
        _stepper(PrefKey.VIDEO_BRIGHTNESS, "brightness", 100, 50, 150),
        _toggle(PrefKey.AUDIO_MIC_ON_PLAYING, "enable-mic-on-startup"),
        _toggle(PrefKey.AUDIO_ENABLE_VOLUME_CONTROL, "enable-volume-control", required_capability=FULL),
        _stepper(PrefKey.AUDIO_VOLUME, "volume", 100, 0, 600, 10),
        DefinitionSpec(
            key=PrefKey.STATS_ITEMS,
            label="stats",
            default=[
                StreamStat.PING,
                StreamStat.FPS,
                StreamStat.BITRATE,
                StreamStat.DECODE_TIME,
                StreamStat.PACKETS_LOST,
                StreamStat.FRAMES_LOST,
            ],
            domain=MultiSelectDomain({
                StreamStat.CLOCK: "clock",
                StreamStat.PLAYTIME: "playtime",
                StreamStat.BATTERY: "battery",
                StreamStat.PING: "stat-ping",
                StreamStat.JITTER: "jitter",
                StreamStat.FPS: "stat-fps",
                StreamStat.BITRATE: "stat-bitrate",
                StreamStat.DECODE_TIME: "stat-decode-time",
                StreamStat.PACKETS_LOST: "stat-packets-lost",
                StreamStat.FRAMES_LOST: "stat-frames-lost",
                StreamStat.DOWNLOAD: "downloaded",
                StreamStat.UPLOAD: "uploaded",
            }),
            ready=_ready_stats_items,
        ),
        _toggle(PrefKey.STATS_SHOW_WHEN_PLAYING, "show-stats-on-startup"),
        _toggle(PrefKey.STATS_QUICK_GLANCE, "enable-quick-glance-mode", True),
        DefinitionSpec(
            key=PrefKey.STATS_POSITION,
            label="position",
            default="top-right",
            domain=StringEnumDomain({"top-left": "top-left", "top-center": "top-center", "top-right": "top-right"}),
        ),
        DefinitionSpec(
            key=PrefKey.STATS_TEXT_SIZE,
            label="text-size",
            default="0.9rem",
            domain=StringEnumDomain({"0.9rem": "small", "1.0rem": "normal", "1.1rem": "large"}),
        ),
        _toggle(PrefKey.STATS_TRANSPARENT, "transparent-background"),
        _stepper(PrefKey.STATS_OPACITY, "opacity", 80, 50, 100, 10),
        _toggle(PrefKey.STATS_CONDITIONAL_FORMATTING, "conditional-formatting"),
        _toggle(PrefKey.REMOTE_PLAY_ENABLED, "enable-remote-play-feature", required_capability=FULL),
        DefinitionSpec(
            key=PrefKey.REMOTE_PLAY_RESOLUTION,
            default=StreamResolution.DIM_1080P,
            domain=StringEnumDomain({StreamResolution.DIM_1080P: "1080p", StreamResolution.DIM_720P: "720p"}),
            required_capability=FULL,
        ),
        _toggle(
            PrefKey.GAME_FORTNITE_FORCE_CONSOLE,
            ("🎮", "fortnite-force-console-version"),
            note="fortnite-allow-stw-mode",
            required_capability=FULL,
        ),
        _toggle(
            PrefKey.GAME_MSFS2020_FORCE_NATIVE_MKB,
            ("✈️", "msfs2020-force-native-mkb"),
            note="may-not-work-properly",
            required_capability=FULL,
        ),
    )
