"""Preference keys and value constants of the streaming client catalog."""


class PrefKey:
    LAST_UPDATE_CHECK = "version_last_check"
    LATEST_VERSION = "version_latest"
    CURRENT_VERSION = "version_current"
    LOCALE = "locale"
    SERVER_REGION = "server_region"
    SERVER_BYPASS_RESTRICTION = "server_bypass_restriction"
    PREFER_IPV6_SERVER = "prefer_ipv6_server"

    STREAM_PREFERRED_LOCALE = "stream_preferred_locale"
    STREAM_TARGET_RESOLUTION = "stream_target_resolution"
    STREAM_CODEC_PROFILE = "stream_codec_profile"
    STREAM_COMBINE_SOURCES = "stream_combine_sources"
    STREAM_SIMPLIFY_MENU = "stream_simplify_menu"
    STREAM_DISABLE_FEEDBACK_DIALOG = "stream_disable_feedback_dialog"

    STREAM_TOUCH_CONTROLLER = "stream_touch_controller"
    STREAM_TOUCH_CONTROLLER_AUTO_OFF = "stream_touch_controller_auto_off"
    STREAM_TOUCH_CONTROLLER_DEFAULT_OPACITY = "stream_touch_controller_default_opacity"
    STREAM_TOUCH_CONTROLLER_STYLE_STANDARD = "stream_touch_controller_style_standard"
    STREAM_TOUCH_CONTROLLER_STYLE_CUSTOM = "stream_touch_controller_style_custom"

    SCREENSHOT_APPLY_FILTERS = "screenshot_apply_filters"
    SKIP_SPLASH_VIDEO = "skip_splash_video"
    HIDE_DOTS_ICON = "hide_dots_icon"
    BITRATE_VIDEO_MAX = "bitrate_video_max"
    GAME_BAR_POSITION = "game_bar_position"
    LOCAL_CO_OP_ENABLED = "local_co_op_enabled"

    CONTROLLER_SHOW_CONNECTION_STATUS = "controller_show_connection_status"
    CONTROLLER_ENABLE_VIBRATION = "controller_enable_vibration"
    CONTROLLER_DEVICE_VIBRATION = "controller_device_vibration"
    CONTROLLER_VIBRATION_INTENSITY = "controller_vibration_intensity"
    CONTROLLER_POLLING_RATE = "controller_polling_rate"

    MKB_ENABLED = "mkb_enabled"
    MKB_HIDE_IDLE_CURSOR = "mkb_hide_idle_cursor"
    MKB_DEFAULT_PRESET_ID = "mkb_default_preset_id"
    MKB_ABSOLUTE_MOUSE = "mkb_absolute_mouse"
    NATIVE_MKB_ENABLED = "native_mkb_enabled"
    NATIVE_MKB_SCROLL_HORIZONTAL_SENSITIVITY = "native_mkb_scroll_x_sensitivity"
    NATIVE_MKB_SCROLL_VERTICAL_SENSITIVITY = "native_mkb_scroll_y_sensitivity"

    REDUCE_ANIMATIONS = "reduce_animations"
    UI_LOADING_SCREEN_GAME_ART = "ui_loading_screen_game_art"
    UI_LOADING_SCREEN_WAIT_TIME = "ui_loading_screen_wait_time"
    UI_LOADING_SCREEN_ROCKET = "ui_loading_screen_rocket"
    UI_CONTROLLER_FRIENDLY = "ui_controller_friendly"
    UI_LAYOUT = "ui_layout"
    UI_SCROLLBAR_HIDE = "ui_scrollbar_hide"
    UI_HIDE_SECTIONS = "ui_hide_sections"
    UI_GAME_CARD_SHOW_WAIT_TIME = "ui_game_card_show_wait_time"

    BLOCK_SOCIAL_FEATURES = "block_social_features"
    BLOCK_TRACKING = "block_tracking"
    USER_AGENT_PROFILE = "user_agent_profile"

    VIDEO_PLAYER_TYPE = "video_player_type"
    VIDEO_PROCESSING = "video_processing"
    VIDEO_POWER_PREFERENCE = "video_power_preference"
    VIDEO_MAX_FPS = "video_max_fps"
    VIDEO_SHARPNESS = "video_sharpness"
    VIDEO_RATIO = "video_ratio"
    VIDEO_SATURATION = "video_saturation"
    VIDEO_CONTRAST = "video_contrast"
    VIDEO_BRIGHTNESS = "video_brightness"

    AUDIO_MIC_ON_PLAYING = "audio_mic_on_playing"
    AUDIO_ENABLE_VOLUME_CONTROL = "audio_enable_volume_control"
    AUDIO_VOLUME = "audio_volume"

    STATS_ITEMS = "stats_items"
    STATS_SHOW_WHEN_PLAYING = "stats_show_when_playing"
    STATS_QUICK_GLANCE = "stats_quick_glance"
    STATS_POSITION = "stats_position"
    STATS_TEXT_SIZE = "stats_text_size"
    STATS_TRANSPARENT = "stats_transparent"
    STATS_OPACITY = "stats_opacity"
    STATS_CONDITIONAL_FORMATTING = "stats_conditional_formatting"

    REMOTE_PLAY_ENABLED = "remote_play_enabled"
    REMOTE_PLAY_RESOLUTION = "remote_play_resolution"

    GAME_FORTNITE_FORCE_CONSOLE = "game_fortnite_force_console"
    GAME_MSFS2020_FORCE_NATIVE_MKB = "game_msfs2020_force_native_mkb"


class CodecProfile:
    DEFAULT = "default"
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


class TouchController:
    DEFAULT = "default"
    ALL = "all"
    OFF = "off"


class StreamResolution:
    DIM_720P = "720p"
    DIM_1080P = "1080p"


class StreamStat:
    CLOCK = "time"
    PLAYTIME = "play"
    BATTERY = "batt"
    PING = "ping"
    JITTER = "jit"
    FPS = "fps"
    BITRATE = "btr"
    DECODE_TIME = "dt"
    PACKETS_LOST = "pl"
    FRAMES_LOST = "fl"
    DOWNLOAD = "dl"
    UPLOAD = "ul"


class UiSection:
    NEWS = "news"
    FRIENDS = "friends"
    NATIVE_MKB = "native-mkb"
    TOUCH = "touch"
    MOST_POPULAR = "most-popular"
    ALL_GAMES = "all-games"
    STREAM_YOUR_OWN_GAME = "byog"


class UserAgentProfile:
    DEFAULT = "default"
    WINDOWS_EDGE = "windows-edge"
    MACOS_SAFARI = "macos-safari"
    VR_OCULUS = "vr-oculus"
    SMART_TV_GENERIC = "smarttv-generic"
    SMART_TV_TIZEN = "smarttv-tizen"
    CUSTOM = "custom"


# Device classes that start in the Android-TV user-agent profile.
TV_DEVICE_CLASSES = frozenset({"android-tv", "webos"})
