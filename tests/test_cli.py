"""Tests for the developer CLI."""

import io
import json

import pytest
from rich.console import Console

from stream_prefs.cli import build_parser, run


@pytest.fixture
def store_dir(tmp_path):
    return tmp_path / "store"


@pytest.fixture
def cli(store_dir):
    """Run the CLI against a temporary store; returns (exit code, output)."""

    def _run(*argv):
        output = io.StringIO()
        console = Console(file=output, width=400, color_system=None)
        code = run(["--store-dir", str(store_dir), *argv], console=console)
        return code, output.getvalue()

    return _run


@pytest.fixture
def capabilities_file(tmp_path):
    path = tmp_path / "caps.json"
    path.write_text(json.dumps({
        "touch": True,
        "full_variant": True,
        "device_class": "webos",
        "codecs": [
            {"mimeType": "video/H264", "sdpFmtpLine": "profile-level-id=42001f"},
            {"mimeType": "video/H264", "sdpFmtpLine": "profile-level-id=4d001f"},
        ],
    }))
    return path


def test_requires_a_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_get_default(cli):
    code, out = cli("get", "audio_volume")
    assert code == 0
    assert out.strip() == "100"


def test_set_persists(cli, store_dir):
    code, out = cli("set", "audio_volume", "200")
    assert code == 0
    assert out.strip() == "audio_volume = 200"
    stored = json.loads((store_dir / "stream_prefs.global.json").read_text())
    assert stored == {"audio_volume": 200}
    assert cli("get", "audio_volume") == (0, "200\n")


def test_set_plain_string_value(cli):
    code, out = cli("set", "stats_position", "top-left")
    assert code == 0
    assert out.strip() == 'stats_position = "top-left"'


def test_set_list_value(cli):
    code, _ = cli("set", "stats_items", '["ping", "fps"]')
    assert code == 0
    assert cli("get", "stats_items")[1].strip() == '["ping", "fps"]'


def test_invalid_value(cli, store_dir):
    code, out = cli("set", "audio_volume", "205")
    assert code == 1
    assert "invalid value 205 for 'audio_volume'" in out
    assert not (store_dir / "stream_prefs.global.json").exists()


def test_unknown_key(cli):
    code, out = cli("get", "nope")
    assert code == 2
    assert "unknown preference key 'nope'" in out


def test_unknown_namespace(cli):
    code, out = cli("--namespace", "other", "get", "audio_volume")
    assert code == 2
    assert "unknown namespace 'other'" in out


def test_reset(cli):
    cli("set", "audio_volume", "200")
    code, out = cli("reset", "audio_volume")
    assert code == 0
    assert out.strip() == "audio_volume = 100"


def test_capabilities_file_drives_resolution(cli, capabilities_file):
    code, out = cli("--capabilities", str(capabilities_file), "get", "user_agent_profile")
    assert code == 0
    assert out.strip() == '"vr-oculus"'
    code, out = cli("--capabilities", str(capabilities_file), "get", "stream_codec_profile")
    assert out.strip() == '"low"'


def test_show(cli, capabilities_file):
    code, out = cli("--capabilities", str(capabilities_file), "show")
    assert code == 0
    assert "namespace: global" in out
    assert "codec tiers: low, high" in out
    assert "device: webos" in out
    assert "stream_codec_profile" in out


def test_show_supported_only_hides_gated_keys(cli):
    # no capabilities: the lite variant, so full-only keys are unsupported
    _, full = cli("show")
    _, supported = cli("show", "--supported-only")
    assert "bitrate_video_max" in full
    assert "bitrate_video_max" not in supported
    assert "audio_volume" in supported


def test_missing_capabilities_file(cli, tmp_path):
    code, out = cli("--capabilities", str(tmp_path / "absent.json"), "get", "audio_volume")
    assert code == 2
    assert "cannot load capabilities" in out


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_malformed_capabilities_file(cli, tmp_path, content):
    path = tmp_path / "caps.json"
    path.write_text(content)
    code, out = cli("--capabilities", str(path), "get", "audio_volume")
    assert code == 2
    assert "cannot load capabilities" in out


def test_set_on_unsupported_key_is_rejected(cli):
    # no capabilities: touch keys resolve unsupported
    code, out = cli("set", "stream_touch_controller", "all")
    assert code == 1
    assert "unsupported in this environment" in out
