"""Tests for the logging bootstrap."""

import logging

import pytest

import stream_prefs.io.logging_setup as logging_setup


@pytest.fixture
def fresh_logging(monkeypatch):
    """Unconfigured runtime; restores the stream_prefs logger afterwards."""
    logger = logging.getLogger("stream_prefs")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    monkeypatch.setattr(logging_setup, "_RUNTIME", None)
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
    logging.captureWarnings(False)


def test_configure_from_environment(fresh_logging, monkeypatch, tmp_path):
    log_file = tmp_path / "logs" / "prefs.log"
    monkeypatch.setenv("STREAM_PREFS_LOG_LEVEL", "debug")
    monkeypatch.setenv("STREAM_PREFS_LOG_FILE", str(log_file))

    runtime = logging_setup.configure("test")

    assert runtime.level == logging.DEBUG
    assert runtime.level_name == "DEBUG"
    assert runtime.file_path == str(log_file)
    assert log_file.parent.is_dir()
    assert fresh_logging.propagate is False
    assert len(fresh_logging.handlers) == 2
    assert logging_setup.get_runtime() is runtime


def test_configure_is_idempotent(fresh_logging, monkeypatch, tmp_path):
    monkeypatch.setenv("STREAM_PREFS_LOG_FILE", str(tmp_path / "a.log"))
    first = logging_setup.configure("test")
    monkeypatch.setenv("STREAM_PREFS_LOG_FILE", str(tmp_path / "b.log"))
    assert logging_setup.configure("test") is first
    assert len(fresh_logging.handlers) == 2


def test_default_path_uses_log_dir(fresh_logging, monkeypatch, tmp_path):
    monkeypatch.delenv("STREAM_PREFS_LOG_FILE", raising=False)
    monkeypatch.setenv("STREAM_PREFS_LOG_DIR", str(tmp_path))
    runtime = logging_setup.configure("my session")
    assert runtime.file_path == str(tmp_path / "my-session.log")
    assert runtime.session_name == "my session"


def test_log_dir_sits_beside_namespace_files(monkeypatch, tmp_path):
    monkeypatch.delenv("STREAM_PREFS_LOG_DIR", raising=False)
    monkeypatch.setenv("STREAM_PREFS_CONFIG_DIR", str(tmp_path / "prefs"))
    assert logging_setup.log_dir() == tmp_path / "prefs" / "logs"


def test_explicit_level_beats_environment(fresh_logging, monkeypatch, tmp_path):
    monkeypatch.setenv("STREAM_PREFS_LOG_LEVEL", "error")
    monkeypatch.setenv("STREAM_PREFS_LOG_FILE", str(tmp_path / "x.log"))
    runtime = logging_setup.configure("test", level="info")
    assert runtime.level == logging.INFO
    assert all(handler.level == logging.INFO for handler in fresh_logging.handlers)


@pytest.mark.parametrize(
    "raw,expected",
    [("info", logging.INFO), ("bogus", logging.WARNING), ("", logging.WARNING), (None, logging.WARNING)],
)
def test_parse_level(raw, expected):
    assert logging_setup._parse_level(raw)[1] == expected


def test_unconfigured_runtime_is_none(fresh_logging):
    assert logging_setup.get_runtime() is None
