"""
Tests for channel-aware logging configuration.
"""

import pytest

from scit.core.logging import (
    LogChannel,
    LogLevel,
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_component_logger,
    get_current_config,
    get_logger,
)


class _Recorder:
    """Stands in for the structlog logger and records calls."""

    def __init__(self):
        self.calls = []

    def __getattr__(self, method):
        def record(event, **kwargs):
            self.calls.append((method, event, kwargs))
        return record


@pytest.fixture(autouse=True)
def _restore_logging(monkeypatch):
    for var in ("SCIT_LOG_LEVEL", "SCIT_LOG_FORMAT", "SCIT_LOG_CHANNELS"):
        monkeypatch.delenv(var, raising=False)
    saved = get_current_config()
    yield
    clear_request_context()
    configure_logging(
        level=saved["level"].lower(),
        format=saved["format"],
        channels=saved["channels"],
        force=True,
    )


class TestConfigure:
    """configure_logging and get_current_config."""

    def test_explicit_settings(self):
        """Explicit level, format and channels are reported back."""
        configure_logging(level="debug", format="json", channels=["extract", "validate"], force=True)
        assert get_current_config() == {
            "level": "DEBUG",
            "format": "json",
            "channels": ["EXTRACT", "VALIDATE"],
        }

    def test_environment_settings(self, monkeypatch):
        """Unset arguments fall back to the SCIT_LOG_* variables."""
        monkeypatch.setenv("SCIT_LOG_LEVEL", "verbose")
        monkeypatch.setenv("SCIT_LOG_CHANNELS", "pipeline, config")
        configure_logging(force=True)
        config = get_current_config()
        assert config["level"] == "VERBOSE"
        assert config["format"] == "console"
        assert config["channels"] == ["CONFIG", "PIPELINE"]

    def test_unknown_channels_mean_all(self):
        """Channel names that parse to nothing enable every channel."""
        configure_logging(level="info", channels=["nope"], force=True)
        assert get_current_config()["channels"] == sorted(ch.value for ch in LogChannel)

    def test_configured_once_without_force(self):
        """A second call without force keeps the first configuration."""
        configure_logging(level="debug", force=True)
        configure_logging(level="silent")
        assert get_current_config()["level"] == "DEBUG"

    def test_level_parsing(self):
        """Stdlib level names map onto INFO; unknown names too."""
        assert LogLevel.from_string("Verbose") is LogLevel.VERBOSE
        assert LogLevel.from_string("warning") is LogLevel.INFO
        assert LogLevel.from_string("loud") is LogLevel.INFO


class TestChannelLogger:
    """Filtering and event payloads."""

    def test_component_channels(self):
        """Component prefixes select the channel."""
        assert get_component_logger("extract").channel is LogChannel.EXTRACT
        assert get_component_logger("validate.structs").channel is LogChannel.VALIDATE
        assert get_component_logger("engine").channel is LogChannel.PIPELINE
        assert get_component_logger("dialect").channel is LogChannel.CONFIG
        assert get_component_logger("other").channel is LogChannel.SYSTEM

    def test_disabled_channel_is_silent(self):
        """Events on channels outside the filter are dropped."""
        configure_logging(level="debug", channels=["pipeline"], force=True)
        log = get_component_logger("extract")
        log._logger = _Recorder()
        log.info("ignored")
        log.debug("ignored")
        assert log._logger.calls == []

    def test_level_filtering(self):
        """VERBOSE events are dropped at INFO; warnings are not."""
        configure_logging(level="info", force=True)
        log = get_logger(LogChannel.VALIDATE)
        log._logger = _Recorder()
        log.verbose("detail")
        log.warning("careful")
        assert [(m, e) for m, e, _ in log._logger.calls] == [("warning", "careful")]

    def test_silent_drops_errors(self):
        """SILENT suppresses even errors."""
        configure_logging(level="silent", force=True)
        log = get_logger(LogChannel.SYSTEM)
        log._logger = _Recorder()
        log.error("boom")
        assert log._logger.calls == []

    def test_request_context_is_merged(self):
        """Bound call context and the channel appear in every event."""
        configure_logging(level="info", force=True)
        log = get_component_logger("engine")
        log._logger = _Recorder()
        bind_request_context(call_id="abc")
        log.info("check_complete", violations=0)
        clear_request_context()
        log.info("after")

        (_, _, first), (_, _, second) = log._logger.calls
        assert first["call_id"] == "abc"
        assert first["channel"] == "PIPELINE"
        assert first["component"] == "engine"
        assert "call_id" not in second
