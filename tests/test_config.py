"""Tests for configuration loading."""

import logging
import os
from unittest.mock import patch

import pytest

from deepgram_mcp import config
from deepgram_mcp.exceptions import ConfigurationError


class TestEnvBool:
    @pytest.mark.parametrize("value", ["true", "1", "yes", "on", "TRUE"])
    def test_truthy(self, value):
        with patch.dict(os.environ, {"TEST_FLAG": value}):
            assert config.env_bool("TEST_FLAG") is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "off"])
    def test_falsy(self, value):
        with patch.dict(os.environ, {"TEST_FLAG": value}):
            assert config.env_bool("TEST_FLAG", default=True) is False

    def test_unset_uses_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert config.env_bool("TEST_FLAG", default=True) is True


class TestLoadEnvFile:
    def test_missing_file(self, tmp_path):
        assert config.load_env_file(tmp_path / "nope.env") == {}

    def test_parses_values(self, tmp_path):
        env_file = tmp_path / "deepgram-mcp.env"
        env_file.write_text(
            "# Deepgram settings\n"
            "DGTEST_KEY=abc123\n"
            "export DGTEST_MODEL=aura-2-orion-en\n"
            "\n"
            "DGTEST_QUOTED=\"hello world\"\n"
            "DGTEST_EQUALS=a=b=c\n"
            "not a pair\n"
        )
        with patch.dict(os.environ, {}, clear=True):
            loaded = config.load_env_file(env_file)
            assert os.environ["DGTEST_KEY"] == "abc123"
            assert os.environ["DGTEST_MODEL"] == "aura-2-orion-en"

        assert loaded == {
            "DGTEST_KEY": "abc123",
            "DGTEST_MODEL": "aura-2-orion-en",
            "DGTEST_QUOTED": "hello world",
            "DGTEST_EQUALS": "a=b=c",
        }

    def test_multiline_quoted_value(self, tmp_path):
        env_file = tmp_path / "deepgram-mcp.env"
        env_file.write_text("DGTEST_MULTI='first line\nsecond line'\nDGTEST_AFTER=1\n")

        with patch.dict(os.environ, {}, clear=True):
            loaded = config.load_env_file(env_file)

        assert loaded["DGTEST_MULTI"] == "first line\nsecond line"
        assert loaded["DGTEST_AFTER"] == "1"

    def test_existing_environment_wins(self, tmp_path):
        env_file = tmp_path / "deepgram-mcp.env"
        env_file.write_text("DGTEST_KEY=from-file\n")

        with patch.dict(os.environ, {"DGTEST_KEY": "from-shell"}):
            config.load_env_file(env_file)
            assert os.environ["DGTEST_KEY"] == "from-shell"

            config.load_env_file(env_file, override=True)
            assert os.environ["DGTEST_KEY"] == "from-file"


class TestRequireApiKey:
    def test_returns_key(self, monkeypatch):
        monkeypatch.setattr(config, "DEEPGRAM_API_KEY", "dg-key")
        assert config.require_deepgram_api_key() == "dg-key"

    def test_missing_key(self, monkeypatch):
        monkeypatch.setattr(config, "DEEPGRAM_API_KEY", "")
        with pytest.raises(ConfigurationError) as exc_info:
            config.require_deepgram_api_key()
        assert str(exc_info.value) == "DEEPGRAM_API_KEY environment variable is not set."


@pytest.fixture
def clean_logger():
    """Detach handlers added by setup_logging once the test is done."""
    logger = logging.getLogger("deepgram-mcp")
    saved = logger.handlers[:], logger.level, logger.propagate
    logger.handlers.clear()
    yield logger
    logger.handlers[:], logger.level, logger.propagate = saved


def test_setup_logging_level(clean_logger):
    logger = config.setup_logging("debug")
    assert logger.name == "deepgram-mcp"
    assert logger.level == 10
    assert len(logger.handlers) == 1

    # Calling again does not stack handlers
    config.setup_logging("warning")
    assert len(logger.handlers) == 1
    assert logger.level == 30


def test_defaults():
    assert config.AUDIO_MIME_TYPE == "audio/mpeg"
    assert config.SERVE_TRANSPORT in ("streamable-http", "sse")
