"""Config tests"""
from pathlib import Path

import pytest

from voxnote.config import Config

OPTIONAL_VARS = (
    "LOG_LEVEL",
    "FFMPEG_PATH",
    "CONVERT_TIMEOUT",
    "CONVERT_ENDPOINT_URL",
    "TRANSCRIBE_TIMEOUT",
    "VOXNOTE_TMP_DIR",
    "MIC_SAMPLE_RATE",
    "MIC_CHANNELS",
    "MIC_DEVICE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """No .env file and no stray variables leak into a test."""
    monkeypatch.setattr("voxnote.config.load_dotenv", lambda **_: None)
    for name in OPTIONAL_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test123")


def test_config_from_env_success():
    config = Config.from_env()

    assert config.openai_api_key == "sk-test123"


def test_config_missing_api_key_fails(monkeypatch):
    """Missing OPENAI_API_KEY must raise."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        Config.from_env()


def test_config_blank_api_key_fails(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "")

    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        Config.from_env()


def test_config_defaults():
    """Optional fields have sensible defaults."""
    config = Config.from_env()

    assert config.log_level == "INFO"
    assert config.ffmpeg_path == "ffmpeg"
    assert config.convert_timeout == 120
    assert config.convert_endpoint_url is None
    assert config.transcribe_timeout == 60
    assert config.tmp_dir is None
    assert config.sample_rate == 16000
    assert config.channels == 1
    assert config.input_device is None


def test_config_fields_from_env(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("FFMPEG_PATH", "/opt/ffmpeg/bin/ffmpeg")
    monkeypatch.setenv("CONVERT_TIMEOUT", "30")
    monkeypatch.setenv("CONVERT_ENDPOINT_URL", "http://localhost:3000/api/convert-audio")
    monkeypatch.setenv("TRANSCRIBE_TIMEOUT", "15")
    monkeypatch.setenv("VOXNOTE_TMP_DIR", str(tmp_path))
    monkeypatch.setenv("MIC_SAMPLE_RATE", "48000")
    monkeypatch.setenv("MIC_CHANNELS", "2")
    monkeypatch.setenv("MIC_DEVICE", "USB Audio")

    config = Config.from_env()

    assert config.log_level == "DEBUG"
    assert config.ffmpeg_path == "/opt/ffmpeg/bin/ffmpeg"
    assert config.convert_timeout == 30
    assert config.convert_endpoint_url == "http://localhost:3000/api/convert-audio"
    assert config.transcribe_timeout == 15
    assert config.tmp_dir == tmp_path
    assert config.sample_rate == 48000
    assert config.channels == 2
    assert config.input_device == "USB Audio"


def test_config_blank_optionals_fall_back(monkeypatch):
    """Blank values behave like unset ones."""
    monkeypatch.setenv("FFMPEG_PATH", "")
    monkeypatch.setenv("CONVERT_ENDPOINT_URL", "")
    monkeypatch.setenv("MIC_DEVICE", "")

    config = Config.from_env()

    assert config.ffmpeg_path == "ffmpeg"
    assert config.convert_endpoint_url is None
    assert config.input_device is None


@pytest.mark.parametrize("value", ["abc", "0", "-5", "1.5"])
def test_config_rejects_bad_timeout(monkeypatch, value):
    monkeypatch.setenv("CONVERT_TIMEOUT", value)

    with pytest.raises(ValueError, match="CONVERT_TIMEOUT"):
        Config.from_env()


def test_config_rejects_missing_tmp_dir(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("VOXNOTE_TMP_DIR", str(tmp_path / "nope"))

    with pytest.raises(ValueError, match="VOXNOTE_TMP_DIR"):
        Config.from_env()


def test_config_immutable():
    """Frozen dataclass: attribute assignment must fail."""
    config = Config.from_env()

    with pytest.raises(Exception):
        config.openai_api_key = "other"
