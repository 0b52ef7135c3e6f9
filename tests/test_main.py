"""Entry point wiring tests"""
from pathlib import Path

import pytest

from voxnote.config import Config
from voxnote.main import build_microphone, build_transcoder, parse_args
from voxnote.transcoding.ffmpeg import FfmpegTranscoder
from voxnote.transcoding.remote import HttpTranscoder


def make_config(**overrides) -> Config:
    fields = dict(
        openai_api_key="sk-test",
        log_level="INFO",
        ffmpeg_path="ffmpeg",
        convert_timeout=120,
        convert_endpoint_url=None,
        transcribe_timeout=60,
        tmp_dir=None,
        sample_rate=16000,
        channels=1,
        input_device=None,
    )
    fields.update(overrides)
    return Config(**fields)


def test_parse_args_accepts_a_file():
    args = parse_args(["note.wav"])
    assert args.path == Path("note.wav")
    assert args.record is False


def test_parse_args_accepts_record():
    args = parse_args(["--record"])
    assert args.path is None
    assert args.record is True


@pytest.mark.parametrize("argv", [[], ["note.wav", "--record"]])
def test_parse_args_needs_exactly_one_source(argv):
    with pytest.raises(SystemExit):
        parse_args(argv)


def test_local_ffmpeg_is_the_default_transcoder():
    assert isinstance(build_transcoder(make_config()), FfmpegTranscoder)


def test_endpoint_url_selects_remote_transcoder():
    config = make_config(convert_endpoint_url="http://localhost:3000/api/convert-audio")
    assert isinstance(build_transcoder(config), HttpTranscoder)


def test_numeric_device_becomes_index():
    mic = build_microphone(make_config(input_device="2"))
    assert mic._device == 2


def test_named_device_is_kept():
    mic = build_microphone(make_config(input_device="USB Audio"))
    assert mic._device == "USB Audio"
