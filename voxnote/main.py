"""Entry point — wires Config → Transcoder/Whisper → TranscriptionPipeline → CaptureController."""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.logging import RichHandler

from voxnote.audio.artifact import AudioArtifact
from voxnote.capture.controller import CaptureController
from voxnote.capture.microphone import Microphone
from voxnote.capture.sounddevice_mic import SoundDeviceMicrophone
from voxnote.config import Config
from voxnote.constants import MSG_PRESS_ENTER
from voxnote.errors import VoxnoteError
from voxnote.pipeline import TranscriptionPipeline, TranscriptionResult
from voxnote.transcoding.client import Transcoder
from voxnote.transcoding.ffmpeg import FfmpegTranscoder
from voxnote.transcoding.remote import HttpTranscoder
from voxnote.transcription.whisper import WhisperTranscriptionClient

console = Console()


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def build_transcoder(config: Config) -> Transcoder:
    match config.convert_endpoint_url:
        case str() as url if url:
            return HttpTranscoder(url, timeout=config.convert_timeout)
        case _:
            return FfmpegTranscoder(
                config.ffmpeg_path,
                timeout=config.convert_timeout,
                tmp_dir=config.tmp_dir,
            )


def build_microphone(config: Config) -> Microphone:
    device = config.input_device
    return SoundDeviceMicrophone(
        sample_rate=config.sample_rate,
        channels=config.channels,
        device=int(device) if device and device.isdigit() else device,
    )


def build_pipeline(config: Config) -> TranscriptionPipeline:
    return TranscriptionPipeline(
        transcoder=build_transcoder(config),
        client=WhisperTranscriptionClient(
            config.openai_api_key, timeout=config.transcribe_timeout
        ),
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="voxnote", description="Transcribe a voice note.")
    parser.add_argument("path", nargs="?", type=Path, help="audio file to transcribe")
    parser.add_argument("--record", action="store_true", help="record from the microphone")
    args = parser.parse_args(argv)
    match (args.path, args.record):
        case (None, False):
            parser.error("give an audio file or --record")
        case (Path(), True):
            parser.error("give either an audio file or --record, not both")
        case _:
            pass
    return args


async def _record(controller: CaptureController) -> TranscriptionResult:
    await controller.start_recording()
    console.print(MSG_PRESS_ENTER)
    await asyncio.to_thread(input)
    task = await controller.stop_recording()
    return await task


async def run(args: argparse.Namespace, controller: CaptureController) -> TranscriptionResult:
    match args.record:
        case True:
            return await _record(controller)
        case False:
            return await controller.upload(AudioArtifact.from_path(args.path))


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    config = Config.from_env()
    _setup_logging(config.log_level)

    microphone = build_microphone(config)
    controller = CaptureController(microphone, build_pipeline(config))
    try:
        result = asyncio.run(run(args, controller))
    except VoxnoteError as exc:
        console.print(f"[red]{exc.message}[/red]")
        return 1
    except OSError as exc:
        console.print(f"[red]{exc}[/red]")
        return 1

    match result.ok:
        case True:
            console.print(result.text)
            return 0
        case False:
            console.print(f"[red]{result.message}[/red]")
            return 1


if __name__ == "__main__":
    sys.exit(main())
