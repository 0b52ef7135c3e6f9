"""FfmpegTranscoder — converts audio to MP3 with a local ffmpeg executable."""
import asyncio
import logging
import re
import tempfile
from pathlib import Path
from uuid import uuid4

from voxnote.audio.artifact import AudioArtifact
from voxnote.constants import (
    FFMPEG_CODEC_FLAG,
    FFMPEG_INPUT_FLAG,
    FFMPEG_MP3_CODEC,
    FFMPEG_OVERWRITE_FLAG,
    FFMPEG_PROBE_TIMEOUT,
    FFMPEG_VERSION_FLAG,
    LOG_CLEANUP_FAILED,
    LOG_CONVERTED,
    LOG_CONVERTING,
    LOG_FFMPEG_CMD,
    LOG_FFMPEG_FAILED,
    MSG_CONVERSION_FAILED,
    MSG_CONVERSION_NO_OUTPUT,
    MSG_CONVERSION_TIMEOUT,
    STAGED_EXTENSION_PATTERN,
    STAGED_FALLBACK_EXTENSION,
    STAGED_INPUT_NAME,
    STAGED_OUTPUT_NAME,
)
from voxnote.errors import ConversionFailed, InputError, IOFailure, ToolUnavailable
from voxnote.transcoding.client import Transcoder, converted_artifact

logger = logging.getLogger(__name__)


def build_ffmpeg_mp3_cmd(ffmpeg: str, input_path: Path, output_path: Path) -> list[str]:
    return [
        ffmpeg,
        FFMPEG_OVERWRITE_FLAG,
        FFMPEG_INPUT_FLAG,
        str(input_path),
        FFMPEG_CODEC_FLAG,
        FFMPEG_MP3_CODEC,
        str(output_path),
    ]


def staged_paths(tmp_dir: Path, run_id: str, extension: str) -> tuple[Path, Path]:
    """Input/output locations for one conversion; ``run_id`` keeps runs apart."""
    # Upload names are untrusted; only a plain alphanumeric extension reaches the path.
    if not re.fullmatch(STAGED_EXTENSION_PATTERN, extension):
        extension = STAGED_FALLBACK_EXTENSION
    input_path = tmp_dir / (STAGED_INPUT_NAME % (run_id, extension))
    output_path = tmp_dir / (STAGED_OUTPUT_NAME % run_id)
    return input_path, output_path


def _remove(*paths: Path) -> None:
    for path in paths:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning(LOG_CLEANUP_FAILED, path, exc)


async def _kill(process: asyncio.subprocess.Process) -> None:
    try:
        process.kill()
    except ProcessLookupError:
        return
    await process.wait()


class FfmpegTranscoder(Transcoder):

    def __init__(
        self,
        ffmpeg_path: str = "ffmpeg",
        timeout: float = 120,
        tmp_dir: Path | None = None,
    ) -> None:
        self._ffmpeg = ffmpeg_path
        self._timeout = timeout
        self._tmp_dir = tmp_dir

    async def convert(self, artifact: AudioArtifact) -> AudioArtifact:
        if artifact.is_empty:
            raise InputError()

        tmp_dir = self._tmp_dir or Path(tempfile.gettempdir())
        input_path, output_path = staged_paths(tmp_dir, uuid4().hex, artifact.extension)
        logger.info(LOG_CONVERTING, artifact.name)
        try:
            await self._probe()
            await self._stage(input_path, artifact.content)
            await self._run(input_path, output_path)
            mp3 = await self._read_output(output_path)
        finally:
            _remove(input_path, output_path)

        converted = converted_artifact(mp3)
        logger.info(LOG_CONVERTED, artifact.name, converted.name, converted.size)
        return converted

    async def _probe(self) -> None:
        try:
            process = await asyncio.create_subprocess_exec(
                self._ffmpeg,
                FFMPEG_VERSION_FLAG,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as exc:
            raise ToolUnavailable() from exc

        try:
            await asyncio.wait_for(process.wait(), timeout=FFMPEG_PROBE_TIMEOUT)
        except asyncio.TimeoutError as exc:
            await _kill(process)
            raise ToolUnavailable() from exc

        match process.returncode:
            case 0:
                pass
            case _:
                raise ToolUnavailable()

    async def _stage(self, path: Path, content: bytes) -> None:
        try:
            await asyncio.to_thread(path.write_bytes, content)
        except OSError as exc:
            raise IOFailure() from exc

    async def _run(self, input_path: Path, output_path: Path) -> None:
        args = build_ffmpeg_mp3_cmd(self._ffmpeg, input_path, output_path)
        logger.debug(LOG_FFMPEG_CMD, " ".join(args))
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ToolUnavailable() from exc

        try:
            _, stderr = await asyncio.wait_for(process.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError as exc:
            await _kill(process)
            raise ConversionFailed(MSG_CONVERSION_TIMEOUT % self._timeout) from exc

        match process.returncode:
            case 0:
                pass
            case code:
                lines = stderr.decode(errors="replace").strip().splitlines() if stderr else []
                detail = lines[-1] if lines else ""
                logger.error(LOG_FFMPEG_FAILED, code, detail or "no output")
                raise ConversionFailed(detail or MSG_CONVERSION_FAILED)

    async def _read_output(self, path: Path) -> bytes:
        try:
            mp3 = await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError as exc:
            raise ConversionFailed(MSG_CONVERSION_NO_OUTPUT) from exc
        except OSError as exc:
            raise IOFailure() from exc
        match mp3:
            case b"":
                raise ConversionFailed(MSG_CONVERSION_NO_OUTPUT)
            case _:
                return mp3
