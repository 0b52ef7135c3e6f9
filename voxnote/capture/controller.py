"""CaptureController — microphone recording lifecycle and the upload entry point.

Recording is a small state machine:

    IDLE --start_recording()--> RECORDING --stop_recording()--> FINALIZING --> IDLE

Chunks are kept in an append-only list in arrival order; the final artifact is
their concatenation. Uploads skip the state machine and go straight to the
pipeline.
"""
import asyncio
import logging
from enum import Enum

from voxnote.audio.artifact import AudioArtifact, now_ms
from voxnote.capture.microphone import Microphone
from voxnote.constants import (
    LOG_RECORDING_STARTED,
    LOG_RECORDING_STOPPED,
    MP3_CONTENT_TYPE,
    MSG_ALREADY_RECORDING,
    MSG_NOT_RECORDING,
    RECORDING_NAME,
)
from voxnote.errors import RecordingStateError
from voxnote.pipeline import PipelineState, TranscriptionPipeline, TranscriptionResult

logger = logging.getLogger(__name__)


class RecordingState(Enum):
    IDLE = "idle"
    RECORDING = "recording"
    FINALIZING = "finalizing"


class CaptureController:

    def __init__(self, microphone: Microphone, pipeline: TranscriptionPipeline) -> None:
        self._microphone = microphone
        self._pipeline = pipeline
        self._state = RecordingState.IDLE
        self._chunks: list[bytes] = []

    @property
    def state(self) -> RecordingState:
        return self._state

    @property
    def status(self) -> PipelineState:
        """What a caller should display: RECORDING while a session is live."""
        match self._state:
            case RecordingState.IDLE:
                return self._pipeline.state
            case _:
                return PipelineState.RECORDING

    @property
    def chunks(self) -> tuple[bytes, ...]:
        return tuple(self._chunks)

    async def start_recording(self) -> None:
        match self._state:
            case RecordingState.IDLE:
                pass
            case _:
                raise RecordingStateError(MSG_ALREADY_RECORDING)

        self._chunks = []
        self._state = RecordingState.RECORDING
        try:
            await self._microphone.open(self.on_chunk)
        except BaseException:
            self._state = RecordingState.IDLE
            raise
        logger.info(LOG_RECORDING_STARTED)

    def on_chunk(self, data: bytes) -> None:
        # Late chunks flushed while the stream closes still belong to the take.
        match (self._state, len(data)):
            case (RecordingState.IDLE, _) | (_, 0):
                return
            case _:
                self._chunks.append(data)

    async def stop_recording(self) -> asyncio.Task[TranscriptionResult]:
        """Finalize the take and dispatch it; await the returned task for the result."""
        match self._state:
            case RecordingState.RECORDING:
                pass
            case _:
                raise RecordingStateError(MSG_NOT_RECORDING)

        self._state = RecordingState.FINALIZING
        try:
            await self._microphone.close()
            # Declared container only; the captured codec is not inspected.
            artifact = AudioArtifact.from_chunks(
                self._chunks, RECORDING_NAME % now_ms(), MP3_CONTENT_TYPE
            )
            logger.info(LOG_RECORDING_STOPPED, len(self._chunks), artifact.size)
            task = asyncio.create_task(self._pipeline.transcribe(artifact))
        finally:
            self._chunks = []
            self._state = RecordingState.IDLE
        return task

    async def upload(self, artifact: AudioArtifact | None) -> TranscriptionResult:
        return await self._pipeline.transcribe(artifact)
