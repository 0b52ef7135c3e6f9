"""TranscriptionPipeline — classify → (convert) → build payload → send."""
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from voxnote.audio.artifact import AudioArtifact
from voxnote.audio.classifier import AudioFormat, classify
from voxnote.constants import (
    LOG_CLASSIFIED,
    LOG_FAILED,
    LOG_STATE,
    LOG_TRANSCRIBED,
    LOG_UNEXPECTED,
)
from voxnote.errors import InputError, PipelineBusyError, VoxnoteError
from voxnote.transcoding.client import Transcoder
from voxnote.transcription.client import TranscriptionClient
from voxnote.transcription.payload import DEFAULT_FIELDS, TranscriptionFields, build_payload

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    IDLE = "idle"
    RECORDING = "recording"
    TRANSCRIBING = "transcribing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class TranscriptionResult:
    text: str = ""
    error: VoxnoteError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        """The transcript on success, otherwise the most specific error message."""
        return self.text if self.error is None else self.error.message


class TranscriptionPipeline:
    """One pipeline serves one caller at a time; build another for parallel work."""

    def __init__(
        self,
        transcoder: Transcoder,
        client: TranscriptionClient,
        fields: TranscriptionFields = DEFAULT_FIELDS,
        on_state_change: Callable[[PipelineState], None] | None = None,
        on_complete: Callable[[str], None] | None = None,
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        self._transcoder = transcoder
        self._client = client
        self._fields = fields
        self._on_state_change = on_state_change
        self._on_complete = on_complete
        self._on_error = on_error
        self._state = PipelineState.IDLE
        self.last_text = ""
        self.last_error: VoxnoteError | None = None

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state is PipelineState.TRANSCRIBING

    async def transcribe(self, artifact: AudioArtifact | None) -> TranscriptionResult:
        match artifact:
            case None:
                return self._reject(InputError())
            case a if a.is_empty:
                return self._reject(InputError())
            case _ if self.is_busy:
                return self._reject(PipelineBusyError())
            case _:
                pass

        start = time.time()
        self._set_state(PipelineState.TRANSCRIBING)
        try:
            text = await self._run(artifact)
        except VoxnoteError as exc:
            return self._fail(exc)
        except Exception:
            logger.exception(LOG_UNEXPECTED)
            self._set_state(PipelineState.FAILED)
            raise

        self.last_text = text
        self.last_error = None
        self._set_state(PipelineState.DONE)
        logger.info(LOG_TRANSCRIBED, artifact.name, time.time() - start)
        if self._on_complete is not None:
            self._on_complete(text)
        return TranscriptionResult(text=text)

    async def _run(self, artifact: AudioArtifact) -> str:
        audio_format = classify(artifact)
        logger.info(LOG_CLASSIFIED, artifact.name, audio_format.value)
        match audio_format:
            case AudioFormat.NEEDS_CONVERSION:
                artifact = await self._transcoder.convert(artifact)
            case AudioFormat.PASSTHROUGH:
                pass
        request = build_payload(artifact, self._fields)
        return await self._client.send(request)

    def _reject(self, exc: VoxnoteError) -> TranscriptionResult:
        logger.warning(LOG_FAILED, exc.message)
        if self._on_error is not None:
            self._on_error(exc.message)
        return TranscriptionResult(error=exc)

    def _fail(self, exc: VoxnoteError) -> TranscriptionResult:
        logger.error(LOG_FAILED, exc.message)
        self.last_error = exc
        self._set_state(PipelineState.FAILED)
        if self._on_error is not None:
            self._on_error(exc.message)
        return TranscriptionResult(error=exc)

    def _set_state(self, state: PipelineState) -> None:
        self._state = state
        logger.info(LOG_STATE, state.value)
        if self._on_state_change is not None:
            self._on_state_change(state)
