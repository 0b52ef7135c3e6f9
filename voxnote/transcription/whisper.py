"""WhisperTranscriptionClient — OpenAI Whisper speech-to-text backend."""
import logging

import openai
from openai import AsyncOpenAI

from voxnote.constants import (
    LOG_SENDING,
    MSG_AUTH_INVALID,
    MSG_AUTH_MISSING,
    MSG_EMPTY_TRANSCRIPT,
    MSG_NETWORK,
    MSG_TRANSCRIPTION_FAILED,
)
from voxnote.errors import AuthError, NetworkError, ServiceError
from voxnote.transcription.client import TranscriptionClient
from voxnote.transcription.payload import TranscriptionRequest

logger = logging.getLogger(__name__)


def _remote_message(exc: openai.APIStatusError) -> str | None:
    """Service-provided error detail, if the response carried one."""
    match exc.body:
        case {"error": {"message": str() as message}} if message:
            return message
        case {"message": str() as message} if message:
            return message
        case _:
            return None


class WhisperTranscriptionClient(TranscriptionClient):

    def __init__(self, api_key: str | None, timeout: int = 60) -> None:
        self._api_key = api_key
        self._timeout = timeout

    async def send(self, request: TranscriptionRequest) -> str:
        match self._api_key:
            case None | "":
                raise AuthError(MSG_AUTH_MISSING)
            case _:
                pass

        fields = request.fields
        logger.info(LOG_SENDING, request.artifact.name, request.artifact.size)
        try:
            async with AsyncOpenAI(
                api_key=self._api_key, max_retries=0, timeout=self._timeout
            ) as client:
                response = await client.audio.transcriptions.create(
                    file=request.file_part(),
                    model=fields.model,
                    response_format=fields.response_format,
                    language=fields.language,
                    temperature=float(fields.temperature),
                )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise AuthError(_remote_message(exc) or MSG_AUTH_INVALID) from exc
        except openai.APIStatusError as exc:
            raise ServiceError(
                _remote_message(exc) or exc.message or MSG_TRANSCRIPTION_FAILED
            ) from exc
        except openai.APIConnectionError as exc:
            raise NetworkError(MSG_NETWORK) from exc

        match getattr(response, "text", None):
            case str() as text:
                return text.strip()
            case _:
                raise ServiceError(MSG_EMPTY_TRANSCRIPT)
