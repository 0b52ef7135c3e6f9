"""HttpTranscoder — delegates MP3 conversion to a remote conversion endpoint."""
import logging

import httpx

from voxnote.audio.artifact import AudioArtifact
from voxnote.constants import (
    CONVERT_AUDIO_FIELD,
    CONVERT_ERROR_FIELD,
    HTTP_BAD_REQUEST,
    HTTP_SERVICE_UNAVAILABLE,
    LOG_CONVERT_REQUEST,
    LOG_CONVERTED,
    LOG_CONVERTING,
    MSG_CONVERSION_FAILED,
    MSG_CONVERSION_NO_OUTPUT,
    MSG_CONVERSION_TIMEOUT,
    MSG_CONVERT_UNREACHABLE,
)
from voxnote.errors import ConversionFailed, InputError, ToolUnavailable
from voxnote.transcoding.client import Transcoder, converted_artifact

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return MSG_CONVERSION_FAILED
    message = payload.get(CONVERT_ERROR_FIELD) if isinstance(payload, dict) else None
    match message:
        case str() if message:
            return message
        case _:
            return MSG_CONVERSION_FAILED


class HttpTranscoder(Transcoder):

    def __init__(
        self,
        url: str,
        timeout: int = 120,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def convert(self, artifact: AudioArtifact) -> AudioArtifact:
        if artifact.is_empty:
            raise InputError()

        logger.info(LOG_CONVERTING, artifact.name)
        files = {CONVERT_AUDIO_FIELD: (artifact.name, artifact.content, artifact.content_type)}
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._url, files=files)
        except httpx.TimeoutException as exc:
            logger.error(LOG_CONVERT_REQUEST, exc)
            match exc:
                case httpx.ConnectTimeout():
                    raise ToolUnavailable(MSG_CONVERT_UNREACHABLE) from exc
                case _:
                    raise ConversionFailed(MSG_CONVERSION_TIMEOUT % self._timeout) from exc
        except httpx.TransportError as exc:
            logger.error(LOG_CONVERT_REQUEST, exc)
            raise ToolUnavailable(MSG_CONVERT_UNREACHABLE) from exc

        match (response.is_success, response.status_code):
            case (True, _) if response.content:
                converted = converted_artifact(response.content)
                logger.info(LOG_CONVERTED, artifact.name, converted.name, converted.size)
                return converted
            case (True, _):
                raise ConversionFailed(MSG_CONVERSION_NO_OUTPUT)
            case (False, status):
                message = _error_message(response)
                logger.error(LOG_CONVERT_REQUEST, message)
                match status:
                    case code if code == HTTP_SERVICE_UNAVAILABLE:
                        raise ToolUnavailable(message)
                    case code if code == HTTP_BAD_REQUEST:
                        raise InputError(message)
                    case _:
                        raise ConversionFailed(message)
