"""Server side of the conversion contract, independent of any HTTP framework.

An adapter only has to pull the ``audio`` upload out of the request, await
``handle_convert_upload`` and copy status, content type and body back out.
"""
import json
import logging
from dataclasses import dataclass

from voxnote.audio.artifact import AudioArtifact
from voxnote.constants import (
    CONVERT_ERROR_FIELD,
    DEFAULT_CONTENT_TYPE,
    HTTP_BAD_REQUEST,
    HTTP_OK,
    HTTP_SERVER_ERROR,
    HTTP_SERVICE_UNAVAILABLE,
    JSON_CONTENT_TYPE,
    LOG_CONVERT_REQUEST,
    MP3_CONTENT_TYPE,
    MSG_INVALID_UPLOAD,
)
from voxnote.errors import ConversionError, InputError, ToolUnavailable
from voxnote.transcoding.client import Transcoder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConvertResponse:
    status: int
    content_type: str
    body: bytes


def _error_response(status: int, message: str) -> ConvertResponse:
    body = json.dumps({CONVERT_ERROR_FIELD: message}).encode()
    return ConvertResponse(status=status, content_type=JSON_CONTENT_TYPE, body=body)


async def handle_convert_upload(
    transcoder: Transcoder,
    content: bytes | None,
    filename: str | None,
    content_type: str | None = None,
) -> ConvertResponse:
    match (content, filename):
        case (None | b"", _) | (_, None | ""):
            return _error_response(HTTP_BAD_REQUEST, MSG_INVALID_UPLOAD)
        case _:
            pass

    artifact = AudioArtifact(
        content=content,
        name=filename,
        content_type=content_type or DEFAULT_CONTENT_TYPE,
    )
    try:
        converted = await transcoder.convert(artifact)
    except InputError as exc:
        return _error_response(HTTP_BAD_REQUEST, exc.message)
    except ToolUnavailable as exc:
        logger.error(LOG_CONVERT_REQUEST, exc.message)
        return _error_response(HTTP_SERVICE_UNAVAILABLE, exc.message)
    except ConversionError as exc:
        logger.error(LOG_CONVERT_REQUEST, exc.message)
        return _error_response(HTTP_SERVER_ERROR, exc.message)

    return ConvertResponse(status=HTTP_OK, content_type=MP3_CONTENT_TYPE, body=converted.content)
