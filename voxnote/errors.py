"""Failure taxonomy shared by every pipeline stage."""
from voxnote.constants import (
    MSG_ALREADY_RECORDING,
    MSG_AUTH_INVALID,
    MSG_CONVERSION_FAILED,
    MSG_IO_FAILURE,
    MSG_MIC_DENIED,
    MSG_MIC_UNAVAILABLE,
    MSG_NETWORK,
    MSG_NO_AUDIO,
    MSG_PIPELINE_BUSY,
    MSG_TOOL_UNAVAILABLE,
    MSG_TRANSCRIPTION_FAILED,
)


class VoxnoteError(Exception):
    """Base class. ``message`` is always safe to show to the user."""

    default_message = MSG_TRANSCRIPTION_FAILED

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InputError(VoxnoteError):
    default_message = MSG_NO_AUDIO


class PipelineBusyError(InputError):
    default_message = MSG_PIPELINE_BUSY


class RecordingStateError(VoxnoteError):
    default_message = MSG_ALREADY_RECORDING


# ── conversion ────────────────────────────────────────────────────────────────


class ConversionError(VoxnoteError):
    default_message = MSG_CONVERSION_FAILED


class ToolUnavailable(ConversionError):
    """The transcoding executable (or service) cannot be reached."""

    default_message = MSG_TOOL_UNAVAILABLE


class ConversionFailed(ConversionError):
    """The transcoder ran but produced no usable output."""


class IOFailure(ConversionError):
    """Staging the input or reading back the output failed."""

    default_message = MSG_IO_FAILURE


# ── transcription ─────────────────────────────────────────────────────────────


class TranscriptionError(VoxnoteError):
    default_message = MSG_TRANSCRIPTION_FAILED


class AuthError(TranscriptionError):
    default_message = MSG_AUTH_INVALID


class ServiceError(TranscriptionError):
    """The service answered with an error payload; its message is kept."""


class NetworkError(TranscriptionError):
    default_message = MSG_NETWORK


# ── capture ───────────────────────────────────────────────────────────────────


class CaptureError(VoxnoteError):
    default_message = MSG_MIC_DENIED


class PermissionDenied(CaptureError):
    pass


class DeviceUnavailable(CaptureError):
    default_message = MSG_MIC_UNAVAILABLE
