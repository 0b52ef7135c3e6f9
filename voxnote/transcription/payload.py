"""PayloadBuilder — assembles the outbound transcription request."""
from dataclasses import dataclass, field

from voxnote.audio.artifact import AudioArtifact
from voxnote.constants import (
    RESPONSE_FORMAT,
    TRANSCRIPTION_LANGUAGE,
    TRANSCRIPTION_TEMPERATURE,
    WHISPER_MODEL,
)


@dataclass(frozen=True)
class TranscriptionFields:
    model: str = WHISPER_MODEL
    response_format: str = RESPONSE_FORMAT
    language: str = TRANSCRIPTION_LANGUAGE
    temperature: str = TRANSCRIPTION_TEMPERATURE


DEFAULT_FIELDS = TranscriptionFields()


@dataclass(frozen=True)
class TranscriptionRequest:
    artifact: AudioArtifact
    fields: TranscriptionFields = field(default=DEFAULT_FIELDS)

    def file_part(self) -> tuple[str, bytes, str]:
        """Multipart tuple for the ``file`` field."""
        return (self.artifact.name, self.artifact.content, self.artifact.content_type)

    def form_fields(self) -> dict[str, str]:
        return {
            "model": self.fields.model,
            "response_format": self.fields.response_format,
            "language": self.fields.language,
            "temperature": self.fields.temperature,
        }


def build_payload(
    artifact: AudioArtifact, fields: TranscriptionFields = DEFAULT_FIELDS
) -> TranscriptionRequest:
    return TranscriptionRequest(artifact=artifact, fields=fields)
