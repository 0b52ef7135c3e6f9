"""Transcoder — abstract base for audio-to-MP3 converters."""
from abc import ABC, abstractmethod

from voxnote.audio.artifact import AudioArtifact, now_ms
from voxnote.constants import CONVERTED_NAME, MP3_CONTENT_TYPE


class Transcoder(ABC):
    @abstractmethod
    async def convert(self, artifact: AudioArtifact) -> AudioArtifact:
        """Return a new MP3 artifact. Raises a ConversionError subclass on failure."""
        ...


def converted_artifact(mp3: bytes) -> AudioArtifact:
    return AudioArtifact(
        content=mp3,
        name=CONVERTED_NAME % now_ms(),
        content_type=MP3_CONTENT_TYPE,
    )
