"""TranscriptionClient — abstract base for speech-to-text backends."""
from abc import ABC, abstractmethod

from voxnote.transcription.payload import TranscriptionRequest


class TranscriptionClient(ABC):
    @abstractmethod
    async def send(self, request: TranscriptionRequest) -> str:
        """Send the request once and return the text. Raises a TranscriptionError subclass."""
        ...
