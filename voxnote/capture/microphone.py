"""Microphone — abstract base for exclusive audio input streams."""
from abc import ABC, abstractmethod
from typing import Callable

# Called on the event loop thread, once per captured block, in arrival order.
OnChunk = Callable[[bytes], None]


class Microphone(ABC):
    @abstractmethod
    async def open(self, on_chunk: OnChunk) -> None:
        """Acquire the device and start delivering chunks.

        Raises PermissionDenied or DeviceUnavailable; nothing stays open on failure.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Flush pending chunks and release the device. Safe to call twice."""
        ...
