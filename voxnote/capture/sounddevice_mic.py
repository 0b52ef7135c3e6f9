"""SoundDeviceMicrophone — PortAudio input stream via sounddevice."""
import asyncio
import logging
from typing import Any

from voxnote.capture.microphone import Microphone, OnChunk
from voxnote.constants import LOG_MIC_STATUS, MIC_SAMPLE_DTYPE
from voxnote.errors import DeviceUnavailable, PermissionDenied

logger = logging.getLogger(__name__)


class SoundDeviceMicrophone(Microphone):

    def __init__(
        self,
        sample_rate: int = 16000,
        channels: int = 1,
        device: str | int | None = None,
    ) -> None:
        self._sample_rate = sample_rate
        self._channels = channels
        self._device = device
        self._stream: Any = None

    async def open(self, on_chunk: OnChunk) -> None:
        # PortAudio is loaded on import; a host without it has no microphone.
        try:
            import sounddevice as sd
        except OSError as exc:
            raise DeviceUnavailable() from exc

        loop = asyncio.get_running_loop()

        def _callback(indata: Any, frames: int, time_info: Any, status: Any) -> None:
            if status:
                logger.warning(LOG_MIC_STATUS, status)
            loop.call_soon_threadsafe(on_chunk, bytes(indata))

        try:
            stream = sd.RawInputStream(
                samplerate=self._sample_rate,
                channels=self._channels,
                dtype=MIC_SAMPLE_DTYPE,
                device=self._device,
                callback=_callback,
            )
        except PermissionError as exc:
            raise PermissionDenied() from exc
        except (sd.PortAudioError, ValueError) as exc:
            raise DeviceUnavailable() from exc

        try:
            stream.start()
        except PermissionError as exc:
            stream.close()
            raise PermissionDenied() from exc
        except sd.PortAudioError as exc:
            stream.close()
            raise DeviceUnavailable() from exc
        self._stream = stream

    async def close(self) -> None:
        match self._stream:
            case None:
                return
            case stream:
                self._stream = None
                try:
                    await asyncio.to_thread(stream.stop)
                finally:
                    stream.close()
