"""SoundDeviceMicrophone tests — a fake ``sounddevice`` module replaces PortAudio."""
import asyncio
import sys
import types

import pytest

from voxnote.capture.microphone import Microphone
from voxnote.capture.sounddevice_mic import SoundDeviceMicrophone
from voxnote.errors import DeviceUnavailable, PermissionDenied


class FakePortAudioError(Exception):
    pass


class FakeStream:
    def __init__(self, start_error: Exception | None = None, **kwargs) -> None:
        self.kwargs = kwargs
        self.callback = kwargs["callback"]
        self._start_error = start_error
        self.started = False
        self.stopped = False
        self.closed = False

    def start(self) -> None:
        if self._start_error is not None:
            raise self._start_error
        self.started = True

    def stop(self) -> None:
        self.stopped = True

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_sd(monkeypatch):
    streams: list[FakeStream] = []
    module = types.ModuleType("sounddevice")
    module.PortAudioError = FakePortAudioError
    module.open_error = None
    module.start_error = None

    def raw_input_stream(**kwargs):
        if module.open_error is not None:
            raise module.open_error
        stream = FakeStream(start_error=module.start_error, **kwargs)
        streams.append(stream)
        return stream

    module.RawInputStream = raw_input_stream
    module.streams = streams
    monkeypatch.setitem(sys.modules, "sounddevice", module)
    return module


def test_sounddevice_microphone_implements_abc():
    assert issubclass(SoundDeviceMicrophone, Microphone)


@pytest.mark.asyncio
async def test_open_starts_int16_stream_with_settings(fake_sd):
    mic = SoundDeviceMicrophone(sample_rate=44100, channels=2, device=3)

    await mic.open(lambda data: None)

    stream = fake_sd.streams[0]
    assert stream.started
    assert stream.kwargs["samplerate"] == 44100
    assert stream.kwargs["channels"] == 2
    assert stream.kwargs["dtype"] == "int16"
    assert stream.kwargs["device"] == 3


@pytest.mark.asyncio
async def test_callback_delivers_bytes_on_event_loop(fake_sd):
    received: list[bytes] = []
    mic = SoundDeviceMicrophone()
    await mic.open(received.append)

    callback = fake_sd.streams[0].callback
    await asyncio.to_thread(callback, bytearray(b"\x01\x02"), 1, None, None)
    await asyncio.to_thread(callback, bytearray(b"\x03\x04"), 1, None, None)
    await asyncio.sleep(0)

    assert received == [b"\x01\x02", b"\x03\x04"]


@pytest.mark.asyncio
async def test_close_stops_and_releases_stream(fake_sd):
    mic = SoundDeviceMicrophone()
    await mic.open(lambda data: None)

    await mic.close()
    await mic.close()

    stream = fake_sd.streams[0]
    assert stream.stopped and stream.closed


@pytest.mark.asyncio
async def test_close_without_open_is_a_no_op(fake_sd):
    await SoundDeviceMicrophone().close()


@pytest.mark.asyncio
async def test_permission_error_maps_to_permission_denied(fake_sd):
    fake_sd.open_error = PermissionError("denied")

    with pytest.raises(PermissionDenied):
        await SoundDeviceMicrophone().open(lambda data: None)


@pytest.mark.asyncio
async def test_portaudio_error_maps_to_device_unavailable(fake_sd):
    fake_sd.open_error = FakePortAudioError("Error querying device -1")

    with pytest.raises(DeviceUnavailable):
        await SoundDeviceMicrophone().open(lambda data: None)


@pytest.mark.asyncio
async def test_failed_start_closes_stream(fake_sd):
    fake_sd.start_error = FakePortAudioError("Device unavailable")

    with pytest.raises(DeviceUnavailable):
        await SoundDeviceMicrophone().open(lambda data: None)

    assert fake_sd.streams[0].closed

