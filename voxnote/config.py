from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import os
from dotenv import load_dotenv


@dataclass(frozen=True)
class Config:
    openai_api_key: str
    log_level: str
    ffmpeg_path: str
    convert_timeout: int
    convert_endpoint_url: Optional[str]
    transcribe_timeout: int
    tmp_dir: Optional[Path]
    sample_rate: int
    channels: int
    input_device: Optional[str]

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        openai_api_key = os.getenv("OPENAI_API_KEY")
        log_level = os.getenv("LOG_LEVEL", "INFO")
        ffmpeg_path = os.getenv("FFMPEG_PATH", "ffmpeg") or "ffmpeg"
        convert_timeout = os.getenv("CONVERT_TIMEOUT", "120")
        convert_endpoint_url = os.getenv("CONVERT_ENDPOINT_URL") or None
        transcribe_timeout = os.getenv("TRANSCRIBE_TIMEOUT", "60")
        tmp_dir = os.getenv("VOXNOTE_TMP_DIR") or None
        sample_rate = os.getenv("MIC_SAMPLE_RATE", "16000")
        channels = os.getenv("MIC_CHANNELS", "1")
        input_device = os.getenv("MIC_DEVICE") or None

        return cls._validate(
            openai_api_key=openai_api_key,
            log_level=log_level,
            ffmpeg_path=ffmpeg_path,
            convert_timeout=_positive_int("CONVERT_TIMEOUT", convert_timeout),
            convert_endpoint_url=convert_endpoint_url,
            transcribe_timeout=_positive_int("TRANSCRIBE_TIMEOUT", transcribe_timeout),
            tmp_dir=Path(tmp_dir) if tmp_dir else None,
            sample_rate=_positive_int("MIC_SAMPLE_RATE", sample_rate),
            channels=_positive_int("MIC_CHANNELS", channels),
            input_device=input_device,
        )

    @staticmethod
    def _validate(
        openai_api_key: Optional[str],
        log_level: str,
        ffmpeg_path: str,
        convert_timeout: int,
        convert_endpoint_url: Optional[str],
        transcribe_timeout: int,
        tmp_dir: Optional[Path],
        sample_rate: int,
        channels: int,
        input_device: Optional[str],
    ) -> "Config":
        match openai_api_key:
            case None | "":
                raise ValueError("OPENAI_API_KEY must be set in .env")
            case _:
                pass

        match tmp_dir:
            case Path() if not tmp_dir.is_dir():
                raise ValueError(f"VOXNOTE_TMP_DIR is not a directory: {tmp_dir}")
            case _:
                pass

        return Config(
            openai_api_key=openai_api_key,
            log_level=log_level,
            ffmpeg_path=ffmpeg_path,
            convert_timeout=convert_timeout,
            convert_endpoint_url=convert_endpoint_url,
            transcribe_timeout=transcribe_timeout,
            tmp_dir=tmp_dir,
            sample_rate=sample_rate,
            channels=channels,
            input_device=input_device,
        )


def _positive_int(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    match value:
        case v if v > 0:
            return v
        case _:
            raise ValueError(f"{name} must be > 0")
