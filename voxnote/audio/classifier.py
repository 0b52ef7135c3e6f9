"""FormatClassifier — decides whether an artifact must be transcoded first."""
from enum import Enum

from voxnote.audio.artifact import AudioArtifact
from voxnote.constants import ACCEPTED_EXTENSIONS, MSG_EMPTY_NAME
from voxnote.errors import InputError


class AudioFormat(Enum):
    PASSTHROUGH = "passthrough"
    NEEDS_CONVERSION = "needs_conversion"


def classify(artifact: AudioArtifact) -> AudioFormat:
    """Unknown or missing extensions never bypass conversion."""
    match artifact.name.strip():
        case "":
            raise InputError(MSG_EMPTY_NAME)
        case _:
            pass

    match artifact.extension:
        case ext if ext in ACCEPTED_EXTENSIONS:
            return AudioFormat.PASSTHROUGH
        case _:
            return AudioFormat.NEEDS_CONVERSION
