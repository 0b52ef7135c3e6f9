"""AudioArtifact — immutable in-memory audio payload with a declared name."""
import mimetypes
import time
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from voxnote.constants import DEFAULT_CONTENT_TYPE


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class AudioArtifact:
    content: bytes
    name: str
    content_type: str = DEFAULT_CONTENT_TYPE

    @property
    def extension(self) -> str:
        """Lower-case extension without the dot; empty when the name has none."""
        return Path(self.name).suffix.lstrip(".").lower()

    @property
    def is_empty(self) -> bool:
        return not self.content

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: Path) -> "AudioArtifact":
        guessed, _ = mimetypes.guess_type(path.name)
        return cls(
            content=path.read_bytes(),
            name=path.name,
            content_type=guessed or DEFAULT_CONTENT_TYPE,
        )

    @classmethod
    def from_chunks(
        cls, chunks: Iterable[bytes], name: str, content_type: str
    ) -> "AudioArtifact":
        return cls(content=b"".join(chunks), name=name, content_type=content_type)
