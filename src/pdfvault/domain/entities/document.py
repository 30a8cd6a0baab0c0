"""Document entity."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import PurePosixPath


@dataclass(frozen=True)
class Document:
    """Stored PDF file with metadata read live from the filesystem."""

    identifier: str
    filename: str
    size_bytes: int
    modified_at: datetime

    @property
    def title(self) -> str:
        """Filename without extension."""
        return PurePosixPath(self.filename).stem
