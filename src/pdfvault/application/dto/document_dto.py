"""Document DTOs."""

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Protocol

from pdfvault.domain.entities import Document
from pdfvault.domain.value_objects import ConflictPolicy, ContentRange


class DocumentStream(Protocol):
    """Async byte stream over an open document file."""

    def __aiter__(self) -> AsyncIterator[bytes]: ...

    async def close(self) -> None: ...


@dataclass
class DocumentIngestInput:
    """Input for ingesting an uploaded file."""

    filename: str
    content: AsyncIterator[bytes]
    on_conflict: ConflictPolicy | None = None


@dataclass
class ContentSlice:
    """Bytes of a document (whole or partial) plus response framing."""

    document: Document
    content_range: ContentRange | None
    content_length: int
    stream: DocumentStream

    @property
    def is_partial(self) -> bool:
        return self.content_range is not None
