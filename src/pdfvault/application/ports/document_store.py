"""Document store port."""

from collections.abc import AsyncIterator
from typing import Protocol

from pdfvault.application.dto.document_dto import ContentSlice
from pdfvault.domain.entities import Document
from pdfvault.domain.value_objects import ByteRange, ConflictPolicy


class DocumentStore(Protocol):
    """Port for document persistence and byte-range reads."""

    async def list(self) -> list[Document]: ...

    async def ingest(
        self,
        filename: str,
        content: AsyncIterator[bytes],
        *,
        size_limit: int,
        on_conflict: ConflictPolicy = ConflictPolicy.OVERWRITE,
    ) -> Document: ...

    async def get_metadata(self, identifier: str) -> Document: ...

    async def read_range(
        self, identifier: str, byte_range: ByteRange | None = None
    ) -> ContentSlice: ...

    async def delete(self, identifier: str) -> None: ...

    async def check_ready(self) -> bool: ...
