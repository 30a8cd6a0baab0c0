"""Read document content use case."""

from pdfvault.application.dto.document_dto import ContentSlice
from pdfvault.application.ports import DocumentStore, IdentifierCodec
from pdfvault.domain.value_objects import ByteRange


class ReadDocumentUseCase:
    """Open a document for streaming, whole or as a byte range."""

    def __init__(self, store: DocumentStore, codec: IdentifierCodec) -> None:
        self._store = store
        self._codec = codec

    async def execute(
        self, identifier: str, byte_range: ByteRange | None = None
    ) -> ContentSlice:
        return await self._store.read_range(identifier, byte_range)

    async def execute_by_filename(
        self, filename: str, byte_range: ByteRange | None = None
    ) -> ContentSlice:
        """Same as ``execute`` for callers that address documents by filename."""
        return await self._store.read_range(self._codec.encode(filename), byte_range)
