"""Ingest document use case."""

import logging

from pdfvault.application.dto.document_dto import DocumentIngestInput
from pdfvault.application.ports import DocumentStore, IdentifierCodec, KeyedLock
from pdfvault.domain.entities import Document
from pdfvault.domain.value_objects import (
    ConflictPolicy,
    repair_filename_encoding,
    validate_pdf_filename,
)

logger = logging.getLogger(__name__)


class IngestDocumentUseCase:
    """Store an uploaded PDF: filename repair, validation, size limit, placement."""

    def __init__(
        self,
        store: DocumentStore,
        codec: IdentifierCodec,
        lock: KeyedLock,
        *,
        size_limit: int,
        default_on_conflict: ConflictPolicy = ConflictPolicy.OVERWRITE,
    ) -> None:
        self._store = store
        self._codec = codec
        self._lock = lock
        self._size_limit = size_limit
        self._default_on_conflict = default_on_conflict

    async def execute(self, input_data: DocumentIngestInput) -> Document:
        """Ingest content under its repaired filename.

        Validation happens before any byte of ``content`` is consumed.
        """
        filename = validate_pdf_filename(
            repair_filename_encoding(input_data.filename.strip())
        )
        on_conflict = input_data.on_conflict or self._default_on_conflict

        async with self._lock.hold(self._codec.encode(filename)):
            document = await self._store.ingest(
                filename,
                input_data.content,
                size_limit=self._size_limit,
                on_conflict=on_conflict,
            )

        logger.info(
            "Ingested %s (%d bytes, on_conflict=%s)",
            document.filename,
            document.size_bytes,
            on_conflict.value,
        )
        return document
