"""Delete document use case."""

import logging

from pdfvault.application.ports import DocumentStore, IdentifierCodec, KeyedLock

logger = logging.getLogger(__name__)


class DeleteDocumentUseCase:
    """Delete a document; a missing document raises NotFound."""

    def __init__(
        self, store: DocumentStore, codec: IdentifierCodec, lock: KeyedLock
    ) -> None:
        self._store = store
        self._codec = codec
        self._lock = lock

    async def execute(self, identifier: str) -> None:
        # Lock on the canonical form so legacy identifiers share the ingest key.
        key = self._codec.encode(self._codec.decode(identifier))
        async with self._lock.hold(key):
            await self._store.delete(identifier)
        logger.info("Deleted document %s", identifier)
