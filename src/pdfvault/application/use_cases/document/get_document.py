"""Get document use case."""

from pdfvault.application.ports import DocumentStore
from pdfvault.domain.entities import Document


class GetDocumentUseCase:
    """Get document metadata by identifier."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def execute(self, identifier: str) -> Document:
        """Raise NotFound when the identifier does not resolve to a file."""
        return await self._store.get_metadata(identifier)
