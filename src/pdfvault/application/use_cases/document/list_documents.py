"""List documents use case."""

from pdfvault.application.ports import DocumentStore
from pdfvault.domain.entities import Document


class ListDocumentsUseCase:
    """List every PDF in the store, in directory enumeration order."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def execute(self) -> list[Document]:
        return await self._store.list()
