"""List pages use case."""

import re

from pdfvault.application.ports import DocumentStore
from pdfvault.domain.entities import Document
from pdfvault.domain.exceptions import NotFound

_FIRST_NUMBER = re.compile(r"\d+")


def page_number(filename: str) -> int:
    """First run of digits in ``filename``; 0 when there is none."""
    match = _FIRST_NUMBER.search(filename)
    return int(match.group()) if match else 0


class ListPagesUseCase:
    """List stored PDFs as the pages of one book, ordered by page number.

    Files without a number sort as page 0. Ties keep directory order.
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def execute(self) -> list[Document]:
        documents = await self._store.list()
        if not documents:
            raise NotFound("No PDF files found")
        return sorted(documents, key=lambda d: page_number(d.filename))
