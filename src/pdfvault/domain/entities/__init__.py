"""Domain entities."""

from pdfvault.domain.entities.document import Document

__all__ = [
    "Document",
]
