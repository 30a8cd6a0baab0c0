"""Storage adapters."""

from pdfvault.infrastructure.storage.filesystem_store import (
    DEFAULT_CHUNK_SIZE,
    FileRangeStream,
    FilesystemDocumentStore,
)

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "FileRangeStream",
    "FilesystemDocumentStore",
]
