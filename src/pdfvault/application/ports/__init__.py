"""Application ports - interfaces for external adapters."""

from pdfvault.application.ports.document_store import DocumentStore
from pdfvault.application.ports.identifier_codec import IdentifierCodec
from pdfvault.application.ports.keyed_lock import KeyedLock

__all__ = [
    "DocumentStore",
    "IdentifierCodec",
    "KeyedLock",
]
