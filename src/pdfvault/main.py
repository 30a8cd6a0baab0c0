"""Application entry point and composition root."""

import argparse
import logging

from falcon.asgi import App

from pdfvault import __version__
from pdfvault.application.use_cases.document.delete_document import DeleteDocumentUseCase
from pdfvault.application.use_cases.document.get_document import GetDocumentUseCase
from pdfvault.application.use_cases.document.ingest_document import IngestDocumentUseCase
from pdfvault.application.use_cases.document.list_documents import ListDocumentsUseCase
from pdfvault.application.use_cases.document.list_pages import ListPagesUseCase
from pdfvault.application.use_cases.document.read_document import ReadDocumentUseCase
from pdfvault.config import Settings, get_settings
from pdfvault.infrastructure.identifiers import Base64IdentifierCodec
from pdfvault.infrastructure.locking import AsyncKeyedLock
from pdfvault.infrastructure.storage import FilesystemDocumentStore
from pdfvault.interfaces.api.app import create_app
from pdfvault.interfaces.api.middleware.cors import CORSMiddleware
from pdfvault.interfaces.api.middleware.storage_lifespan import StorageLifespanMiddleware
from pdfvault.interfaces.api.resources.content import ContentResource
from pdfvault.interfaces.api.resources.documents import DocumentResource, DocumentsResource
from pdfvault.interfaces.api.resources.health import HealthResource
from pdfvault.interfaces.api.resources.pages import PagesResource
from pdfvault.logging import configure_logging

logger = logging.getLogger(__name__)


def create_pdfvault_app(settings: Settings | None = None) -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    codec = Base64IdentifierCodec()
    lock = AsyncKeyedLock()
    store = FilesystemDocumentStore(
        settings.storage_root, codec, chunk_size=settings.chunk_size
    )

    list_documents = ListDocumentsUseCase(store)
    get_document = GetDocumentUseCase(store)
    ingest_document = IngestDocumentUseCase(
        store,
        codec,
        lock,
        size_limit=settings.max_upload_bytes,
        default_on_conflict=settings.default_on_conflict,
    )
    read_document = ReadDocumentUseCase(store, codec)
    delete_document = DeleteDocumentUseCase(store, codec, lock)

    return create_app(
        documents_resource=DocumentsResource(list_documents, ingest_document),
        document_resource=DocumentResource(get_document, delete_document),
        content_resource=ContentResource(read_document),
        health_resource=HealthResource(store),
        pages_resource=PagesResource(ListPagesUseCase(store)),
        middleware=[
            CORSMiddleware(settings.cors_origin_list),
            StorageLifespanMiddleware(
                settings.storage_root,
                create=settings.create_storage_root,
                max_upload_bytes=settings.max_upload_bytes,
            ),
        ],
    )


def main() -> None:
    """CLI entry point - serve the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    parser = argparse.ArgumentParser(description="PdfVault document server")
    parser.add_argument("--host", default=settings.host, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.port, help="Bind port")
    parser.add_argument("--version", action="version", version=f"PdfVault v{__version__}")
    args = parser.parse_args()

    configure_logging(settings)
    logger.info("PdfVault v%s starting on %s:%d", __version__, args.host, args.port)
    uvicorn.run(create_pdfvault_app(settings), host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
