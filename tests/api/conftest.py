"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from pdfvault.application.use_cases.document.delete_document import DeleteDocumentUseCase
from pdfvault.application.use_cases.document.get_document import GetDocumentUseCase
from pdfvault.application.use_cases.document.ingest_document import IngestDocumentUseCase
from pdfvault.application.use_cases.document.list_documents import ListDocumentsUseCase
from pdfvault.application.use_cases.document.list_pages import ListPagesUseCase
from pdfvault.application.use_cases.document.read_document import ReadDocumentUseCase
from pdfvault.interfaces.api.app import create_app
from pdfvault.interfaces.api.middleware.cors import CORSMiddleware
from pdfvault.interfaces.api.resources.content import ContentResource
from pdfvault.interfaces.api.resources.documents import DocumentResource, DocumentsResource
from pdfvault.interfaces.api.resources.health import HealthResource
from pdfvault.interfaces.api.resources.pages import PagesResource

UPLOAD_LIMIT = 64 * 1024


def multipart_upload(
    filename: str | None,
    data: bytes,
    *,
    field: str = "file",
    filename_star: bool = False,
    boundary: str = "----PdfVaultBoundary",
) -> tuple[bytes, dict[str, str]]:
    """Build a multipart/form-data body with one file part."""
    if filename is None:
        disposition = f'form-data; name="{field}"'
    elif filename_star:
        from urllib.parse import quote

        disposition = f"form-data; name=\"{field}\"; filename*=UTF-8''{quote(filename)}"
    else:
        disposition = f'form-data; name="{field}"; filename="{filename}"'
    body = (
        f"--{boundary}\r\n"
        f"Content-Disposition: {disposition}\r\n"
        "Content-Type: application/pdf\r\n\r\n"
    ).encode("utf-8") + data + f"\r\n--{boundary}--\r\n".encode("utf-8")
    headers = {"Content-Type": f"multipart/form-data; boundary={boundary}"}
    return body, headers


@pytest.fixture
def app(store, codec, keyed_lock):
    """Falcon ASGI app over a temporary store root."""
    read_document = ReadDocumentUseCase(store, codec)
    return create_app(
        documents_resource=DocumentsResource(
            ListDocumentsUseCase(store),
            IngestDocumentUseCase(store, codec, keyed_lock, size_limit=UPLOAD_LIMIT),
        ),
        document_resource=DocumentResource(
            GetDocumentUseCase(store),
            DeleteDocumentUseCase(store, codec, keyed_lock),
        ),
        content_resource=ContentResource(read_document),
        health_resource=HealthResource(store),
        pages_resource=PagesResource(ListPagesUseCase(store)),
        middleware=[CORSMiddleware(["http://localhost:3000"])],
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)
