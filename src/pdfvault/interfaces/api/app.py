"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App

from pdfvault.domain.exceptions import PdfVaultError
from pdfvault.interfaces.api.errors import handle_domain_error, handle_unexpected_error
from pdfvault.interfaces.api.resources.content import ContentResource
from pdfvault.interfaces.api.resources.documents import DocumentResource, DocumentsResource
from pdfvault.interfaces.api.resources.health import HealthResource
from pdfvault.interfaces.api.resources.pages import PagesResource


def create_app(
    documents_resource: DocumentsResource,
    document_resource: DocumentResource,
    content_resource: ContentResource,
    health_resource: HealthResource,
    pages_resource: PagesResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(PdfVaultError, handle_domain_error)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/documents", documents_resource)
    app.add_route("/v1/documents/{identifier}", document_resource)
    app.add_route("/v1/content/{identifier}", content_resource)
    app.add_route("/v1/files/{filename}", content_resource, suffix="by_filename")
    app.add_route("/v1/pages", pages_resource)
    return app
