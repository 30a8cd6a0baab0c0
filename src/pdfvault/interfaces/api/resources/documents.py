"""Document API resources."""

import re
from collections.abc import AsyncIterator
from urllib.parse import unquote_to_bytes

import falcon
import falcon.asgi

from pdfvault.application.dto.document_dto import DocumentIngestInput
from pdfvault.application.use_cases.document.delete_document import DeleteDocumentUseCase
from pdfvault.application.use_cases.document.get_document import GetDocumentUseCase
from pdfvault.application.use_cases.document.ingest_document import IngestDocumentUseCase
from pdfvault.application.use_cases.document.list_documents import ListDocumentsUseCase
from pdfvault.domain.entities import Document
from pdfvault.domain.value_objects import ConflictPolicy
from pdfvault.interfaces.api.errors import error_body

# RFC 5987: filename*=charset''percent-encoded (two single quotes)
_FILENAME_STAR_RFC5987 = re.compile(r"([\w-]+)''(.+)")

UPLOAD_FIELD = "file"
_READ_SIZE = 64 * 1024


def _parse_filename_star_from_header(raw_header_value: bytes) -> str | None:
    """Parse Content-Disposition raw value for filename*=charset''percent-encoded (RFC 5987)."""
    if not raw_header_value:
        return None
    decoded = raw_header_value.decode("utf-8", errors="replace")
    idx = decoded.find("filename*=")
    if idx == -1:
        return None
    rest = decoded[idx + len("filename*=") :].strip().split(";", 1)[0].strip()
    match = _FILENAME_STAR_RFC5987.match(rest)
    if not match:
        return None
    charset, encoded = match.groups()
    try:
        return unquote_to_bytes(encoded.strip('"')).decode(charset)
    except (ValueError, LookupError):
        return None


def _get_part_filename(part: object) -> str:
    """Filename of a multipart part: part.filename, else filename* from the raw header.

    Legacy-encoding repair happens in the ingest use case.
    """
    raw = (getattr(part, "filename", None) or "").strip()
    if not raw:
        headers = getattr(part, "_headers", None)
        if isinstance(headers, dict):
            raw_star = _parse_filename_star_from_header(
                headers.get(b"content-disposition", b"")
            )
            if raw_star:
                raw = raw_star.strip()
    return raw


async def _part_chunks(part: object, size: int = _READ_SIZE) -> AsyncIterator[bytes]:
    """Read a multipart part's body incrementally."""
    stream = part.stream
    while True:
        chunk = await stream.read(size)
        if not chunk:
            break
        yield chunk


def _parse_on_conflict(raw: str | None) -> ConflictPolicy | None:
    if raw is None or not raw.strip():
        return None
    return ConflictPolicy(raw.strip().lower())


def content_url(d: Document) -> str:
    return f"/v1/content/{d.identifier}"


def _document_to_dict(d: Document) -> dict:
    return {
        "id": d.identifier,
        "title": d.title,
        "filename": d.filename,
        "content_url": content_url(d),
        "size": d.size_bytes,
        "modified_at": d.modified_at.isoformat(),
    }


class DocumentsResource:
    """GET /v1/documents - list; POST /v1/documents - upload one PDF (multipart field ``file``)."""

    def __init__(
        self,
        list_documents: ListDocumentsUseCase,
        ingest_document: IngestDocumentUseCase,
    ) -> None:
        self._list_documents = list_documents
        self._ingest_document = ingest_document

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List documents in directory order."""
        documents = await self._list_documents.execute()
        resp.media = [_document_to_dict(d) for d in documents]
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Store the first ``file`` part; other parts are skipped."""
        content_type = req.content_type or ""
        if "multipart/form-data" not in content_type:
            resp.status = falcon.HTTP_400
            resp.media = error_body("validation_error", "multipart/form-data required")
            return

        try:
            on_conflict = _parse_on_conflict(req.get_param("on_conflict"))
        except ValueError:
            allowed = ", ".join(p.value for p in ConflictPolicy)
            resp.status = falcon.HTTP_400
            resp.media = error_body(
                "validation_error", f"on_conflict must be one of: {allowed}"
            )
            return

        try:
            form = await req.get_media()
        except falcon.MediaMalformedError as e:
            resp.status = falcon.HTTP_400
            resp.media = error_body("validation_error", f"Invalid multipart: {e}")
            return

        async for part in form:
            if (part.name or "").strip() != UPLOAD_FIELD:
                continue
            filename = _get_part_filename(part)
            if not filename:
                resp.status = falcon.HTTP_400
                resp.media = error_body("validation_error", "Uploaded file has no filename")
                return
            document = await self._ingest_document.execute(
                DocumentIngestInput(
                    filename=filename,
                    content=_part_chunks(part),
                    on_conflict=on_conflict,
                )
            )
            resp.media = _document_to_dict(document)
            resp.status = falcon.HTTP_200
            return

        resp.status = falcon.HTTP_400
        resp.media = error_body("validation_error", "No file uploaded")


class DocumentResource:
    """GET/DELETE /v1/documents/{identifier}."""

    def __init__(
        self,
        get_document: GetDocumentUseCase,
        delete_document: DeleteDocumentUseCase,
    ) -> None:
        self._get_document = get_document
        self._delete_document = delete_document

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        identifier: str,
    ) -> None:
        """Get document metadata."""
        document = await self._get_document.execute(identifier)
        resp.media = _document_to_dict(document)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        identifier: str,
    ) -> None:
        await self._delete_document.execute(identifier)
        resp.media = {"message": "Document deleted successfully"}
        resp.status = falcon.HTTP_200
