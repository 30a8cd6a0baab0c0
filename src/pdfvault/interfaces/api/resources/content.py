"""Document content streaming with HTTP range support."""

import falcon
import falcon.asgi

from pdfvault.application.dto.document_dto import ContentSlice
from pdfvault.application.use_cases.document.read_document import ReadDocumentUseCase
from pdfvault.domain.value_objects import PDF_MEDIA_TYPE
from pdfvault.interfaces.api.range_header import parse_range_header


def _send_slice(resp: falcon.asgi.Response, content: ContentSlice) -> None:
    resp.content_type = PDF_MEDIA_TYPE
    resp.accept_ranges = "bytes"
    resp.content_length = content.content_length
    if content.content_range is not None:
        r = content.content_range
        resp.status = falcon.HTTP_206
        resp.content_range = (r.start, r.end, r.total)
    else:
        resp.status = falcon.HTTP_200
    # Falcon awaits stream.close() once the body is sent or the client leaves.
    resp.stream = content.stream


class ContentResource:
    """GET /v1/content/{identifier} and GET /v1/files/{filename} - PDF bytes, whole or ranged."""

    def __init__(self, read_document: ReadDocumentUseCase) -> None:
        self._read_document = read_document

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        identifier: str,
    ) -> None:
        byte_range = parse_range_header(req.get_header("Range"))
        content = await self._read_document.execute(identifier, byte_range)
        _send_slice(resp, content)

    async def on_get_by_filename(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        filename: str,
    ) -> None:
        byte_range = parse_range_header(req.get_header("Range"))
        content = await self._read_document.execute_by_filename(filename, byte_range)
        _send_slice(resp, content)
