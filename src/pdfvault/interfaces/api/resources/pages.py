"""Book pages resource."""

import falcon
import falcon.asgi

from pdfvault.application.use_cases.document.list_pages import ListPagesUseCase
from pdfvault.interfaces.api.resources.documents import content_url


class PagesResource:
    """GET /v1/pages - content URLs of every stored PDF in page order."""

    def __init__(self, list_pages: ListPagesUseCase) -> None:
        self._list_pages = list_pages

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        documents = await self._list_pages.execute()
        resp.media = {"pages": [content_url(d) for d in documents]}
        resp.status = falcon.HTTP_200
