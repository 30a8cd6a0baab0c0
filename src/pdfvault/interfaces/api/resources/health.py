"""Health check endpoints."""

import falcon
import falcon.asgi

from pdfvault.application.ports import DocumentStore


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness (store root readable and writable)."""
        if await self._store.check_ready():
            resp.media = {"status": "ready"}
            resp.status = falcon.HTTP_200
        else:
            resp.media = {"status": "unavailable"}
            resp.status = falcon.HTTP_503
