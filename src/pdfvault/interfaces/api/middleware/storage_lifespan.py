"""Storage lifespan middleware - prepares the store root on startup."""

import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class StorageLifespanMiddleware:
    """Creates the storage root when the ASGI server starts (if enabled)."""

    def __init__(self, root: Path, *, create: bool, max_upload_bytes: int) -> None:
        self._root = root
        self._create = create
        self._max_upload_bytes = max_upload_bytes

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        if self._create and not self._root.is_dir():
            self._root.mkdir(parents=True, exist_ok=True)
            logger.info("Created storage root %s", self._root)
        logger.info(
            "Serving documents from %s (max upload %d MiB)",
            self._root.resolve(),
            self._max_upload_bytes // (1024 * 1024),
        )

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        logger.info("Shutting down document store at %s", self._root)
