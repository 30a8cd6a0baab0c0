"""Filesystem document store.

Documents live as ``<root>/<filename>`` in one flat directory. The directory
listing is the index: existence, identity and metadata are read live from the
filesystem on every call, nothing is cached and there are no sidecar files.
Listing costs one ``stat`` per file, which is fine for a personal library of
up to a few thousand documents.

Blocking filesystem calls run in worker threads via ``asyncio.to_thread`` so a
large upload or range read does not stall the event loop.
"""

from __future__ import annotations

import asyncio
import logging
import os
import secrets
import stat
from collections.abc import AsyncIterator, Iterator
from datetime import UTC, datetime
from pathlib import Path, PurePosixPath
from typing import BinaryIO

from pdfvault.application.dto.document_dto import ContentSlice
from pdfvault.application.ports import IdentifierCodec
from pdfvault.domain.entities import Document
from pdfvault.domain.exceptions import (
    DocumentConflict,
    InvalidFilename,
    NotFound,
    PayloadTooLarge,
    StoreUnavailable,
    StreamFailure,
)
from pdfvault.domain.value_objects import (
    ByteRange,
    ConflictPolicy,
    is_pdf_filename,
    validate_pdf_filename,
)

DEFAULT_CHUNK_SIZE = 64 * 1024
_TEMP_SUFFIX = ".part"
_MAX_RENAME_ATTEMPTS = 1000

logger = logging.getLogger(__name__)


class FileRangeStream:
    """Reads ``length`` bytes from an open file positioned at the range start.

    ``close`` is idempotent; the HTTP layer awaits it when the response ends or
    the client goes away, which releases the file handle.
    """

    def __init__(
        self,
        handle: BinaryIO,
        length: int,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        label: str = "",
    ) -> None:
        self._handle = handle
        self._length = length
        self._chunk_size = chunk_size
        self._label = label
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[bytes]:
        remaining = self._length
        try:
            while remaining > 0 and not self._closed:
                try:
                    chunk = await asyncio.to_thread(
                        self._handle.read, min(self._chunk_size, remaining)
                    )
                except (OSError, ValueError) as exc:
                    logger.error("Read failed while streaming %s", self._label, exc_info=exc)
                    raise StreamFailure(f"Failed to read {self._label}") from exc
                if not chunk:
                    logger.error(
                        "%s ended %d bytes before the announced length",
                        self._label,
                        remaining,
                    )
                    raise StreamFailure(f"{self._label} was truncated while streaming")
                remaining -= len(chunk)
                yield chunk
        finally:
            await self.close()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await asyncio.to_thread(self._handle.close)


class FilesystemDocumentStore:
    """Document store over a single flat directory of PDF files."""

    def __init__(
        self,
        root: Path,
        codec: IdentifierCodec,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._root = Path(root)
        self._codec = codec
        self._chunk_size = chunk_size

    @property
    def root(self) -> Path:
        return self._root

    # --- queries ---

    async def list(self) -> list[Document]:
        return await asyncio.to_thread(self._list_sync)

    def _list_sync(self) -> list[Document]:
        documents: list[Document] = []
        try:
            with os.scandir(self._root) as entries:
                for entry in entries:
                    if not is_pdf_filename(entry.name):
                        continue
                    try:
                        if not entry.is_file() or self._contained(entry.name) is None:
                            continue
                        st = entry.stat()
                    except FileNotFoundError:
                        logger.debug("%s vanished during listing", entry.name)
                        continue
                    documents.append(self._to_document(entry.name, st))
        except OSError as exc:
            raise StoreUnavailable(f"Cannot read store root {self._root}") from exc
        logger.debug("Listed %d documents in %s", len(documents), self._root)
        return documents

    async def get_metadata(self, identifier: str) -> Document:
        filename, path = self._locate(identifier)
        try:
            st = await asyncio.to_thread(path.stat)
        except (FileNotFoundError, NotADirectoryError) as exc:
            raise NotFound(f"Document {identifier} not found") from exc
        except OSError as exc:
            raise StoreUnavailable(f"Cannot stat {filename}") from exc
        if not stat.S_ISREG(st.st_mode):
            raise NotFound(f"Document {identifier} not found")
        return self._to_document(filename, st)

    async def read_range(
        self, identifier: str, byte_range: ByteRange | None = None
    ) -> ContentSlice:
        """Open the document and position it at the start of ``byte_range``.

        Size is taken from the open handle, so the announced length and the
        streamed bytes describe the same file even if it is replaced meanwhile.
        """
        filename, path = self._locate(identifier)
        try:
            handle = await asyncio.to_thread(path.open, "rb")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as exc:
            raise NotFound(f"Document {identifier} not found") from exc
        except OSError as exc:
            raise StoreUnavailable(f"Cannot open {filename}") from exc

        try:
            st = await asyncio.to_thread(os.fstat, handle.fileno())
            if not stat.S_ISREG(st.st_mode):
                raise NotFound(f"Document {identifier} not found")
            content_range = byte_range.resolve(st.st_size) if byte_range else None
            if content_range is not None:
                await asyncio.to_thread(handle.seek, content_range.start)
        except BaseException:
            await asyncio.to_thread(handle.close)
            raise

        length = content_range.length if content_range else st.st_size
        return ContentSlice(
            document=self._to_document(filename, st),
            content_range=content_range,
            content_length=length,
            stream=FileRangeStream(
                handle, length, chunk_size=self._chunk_size, label=filename
            ),
        )

    async def check_ready(self) -> bool:
        return await asyncio.to_thread(
            lambda: self._root.is_dir() and os.access(self._root, os.R_OK | os.W_OK)
        )

    # --- mutations ---

    async def ingest(
        self,
        filename: str,
        content: AsyncIterator[bytes],
        *,
        size_limit: int,
        on_conflict: ConflictPolicy = ConflictPolicy.OVERWRITE,
    ) -> Document:
        """Write ``content`` to a temporary file, then move it into place.

        The temporary file is removed on every failure path, so an oversized
        or broken upload never leaves a truncated document behind.
        """
        validate_pdf_filename(filename)
        if self._contained(filename) is None:
            raise InvalidFilename(f"Filename {filename!r} is not allowed")

        temp = self._root / f".{secrets.token_hex(8)}{_TEMP_SUFFIX}"
        try:
            handle = await asyncio.to_thread(temp.open, "xb")
        except OSError as exc:
            raise StoreUnavailable(f"Cannot write to store root {self._root}") from exc

        size = 0
        try:
            try:
                async for chunk in content:
                    size += len(chunk)
                    if size > size_limit:
                        raise PayloadTooLarge(limit=size_limit, received=size)
                    await asyncio.to_thread(handle.write, chunk)
            finally:
                await asyncio.to_thread(handle.close)
            final_name, st = await asyncio.to_thread(
                self._place, temp, filename, on_conflict
            )
        except OSError as exc:
            logger.error("Failed to store %s", filename, exc_info=exc)
            raise StreamFailure(f"Failed to store {filename}") from exc
        finally:
            await asyncio.to_thread(temp.unlink, missing_ok=True)

        return self._to_document(final_name, st)

    def _place(
        self, temp: Path, filename: str, on_conflict: ConflictPolicy
    ) -> tuple[str, os.stat_result]:
        if on_conflict is ConflictPolicy.OVERWRITE:
            target = self._root / filename
            os.replace(temp, target)
            return filename, target.stat()

        if on_conflict is ConflictPolicy.REJECT:
            target = self._root / filename
            try:
                os.link(temp, target)
            except FileExistsError as exc:
                raise DocumentConflict(f"Document {filename!r} already exists") from exc
            return filename, target.stat()

        for candidate in self._rename_candidates(filename):
            target = self._root / candidate
            try:
                os.link(temp, target)
            except FileExistsError:
                continue
            return candidate, target.stat()
        raise DocumentConflict(f"No free name left for {filename!r}")

    @staticmethod
    def _rename_candidates(filename: str) -> Iterator[str]:
        yield filename
        path = PurePosixPath(filename)
        for n in range(1, _MAX_RENAME_ATTEMPTS + 1):
            yield f"{path.stem} ({n}){path.suffix}"

    async def delete(self, identifier: str) -> None:
        filename, path = self._locate(identifier)
        try:
            await asyncio.to_thread(path.unlink)
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as exc:
            raise NotFound(f"Document {identifier} not found") from exc
        except OSError as exc:
            raise StoreUnavailable(f"Cannot delete {filename}") from exc
        logger.debug("Removed %s", path)

    # --- helpers ---

    def _contained(self, filename: str) -> Path | None:
        """Path for ``filename`` if it resolves directly inside the root."""
        base = self._root.resolve()
        candidate = (base / filename).resolve()
        if candidate.parent != base:
            return None
        return self._root / filename

    def _locate(self, identifier: str) -> tuple[str, Path]:
        filename = self._codec.decode(identifier)
        path = self._contained(filename) if is_pdf_filename(filename) else None
        if path is None:
            logger.warning("Rejected identifier %r: not a PDF inside the store root", identifier)
            raise NotFound(f"Document {identifier} not found")
        return filename, path

    def _to_document(self, filename: str, st: os.stat_result) -> Document:
        return Document(
            identifier=self._codec.encode(filename),
            filename=filename,
            size_bytes=st.st_size,
            modified_at=datetime.fromtimestamp(st.st_mtime, tz=UTC),
        )
