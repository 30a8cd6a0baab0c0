"""Pytest fixtures for PdfVault tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from pathlib import Path

import pytest

from pdfvault.infrastructure.identifiers import Base64IdentifierCodec
from pdfvault.infrastructure.locking import AsyncKeyedLock
from pdfvault.infrastructure.storage import FilesystemDocumentStore


async def aiter_chunks(data: bytes, chunk_size: int = 256) -> AsyncIterator[bytes]:
    """Yield ``data`` in fixed-size chunks, like an upload body."""
    for i in range(0, len(data), chunk_size):
        yield data[i : i + chunk_size]


async def read_all(stream) -> bytes:
    """Drain an async byte stream."""
    return b"".join([chunk async for chunk in stream])


def pdf_bytes(size: int) -> bytes:
    """Deterministic PDF-looking payload of exactly ``size`` bytes."""
    header = b"%PDF-1.7\n"
    body = bytes(i % 251 for i in range(max(size - len(header), 0)))
    return (header + body)[:size]


@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    """Empty store root directory."""
    root = tmp_path / "documents"
    root.mkdir()
    return root


@pytest.fixture
def codec() -> Base64IdentifierCodec:
    return Base64IdentifierCodec()


@pytest.fixture
def keyed_lock() -> AsyncKeyedLock:
    return AsyncKeyedLock()


@pytest.fixture
def store(storage_root: Path, codec: Base64IdentifierCodec) -> FilesystemDocumentStore:
    """Filesystem store with a small chunk size so ranges span several reads."""
    return FilesystemDocumentStore(storage_root, codec, chunk_size=64)


@pytest.fixture
def put_file(storage_root: Path) -> Callable[[str, bytes], Path]:
    """Write a file straight into the store root, bypassing ingest."""

    def _put(name: str, data: bytes) -> Path:
        path = storage_root / name
        path.write_bytes(data)
        return path

    return _put
