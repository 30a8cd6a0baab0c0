"""Unit tests for use cases."""

from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from pdfvault.application.dto.document_dto import DocumentIngestInput
from pdfvault.application.use_cases.document.delete_document import DeleteDocumentUseCase
from pdfvault.application.use_cases.document.get_document import GetDocumentUseCase
from pdfvault.application.use_cases.document.ingest_document import IngestDocumentUseCase
from pdfvault.application.use_cases.document.list_documents import ListDocumentsUseCase
from pdfvault.application.use_cases.document.list_pages import ListPagesUseCase, page_number
from pdfvault.application.use_cases.document.read_document import ReadDocumentUseCase
from pdfvault.domain.entities import Document
from pdfvault.domain.exceptions import (
    DocumentConflict,
    InvalidFilename,
    NotFound,
    PayloadTooLarge,
    UnsupportedMediaType,
)
from pdfvault.domain.value_objects import ByteRange, ConflictPolicy

from tests.conftest import aiter_chunks, pdf_bytes, read_all


@pytest.fixture
def ingest(store, codec, keyed_lock) -> IngestDocumentUseCase:
    return IngestDocumentUseCase(store, codec, keyed_lock, size_limit=4096)


# --- IngestDocumentUseCase ---


@pytest.mark.asyncio
async def test_ingest_repairs_latin1_filename(ingest, codec, storage_root: Path) -> None:
    """A UTF-8 name delivered as Latin-1 is stored under its real name."""
    mojibake = "Résumé Notes.pdf".encode("utf-8").decode("latin-1")

    document = await ingest.execute(
        DocumentIngestInput(filename=mojibake, content=aiter_chunks(pdf_bytes(1024)))
    )

    assert document.filename == "Résumé Notes.pdf"
    assert document.title == "Résumé Notes"
    assert codec.decode(document.identifier) == "Résumé Notes.pdf"
    assert (storage_root / "Résumé Notes.pdf").stat().st_size == 1024


@pytest.mark.asyncio
async def test_ingest_rejects_non_pdf_before_reading(ingest, storage_root: Path) -> None:
    consumed = []

    async def body():
        consumed.append(True)
        yield b"text"

    with pytest.raises(UnsupportedMediaType):
        await ingest.execute(DocumentIngestInput(filename="notes.txt", content=body()))
    assert consumed == []
    assert list(storage_root.iterdir()) == []


@pytest.mark.asyncio
async def test_ingest_rejects_path_in_filename(ingest) -> None:
    with pytest.raises(InvalidFilename):
        await ingest.execute(
            DocumentIngestInput(filename="../../etc/passwd.pdf", content=aiter_chunks(b"x"))
        )


@pytest.mark.asyncio
async def test_ingest_applies_size_limit(ingest, storage_root: Path) -> None:
    with pytest.raises(PayloadTooLarge):
        await ingest.execute(
            DocumentIngestInput(filename="big.pdf", content=aiter_chunks(pdf_bytes(5000)))
        )
    assert list(storage_root.iterdir()) == []


@pytest.mark.asyncio
async def test_ingest_default_policy_and_override(store, codec, keyed_lock) -> None:
    use_case = IngestDocumentUseCase(
        store,
        codec,
        keyed_lock,
        size_limit=4096,
        default_on_conflict=ConflictPolicy.REJECT,
    )
    await use_case.execute(DocumentIngestInput(filename="a.pdf", content=aiter_chunks(b"1")))

    with pytest.raises(DocumentConflict):
        await use_case.execute(DocumentIngestInput(filename="a.pdf", content=aiter_chunks(b"2")))

    document = await use_case.execute(
        DocumentIngestInput(
            filename="a.pdf",
            content=aiter_chunks(b"33"),
            on_conflict=ConflictPolicy.OVERWRITE,
        )
    )
    assert document.size_bytes == 2


@pytest.mark.asyncio
async def test_ingest_holds_lock_on_identifier(codec) -> None:
    """Ingest runs inside the lock for the document's identifier."""
    held: list[str] = []

    class RecordingLock:
        @asynccontextmanager
        async def hold(self, key: str):
            held.append(key)
            yield

    store = AsyncMock()
    store.ingest.return_value = Document(
        identifier=codec.encode("a.pdf"),
        filename="a.pdf",
        size_bytes=1,
        modified_at=datetime.now(UTC),
    )
    use_case = IngestDocumentUseCase(store, codec, RecordingLock(), size_limit=10)

    await use_case.execute(DocumentIngestInput(filename=" a.pdf ", content=aiter_chunks(b"x")))

    assert held == [codec.encode("a.pdf")]
    store.ingest.assert_awaited_once()
    assert store.ingest.await_args.args[0] == "a.pdf"
    assert store.ingest.await_args.kwargs["on_conflict"] is ConflictPolicy.OVERWRITE
    assert store.ingest.await_args.kwargs["size_limit"] == 10


# --- Ingest / Get / Delete round trips ---


@pytest.mark.asyncio
async def test_ingest_then_get(ingest, store, codec) -> None:
    data = pdf_bytes(2048)
    await ingest.execute(DocumentIngestInput(filename="book.pdf", content=aiter_chunks(data)))

    document = await GetDocumentUseCase(store).execute(codec.encode("book.pdf"))

    assert document.size_bytes == len(data)


@pytest.mark.asyncio
async def test_ingest_delete_get(ingest, store, codec, keyed_lock) -> None:
    document = await ingest.execute(
        DocumentIngestInput(filename="book.pdf", content=aiter_chunks(b"%PDF"))
    )
    delete = DeleteDocumentUseCase(store, codec, keyed_lock)

    await delete.execute(document.identifier)

    with pytest.raises(NotFound):
        await GetDocumentUseCase(store).execute(document.identifier)
    with pytest.raises(NotFound):
        await delete.execute(document.identifier)


@pytest.mark.asyncio
async def test_delete_garbage_identifier(store, codec, keyed_lock) -> None:
    with pytest.raises(NotFound):
        await DeleteDocumentUseCase(store, codec, keyed_lock).execute("!!")


@pytest.mark.asyncio
async def test_list_documents(ingest, store) -> None:
    await ingest.execute(DocumentIngestInput(filename="a.pdf", content=aiter_chunks(b"1")))
    await ingest.execute(DocumentIngestInput(filename="b.pdf", content=aiter_chunks(b"22")))

    documents = await ListDocumentsUseCase(store).execute()

    assert sorted((d.title, d.size_bytes) for d in documents) == [("a", 1), ("b", 2)]


# --- ListPagesUseCase ---


@pytest.mark.parametrize(
    ("filename", "expected"),
    [("page_10.pdf", 10), ("3-intro.pdf", 3), ("ch2_p07.pdf", 2), ("cover.pdf", 0)],
)
def test_page_number(filename: str, expected: int) -> None:
    assert page_number(filename) == expected


@pytest.mark.asyncio
async def test_list_pages_sorted_numerically(store, put_file) -> None:
    for name in ("page_10.pdf", "page_2.pdf", "cover.pdf", "page_1.pdf", "notes.txt"):
        put_file(name, b"x")

    documents = await ListPagesUseCase(store).execute()

    assert [d.filename for d in documents] == [
        "cover.pdf",
        "page_1.pdf",
        "page_2.pdf",
        "page_10.pdf",
    ]


@pytest.mark.asyncio
async def test_list_pages_empty_is_not_found(store, put_file) -> None:
    put_file("notes.txt", b"x")
    with pytest.raises(NotFound):
        await ListPagesUseCase(store).execute()


# --- ReadDocumentUseCase ---


@pytest.mark.asyncio
async def test_read_by_identifier_and_filename(store, codec, put_file) -> None:
    data = pdf_bytes(1000)
    put_file("a.pdf", data)
    use_case = ReadDocumentUseCase(store, codec)

    by_id = await use_case.execute(codec.encode("a.pdf"), ByteRange(start=100, end=199))
    by_name = await use_case.execute_by_filename("a.pdf", ByteRange(start=100, end=199))

    assert await read_all(by_id.stream) == data[100:200]
    assert await read_all(by_name.stream) == data[100:200]
