"""Unit tests for domain exceptions."""

import pytest

from pdfvault.domain.exceptions import (
    DocumentConflict,
    InvalidFilename,
    InvalidIdentifier,
    NotFound,
    PayloadTooLarge,
    PdfVaultError,
    RangeNotSatisfiable,
    StoreUnavailable,
    StreamFailure,
    UnsupportedMediaType,
    ValidationError,
)


@pytest.mark.parametrize(
    "error_type",
    [
        NotFound,
        UnsupportedMediaType,
        PayloadTooLarge,
        RangeNotSatisfiable,
        StoreUnavailable,
        StreamFailure,
        DocumentConflict,
        ValidationError,
    ],
)
def test_taxonomy_inherits_pdfvault_error(error_type) -> None:
    """Every taxonomy member is a PdfVaultError."""
    assert issubclass(error_type, PdfVaultError)


def test_invalid_identifier_is_not_found() -> None:
    """Undecodable identifiers surface as NotFound."""
    with pytest.raises(NotFound):
        raise InvalidIdentifier("bad")


def test_invalid_filename_is_validation_error() -> None:
    assert issubclass(InvalidFilename, ValidationError)
    assert InvalidFilename.code == "invalid_filename"


def test_codes_are_distinct() -> None:
    """Each taxonomy member has its own stable code."""
    codes = [
        NotFound.code,
        UnsupportedMediaType.code,
        PayloadTooLarge.code,
        RangeNotSatisfiable.code,
        StoreUnavailable.code,
        StreamFailure.code,
        DocumentConflict.code,
        ValidationError.code,
    ]
    assert len(set(codes)) == len(codes)


def test_payload_too_large_carries_limit() -> None:
    err = PayloadTooLarge(limit=1024, received=2048)
    assert err.limit == 1024
    assert err.received == 2048
    assert "1,024" in str(err)


def test_range_not_satisfiable_carries_size() -> None:
    err = RangeNotSatisfiable("out of bounds", size=1000)
    assert err.size == 1000
    assert RangeNotSatisfiable("malformed").size is None
