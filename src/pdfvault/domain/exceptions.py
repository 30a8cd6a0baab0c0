"""Domain exceptions."""


class PdfVaultError(Exception):
    """Base exception for PdfVault."""

    code = "internal_error"


class NotFound(PdfVaultError):
    """Requested document was not found."""

    code = "not_found"


class InvalidIdentifier(NotFound):
    """Identifier does not decode to a safe filename."""


class ValidationError(PdfVaultError):
    """Validation failed for input data."""

    code = "validation_error"


class InvalidFilename(ValidationError):
    """Filename cannot be stored in a flat directory."""

    code = "invalid_filename"


class UnsupportedMediaType(PdfVaultError):
    """Uploaded file is not a PDF."""

    code = "unsupported_media_type"


class DocumentConflict(PdfVaultError):
    """Document with the same filename already exists."""

    code = "conflict"


class PayloadTooLarge(PdfVaultError):
    """Uploaded content exceeds the size limit."""

    code = "payload_too_large"

    def __init__(self, *, limit: int, received: int) -> None:
        self.limit = limit
        self.received = received
        super().__init__(
            f"Uploaded file is at least {received:,} bytes, exceeding the "
            f"limit of {limit:,} bytes"
        )


class RangeNotSatisfiable(PdfVaultError):
    """Requested byte range lies outside the document."""

    code = "range_not_satisfiable"

    def __init__(self, message: str, *, size: int | None = None) -> None:
        self.size = size
        super().__init__(message)


class StoreUnavailable(PdfVaultError):
    """Store root directory cannot be read."""

    code = "store_unavailable"


class StreamFailure(PdfVaultError):
    """I/O error while transferring document bytes."""

    code = "stream_failure"
