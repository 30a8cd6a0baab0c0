"""Domain value objects."""

from pdfvault.domain.value_objects.byte_range import ByteRange, ContentRange
from pdfvault.domain.value_objects.conflict_policy import ConflictPolicy
from pdfvault.domain.value_objects.filename import (
    PDF_MEDIA_TYPE,
    is_pdf_filename,
    is_safe_filename,
    repair_filename_encoding,
    validate_pdf_filename,
)

__all__ = [
    "PDF_MEDIA_TYPE",
    "ByteRange",
    "ConflictPolicy",
    "ContentRange",
    "is_pdf_filename",
    "is_safe_filename",
    "repair_filename_encoding",
    "validate_pdf_filename",
]
