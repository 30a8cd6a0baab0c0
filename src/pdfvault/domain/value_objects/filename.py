"""Upload filename rules."""

from pathlib import PurePosixPath

from pdfvault.domain.exceptions import InvalidFilename, UnsupportedMediaType

PDF_EXTENSION = ".pdf"
PDF_MEDIA_TYPE = "application/pdf"

_FORBIDDEN_CHARS = ("/", "\\", "\x00")


def repair_filename_encoding(raw: str) -> str:
    """Return the UTF-8 reading of a name whose UTF-8 bytes were read as Latin-1."""
    try:
        return raw.encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return raw


def is_pdf_filename(name: str) -> bool:
    return name.lower().endswith(PDF_EXTENSION)


def is_safe_filename(name: str) -> bool:
    """True when ``name`` names a single entry directly inside a directory."""
    if not name or name in (".", ".."):
        return False
    return not any(ch in name for ch in _FORBIDDEN_CHARS)


def validate_pdf_filename(name: str) -> str:
    """Check an (already repaired) upload filename and return it."""
    if not is_safe_filename(name):
        raise InvalidFilename(f"Filename {name!r} is not allowed")
    if not is_pdf_filename(name):
        raise UnsupportedMediaType("Only PDF files are allowed")
    if not PurePosixPath(name).stem or name.lower() == PDF_EXTENSION:
        raise InvalidFilename(f"Filename {name!r} has no title")
    return name
