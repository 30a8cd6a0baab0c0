"""PdfVault - PDF document store with HTTP range streaming."""

__version__ = "0.1.0"
