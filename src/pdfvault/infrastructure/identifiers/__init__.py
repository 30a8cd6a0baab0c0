"""Identifier codecs."""

from pdfvault.infrastructure.identifiers.base64_codec import Base64IdentifierCodec

__all__ = ["Base64IdentifierCodec"]
