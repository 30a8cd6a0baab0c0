"""Identifier codec port."""

from typing import Protocol


class IdentifierCodec(Protocol):
    """Reversible mapping between filenames and external identifiers."""

    def encode(self, filename: str) -> str: ...

    def decode(self, identifier: str) -> str: ...
