"""Base64 identifier codec.

Identifiers are URL-safe base64 of the filename's UTF-8 bytes with padding
stripped. Decoding also accepts the standard alphabet with padding, which is
what older clients stored. Over HTTP only the standard identifiers without a
``/`` can reach ``decode``: the router splits the path on ``/`` after the
server has already percent-decoded it, so ``%2F`` does not help either. Such
identifiers must be re-encoded with ``encode``.
"""

import base64
import binascii
import re

from pdfvault.domain.exceptions import InvalidIdentifier
from pdfvault.domain.value_objects import is_safe_filename

_STANDARD_TO_URLSAFE = str.maketrans("+/", "-_")
_URLSAFE_ALPHABET = re.compile(r"[A-Za-z0-9_-]+")

# Non-UTF-8 names from the filesystem survive as surrogates.
_ERRORS = "surrogateescape"


class Base64IdentifierCodec:
    """Reversible filename <-> identifier mapping."""

    def encode(self, filename: str) -> str:
        raw = filename.encode("utf-8", _ERRORS)
        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")

    def decode(self, identifier: str) -> str:
        """Return the filename for ``identifier``.

        Raises InvalidIdentifier for anything that is not base64 or does not
        name a single entry inside a directory.
        """
        text = (identifier or "").strip().translate(_STANDARD_TO_URLSAFE).rstrip("=")
        if not _URLSAFE_ALPHABET.fullmatch(text) or len(text) % 4 == 1:
            raise InvalidIdentifier(f"Malformed identifier {identifier!r}")
        try:
            raw = base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))
        except (binascii.Error, ValueError) as exc:
            raise InvalidIdentifier(f"Malformed identifier {identifier!r}") from exc
        filename = raw.decode("utf-8", _ERRORS)
        if not is_safe_filename(filename):
            raise InvalidIdentifier(f"Identifier {identifier!r} is not a document name")
        return filename
