"""Byte range value objects (HTTP Range semantics, inclusive bounds)."""

from dataclasses import dataclass

from pdfvault.domain.exceptions import RangeNotSatisfiable


@dataclass(frozen=True)
class ContentRange:
    """Resolved inclusive byte range within a document of known size."""

    start: int
    end: int
    total: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def header_value(self) -> str:
        """Value for the Content-Range response header."""
        return f"bytes {self.start}-{self.end}/{self.total}"


@dataclass(frozen=True)
class ByteRange:
    """Requested byte range.

    ``start`` with optional ``end`` selects ``[start, end]``; ``end`` defaults
    to the last byte. ``suffix_length`` alone selects the last N bytes.
    """

    start: int | None = None
    end: int | None = None
    suffix_length: int | None = None

    def __post_init__(self) -> None:
        if self.suffix_length is None and self.start is None:
            raise ValueError("ByteRange needs start or suffix_length")
        if self.suffix_length is not None and (
            self.start is not None or self.end is not None
        ):
            raise ValueError("suffix_length excludes start and end")

    @classmethod
    def suffix(cls, length: int) -> "ByteRange":
        return cls(suffix_length=length)

    def resolve(self, size: int) -> ContentRange:
        """Clamp against ``size``; raise RangeNotSatisfiable when out of bounds."""
        if self.suffix_length is not None:
            if self.suffix_length <= 0 or size == 0:
                raise RangeNotSatisfiable(
                    f"Suffix range of {self.suffix_length} bytes is not satisfiable",
                    size=size,
                )
            start = max(size - self.suffix_length, 0)
            return ContentRange(start=start, end=size - 1, total=size)

        start = self.start
        end = size - 1 if self.end is None else self.end
        if start < 0 or start > end or end >= size:
            raise RangeNotSatisfiable(
                f"Range {start}-{end} is outside document of {size} bytes",
                size=size,
            )
        return ContentRange(start=start, end=end, total=size)
