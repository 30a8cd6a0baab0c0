"""Range request header parsing.

Only single byte ranges are served. For a multi-range header the first range
is used and the rest are ignored.
"""

import re

from pdfvault.domain.exceptions import RangeNotSatisfiable
from pdfvault.domain.value_objects import ByteRange

_RANGE_SPEC = re.compile(r"\s*(\d*)\s*-\s*(\d*)\s*")


def parse_range_header(value: str | None) -> ByteRange | None:
    """Parse ``bytes=<start>-<end?>`` or ``bytes=-<suffix>``; None when absent."""
    if value is None or not value.strip():
        return None
    unit, sep, ranges = value.partition("=")
    if not sep or unit.strip().lower() != "bytes":
        raise RangeNotSatisfiable(f"Unsupported range unit in {value!r}")
    match = _RANGE_SPEC.fullmatch(ranges.split(",", 1)[0])
    if not match:
        raise RangeNotSatisfiable(f"Malformed Range header {value!r}")
    start, end = match.groups()
    if start:
        return ByteRange(start=int(start), end=int(end) if end else None)
    if end:
        return ByteRange.suffix(int(end))
    raise RangeNotSatisfiable(f"Range offsets missing in {value!r}")
