"""Conflict policies for ingesting a filename that already exists."""

from enum import StrEnum


class ConflictPolicy(StrEnum):
    """What Ingest does when the target filename is taken."""

    OVERWRITE = "overwrite"
    REJECT = "reject"
    RENAME = "rename"
