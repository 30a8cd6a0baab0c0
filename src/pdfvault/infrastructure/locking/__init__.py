"""Locking adapters."""

from pdfvault.infrastructure.locking.keyed_lock import AsyncKeyedLock

__all__ = ["AsyncKeyedLock"]
