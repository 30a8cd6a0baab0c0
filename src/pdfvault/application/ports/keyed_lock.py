"""Per-key mutual exclusion port."""

from contextlib import AbstractAsyncContextManager
from typing import Protocol


class KeyedLock(Protocol):
    """Serializes critical sections that share a key."""

    def hold(self, key: str) -> AbstractAsyncContextManager[None]: ...
