"""Allocation of stream session ids."""

from __future__ import annotations

__all__ = ["SessionIdAllocator"]

_UINT32_MASK = 0xFFFFFFFF
_STEP = 2


class SessionIdAllocator:
    """Hands out session ids in steps of two.

    A client allocator starts at 3 and stays odd; a server allocator starts
    at 2 and stays even.
    """

    def __init__(self, client: bool = True) -> None:
        self._start = 1 if client else 0
        self._index: int | None = None

    def _initialise(self) -> int:
        if self._index is None:
            self._index = self._start
        self._index = (self._index + _STEP) & _UINT32_MASK
        return self._index

    def current(self) -> int:
        """Return the latest id, allocating the first one if none exists."""
        if self._index is None:
            return self._initialise()
        return self._index

    def next(self) -> int:
        """Allocate and return a new id."""
        if self._index is None:
            return self._initialise()
        self._index = (self._index + _STEP) & _UINT32_MASK
        return self._index