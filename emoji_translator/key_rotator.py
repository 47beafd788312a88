"""Round-robin selection over a fixed list of API credentials."""

from __future__ import annotations

from typing import Iterable


class KeyRotator:
    """
    Hands out credentials in their original order, wrapping around.

    The cursor is shared by every caller. `next()` has no await inside, so
    on a single event loop concurrent requests never see a half-updated
    cursor; they may only observe each other's draws.
    """

    def __init__(self, keys: Iterable[str]) -> None:
        self._keys = tuple(keys)
        if not self._keys:
            raise ValueError("KeyRotator requires at least one credential")
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._keys)

    @property
    def cursor(self) -> int:
        """Index of the credential the next call will return."""
        return self._cursor

    def next(self) -> str:
        key = self._keys[self._cursor]
        self._cursor = (self._cursor + 1) % len(self._keys)
        return key
