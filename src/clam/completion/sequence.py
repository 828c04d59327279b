"""Request sequencing for superseded async results."""

from __future__ import annotations

import itertools


class RequestSequencer:
    """Hands out increasing request numbers and remembers the newest.

    A result is only applied when the number it was issued with is still the
    latest one; anything older was superseded by a later keystroke.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def next(self) -> int:
        self._latest = next(self._counter)
        return self._latest

    def is_current(self, seq: int) -> bool:
        return seq == self._latest

    def invalidate(self) -> None:
        """Supersede whatever is in flight without starting a new request."""
        self.next()
