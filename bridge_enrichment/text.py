"""Grapheme-cluster helpers for highlight offsets.

Pattern matchers report positions in code points, while clients slice text
by user-perceived characters.  ``"👨‍👩‍👧‍👦"`` is seven code points but one
grapheme cluster, so every offset after it would be off by six.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right

import regex

_GRAPHEME = regex.compile(r"\X")


def graphemes(text: str) -> list[str]:
    """Split *text* into extended grapheme clusters."""
    return _GRAPHEME.findall(text)


class GraphemeIndex:
    """Maps code-point offsets of one string to grapheme-cluster offsets."""

    def __init__(self, text: str) -> None:
        self._starts = [m.start() for m in _GRAPHEME.finditer(text)]

    def __len__(self) -> int:
        return len(self._starts)

    def start(self, offset: int) -> int:
        """Cluster index containing code point *offset*."""
        if not self._starts:
            return 0
        return max(bisect_right(self._starts, offset) - 1, 0)

    def end(self, offset: int) -> int:
        """Exclusive cluster index for an exclusive code-point end *offset*.

        An end falling inside a cluster rounds up to include the whole cluster.
        """
        return bisect_left(self._starts, offset)

    def span(self, start: int, end: int) -> tuple[int, int]:
        return self.start(start), self.end(end)
