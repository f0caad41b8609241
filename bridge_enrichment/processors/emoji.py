"""Emoji-only message classifier."""

from __future__ import annotations

import emoji

from bridge_schema import EnrichedMessage

from ..text import graphemes
from .base import BaseProcessor

# Single code points at or below this have an emoji presentation but read as
# ordinary symbols (©, ®, ™, ‼, ...).
_SYMBOL_CEILING = 0x238C


def is_emoji_grapheme(cluster: str) -> bool:
    """True if one grapheme cluster renders as an emoji.

    Covers skin-tone modifiers, ZWJ sequences, flags and keycaps, which are
    all single clusters.
    """
    if not emoji.is_emoji(cluster):
        return False
    return len(cluster) > 1 or ord(cluster) > _SYMBOL_CEILING


class EmojiEnlarger(BaseProcessor):
    """Flag short emoji-only messages for enlarged display.

    Sets ``is_emoji_only`` when the trimmed text consists of 1 to
    *max_count* emoji and nothing else.  Longer runs of emoji are treated as
    regular text.
    """

    def __init__(self, max_count: int = 5) -> None:
        self._max_count = max_count

    @property
    def id(self) -> str:
        return "emoji-enlarger"

    @property
    def priority(self) -> int:
        return 50

    def process(self, enriched: EnrichedMessage) -> EnrichedMessage:
        text = enriched.text
        if text is None:
            return enriched

        clusters = graphemes(text.strip())
        is_emoji_only = (
            0 < len(clusters) <= self._max_count
            and all(is_emoji_grapheme(c) for c in clusters)
        )
        return enriched.model_copy(update={"is_emoji_only": is_emoji_only})
