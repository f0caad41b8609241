"""@mention extractor."""

from __future__ import annotations

from bridge_schema import EnrichedMessage, HighlightType, Mention, TextHighlight

from ..text import GraphemeIndex
from .base import BaseProcessor

MENTION_PATTERN = r"@(\w+)"


class MentionExtractor(BaseProcessor):
    """Extract ``@`` followed by one or more word characters.

    Mentions are not resolved to a contact: ``resolved_handle`` stays
    ``None``.
    """

    def __init__(self, pattern: str = MENTION_PATTERN) -> None:
        self._pattern = self._compile(pattern)

    @property
    def id(self) -> str:
        return "mention-extractor"

    @property
    def priority(self) -> int:
        return 100

    def process(self, enriched: EnrichedMessage) -> EnrichedMessage:
        text = enriched.text
        if not text or self._pattern is None:
            return enriched

        matches = list(self._pattern.finditer(text))
        if not matches:
            return enriched

        index = GraphemeIndex(text)
        mentions: list[Mention] = []
        highlights: list[TextHighlight] = []
        for match in matches:
            mention = match.group(0)
            g_start, g_end = index.span(*match.span())
            mentions.append(Mention(text=mention))
            highlights.append(TextHighlight(
                text=mention,
                start_index=g_start,
                end_index=g_end,
                type=HighlightType.MENTION,
            ))
        return enriched.with_mentions(mentions).with_highlights(highlights)
