"""Phone number detector backed by libphonenumber."""

from __future__ import annotations

import phonenumbers
import structlog
from phonenumbers import Leniency, PhoneNumberMatcher

from bridge_schema import EnrichedMessage, HighlightType, TextHighlight

from ..text import GraphemeIndex
from .base import BaseProcessor

logger = structlog.get_logger()

_LENIENCIES = {
    "possible": Leniency.POSSIBLE,
    "valid": Leniency.VALID,
    "strict_grouping": Leniency.STRICT_GROUPING,
    "exact_grouping": Leniency.EXACT_GROUPING,
}


class PhoneNumberDetector(BaseProcessor):
    """Highlight phone numbers in US, international and bracketed formats.

    Numbers written without a country code are interpreted in *region*.
    Only highlights are produced; no codes or mentions.
    """

    def __init__(self, region: str = "US", leniency: str = "possible") -> None:
        try:
            self._leniency = _LENIENCIES[leniency.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown phone leniency {leniency!r}; expected one of {sorted(_LENIENCIES)}"
            ) from None
        self._region = region.upper()
        if self._region not in phonenumbers.SUPPORTED_REGIONS:
            logger.warning("phone_region_unsupported", region=self._region)

    @property
    def id(self) -> str:
        return "phone-number-detector"

    @property
    def priority(self) -> int:
        return 150

    @property
    def region(self) -> str:
        return self._region

    def process(self, enriched: EnrichedMessage) -> EnrichedMessage:
        text = enriched.text
        if not text:
            return enriched

        matches = list(PhoneNumberMatcher(text, self._region, leniency=self._leniency))
        if not matches:
            return enriched

        index = GraphemeIndex(text)
        highlights = []
        for match in matches:
            g_start, g_end = index.span(match.start, match.end)
            highlights.append(TextHighlight(
                text=match.raw_string,
                start_index=g_start,
                end_index=g_end,
                type=HighlightType.PHONE_NUMBER,
            ))
        return enriched.with_highlights(highlights)
