"""Verification code detector."""

from __future__ import annotations

from collections.abc import Iterable

from bridge_schema import (
    CodeConfidence,
    DetectedCode,
    EnrichedMessage,
    HighlightType,
    TextHighlight,
)

from ..config import DEFAULT_CODE_CONTEXT_WORDS
from ..text import GraphemeIndex
from .base import BaseProcessor

FORMATTED_CODE_PATTERN = r"\b([A-Z]-?\d{5,8})\b"
NUMERIC_CODE_PATTERN = r"\b(\d{4,8})\b"


class CodeDetector(BaseProcessor):
    """Detect 2FA / verification codes when the text talks about one.

    The text must contain a context word ("code", "otp", "sign in", ...)
    before anything is reported.  Formatted codes such as ``G-582941`` are
    matched first; plain 4-8 digit runs overlapping one of them are skipped.
    Every detection is reported with high confidence.

    ==========================================  =============
    text                                        detected
    ==========================================  =============
    ``Your verification code is 847293``        ``847293``
    ``G-582941 is your Google verification``    ``G-582941``
    ``I have 123456 items``                     nothing
    ``Your code is 123``                        nothing
    ==========================================  =============
    """

    def __init__(
        self,
        context_words: Iterable[str] | None = None,
        *,
        formatted_pattern: str = FORMATTED_CODE_PATTERN,
        numeric_pattern: str = NUMERIC_CODE_PATTERN,
    ) -> None:
        words = DEFAULT_CODE_CONTEXT_WORDS if context_words is None else context_words
        self._context_words = tuple(w.lower() for w in words)
        self._formatted = self._compile(formatted_pattern)
        self._numeric = self._compile(numeric_pattern)

    @property
    def id(self) -> str:
        return "code-detector"

    @property
    def priority(self) -> int:
        return 200

    def process(self, enriched: EnrichedMessage) -> EnrichedMessage:
        text = enriched.text
        if not text or self._formatted is None or self._numeric is None:
            return enriched

        lowered = text.lower()
        if not any(word in lowered for word in self._context_words):
            return enriched

        formatted_spans = [match.span(1) for match in self._formatted.finditer(text)]
        spans = list(formatted_spans)
        for match in self._numeric.finditer(text):
            start, end = match.span(1)
            if any(start < f_end and f_start < end for f_start, f_end in formatted_spans):
                continue
            spans.append((start, end))

        if not spans:
            return enriched

        index = GraphemeIndex(text)
        codes: list[DetectedCode] = []
        highlights: list[TextHighlight] = []
        for start, end in spans:
            value = text[start:end]
            g_start, g_end = index.span(start, end)
            codes.append(DetectedCode(value=value, confidence=CodeConfidence.HIGH))
            highlights.append(TextHighlight(
                text=value,
                start_index=g_start,
                end_index=g_end,
                type=HighlightType.CODE,
            ))

        return enriched.with_codes(codes).with_highlights(highlights)
