"""Abstract base class for message processors."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod

import structlog

from bridge_schema import EnrichedMessage

logger = structlog.get_logger()


class BaseProcessor(ABC):
    """Annotate an enriched message with one kind of detected structure.

    Priority ranges used by the built-in processors:

    * 200+    critical detection (verification codes)
    * 100-199 primary enrichment (phone numbers, mentions)
    * 50-99   secondary enrichment (emoji classification)
    * below   post-processing
    """

    @property
    @abstractmethod
    def id(self) -> str:
        """Unique identifier, e.g. ``"code-detector"``."""

    @property
    @abstractmethod
    def priority(self) -> int:
        """Higher values run first."""

    @abstractmethod
    def process(self, enriched: EnrichedMessage) -> EnrichedMessage:
        """Return *enriched* with this processor's findings appended.

        Synchronous and pure: no I/O, no shared state, and the message text
        is never altered.  Return the input unchanged when there is nothing
        to add.
        """

    def _compile(self, pattern: str, flags: int = 0) -> re.Pattern[str] | None:
        """Compile *pattern*, or log and return ``None`` if it is malformed.

        A processor holding a ``None`` pattern behaves as a no-op.
        """
        try:
            return re.compile(pattern, flags)
        except re.error as exc:
            logger.error("processor_pattern_invalid", processor=self.id, pattern=pattern, error=str(exc))
            return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, priority={self.priority})"
