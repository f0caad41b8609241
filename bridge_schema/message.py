"""Message schema — stored messages and the enrichment accumulator built from them."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Message(BaseModel):
    """A stored message as supplied by the persistence layer.

    Read-only input to the enrichment chain; processors never modify it.
    """

    model_config = {"frozen": True}

    id: int = Field(description="Row identifier of the message")
    guid: str | None = Field(default=None, description="Globally unique message identifier")
    text: str | None = Field(
        default=None,
        description="Text body (null for attachment-only messages and reactions)",
    )
    date: datetime = Field(description="When the message was sent")
    is_from_me: bool = Field(default=False, description="True for outgoing messages")
    conversation_id: str = Field(description="Conversation the message belongs to")
    handle_id: int | None = Field(default=None, description="Sender handle, if known")

    @property
    def has_text(self) -> bool:
        return bool(self.text)


class CodeConfidence(str, Enum):
    """How sure a detector is that a token is a verification code."""

    HIGH = "high"  # context word + code pattern
    MEDIUM = "medium"  # code pattern only; no detector emits this yet


class DetectedCode(BaseModel):
    """A verification / 2FA code found in message text."""

    value: str = Field(description="The code as it appears in the text (e.g. 123456, G-582941)")
    confidence: CodeConfidence


class HighlightType(str, Enum):
    """Kinds of highlighted regions rendered by clients."""

    CODE = "code"
    PHONE_NUMBER = "phoneNumber"
    MENTION = "mention"


class TextHighlight(BaseModel):
    """A highlighted region of the message text.

    ``start_index`` and ``end_index`` count grapheme clusters (user-perceived
    characters), so a client can slice the displayed string directly.
    ``end_index`` is exclusive.
    """

    text: str
    start_index: int = Field(ge=0)
    end_index: int = Field(ge=0)
    type: HighlightType


class Mention(BaseModel):
    """An @mention in message text."""

    text: str = Field(description="Mention including the @ sign (e.g. @john)")
    resolved_handle: str | None = Field(
        default=None,
        description="Phone number or email the mention resolves to (never resolved here)",
    )


class EnrichedMessage(BaseModel):
    """Accumulator threaded through the processor chain.

    Wraps the original message by value.  Processors only append to the list
    fields or set ``is_emoji_only``; nothing added by an earlier processor is
    ever removed.
    """

    message: Message
    detected_codes: list[DetectedCode] = Field(default_factory=list)
    highlights: list[TextHighlight] = Field(default_factory=list)
    mentions: list[Mention] = Field(default_factory=list)
    is_emoji_only: bool = False

    @classmethod
    def from_message(cls, message: Message) -> EnrichedMessage:
        return cls(message=message)

    # ------------------------------------------------------------------
    # Accumulation helpers (return a new accumulator)
    # ------------------------------------------------------------------

    def with_codes(self, codes: list[DetectedCode]) -> EnrichedMessage:
        return self.model_copy(update={"detected_codes": [*self.detected_codes, *codes]})

    def with_highlights(self, highlights: list[TextHighlight]) -> EnrichedMessage:
        return self.model_copy(update={"highlights": [*self.highlights, *highlights]})

    def with_mentions(self, mentions: list[Mention]) -> EnrichedMessage:
        return self.model_copy(update={"mentions": [*self.mentions, *mentions]})

    # ------------------------------------------------------------------
    # Forwarding accessors
    # ------------------------------------------------------------------

    @property
    def id(self) -> int:
        return self.message.id

    @property
    def text(self) -> str | None:
        return self.message.text

    @property
    def conversation_id(self) -> str:
        return self.message.conversation_id

    @property
    def date(self) -> datetime:
        return self.message.date

    @property
    def is_from_me(self) -> bool:
        return self.message.is_from_me

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_payload(self) -> dict[str, Any]:
        """Serialize as the original message fields plus every enrichment field.

        Enrichment keys are always present, defaulting to empty lists and
        ``False``, so consumers can treat the payload as a strict superset of
        a plain message.
        """
        payload = self.message.model_dump(mode="json")
        payload.update(self.model_dump(mode="json", exclude={"message"}))
        return payload
