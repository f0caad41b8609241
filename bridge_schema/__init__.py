from .attachment import (
    Attachment,
    AttachmentMetadata,
    AttachmentType,
    ThumbnailSize,
)
from .message import (
    CodeConfidence,
    DetectedCode,
    EnrichedMessage,
    HighlightType,
    Mention,
    Message,
    TextHighlight,
)

__all__ = [
    "Attachment",
    "AttachmentMetadata",
    "AttachmentType",
    "CodeConfidence",
    "DetectedCode",
    "EnrichedMessage",
    "HighlightType",
    "Mention",
    "Message",
    "TextHighlight",
    "ThumbnailSize",
]
