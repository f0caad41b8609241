"""Message enrichment service — annotate chat messages and preview their attachments."""

from .attachments import AttachmentRegistry, ImageHandler, VideoHandler
from .logging import setup_logging
from .processors import ProcessorChain
from .service import EnrichmentService

__all__ = [
    "AttachmentRegistry",
    "EnrichmentService",
    "ImageHandler",
    "ProcessorChain",
    "VideoHandler",
    "setup_logging",
]
