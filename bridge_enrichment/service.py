"""EnrichmentService — compose the processor chain and attachment registry behind one entry point."""

from __future__ import annotations

import asyncio
import mimetypes
from collections.abc import Iterable

import structlog

from bridge_schema import (
    Attachment,
    AttachmentMetadata,
    EnrichedMessage,
    Message,
    ThumbnailSize,
)

from .attachments import AttachmentRegistry, BaseAttachmentHandler, ImageHandler, VideoHandler
from .config import EnrichmentConfig, ProcessorConfig, ThumbnailConfig
from .errors import ThumbnailUnavailableError, UnsupportedAttachmentError
from .processors import (
    CodeDetector,
    EmojiEnlarger,
    MentionExtractor,
    PhoneNumberDetector,
    ProcessorChain,
)

logger = structlog.get_logger()


def build_processor_chain(config: ProcessorConfig) -> ProcessorChain:
    """Create a chain with the built-in processors registered."""
    chain = ProcessorChain()
    chain.register(CodeDetector(config.code_context_words))
    chain.register(PhoneNumberDetector(config.phone_region, config.phone_leniency))
    chain.register(MentionExtractor())
    chain.register(EmojiEnlarger(config.emoji_max_count))
    return chain


def build_attachment_registry(config: ThumbnailConfig) -> AttachmentRegistry:
    """Create a registry with the built-in handlers registered."""
    registry = AttachmentRegistry()
    registry.register(ImageHandler(quality=config.quality, allow_upscale=config.allow_upscale))
    registry.register(VideoHandler(quality=config.quality))
    return registry


class EnrichmentService:
    """Enrich messages and render attachment previews.

    One instance is built at startup and passed to whatever needs it; the
    chain and registry can be injected for tests.
    """

    def __init__(
        self,
        config: EnrichmentConfig,
        *,
        chain: ProcessorChain | None = None,
        registry: AttachmentRegistry | None = None,
    ) -> None:
        self._config = config
        self._chain = chain if chain is not None else build_processor_chain(config.processors)
        self._registry = registry if registry is not None else build_attachment_registry(config.thumbnail)

        self._messages_enriched: int = 0
        self._thumbnails_generated: int = 0
        self._thumbnails_unavailable: int = 0
        self._thumbnails_failed: int = 0

    # ------------------------------------------------------------------
    # Public properties (used by health checks)
    # ------------------------------------------------------------------

    @property
    def chain(self) -> ProcessorChain:
        return self._chain

    @property
    def registry(self) -> AttachmentRegistry:
        return self._registry

    @property
    def messages_enriched(self) -> int:
        return self._messages_enriched

    @property
    def thumbnails_generated(self) -> int:
        return self._thumbnails_generated

    @property
    def thumbnails_unavailable(self) -> int:
        return self._thumbnails_unavailable

    @property
    def thumbnails_failed(self) -> int:
        return self._thumbnails_failed

    @property
    def processor_ids(self) -> list[str]:
        return [p.id for p in self._chain.snapshot()]

    @property
    def supported_mime_types(self) -> list[str]:
        return self._registry.supported_mime_types

    @property
    def is_ready(self) -> bool:
        return len(self._chain) > 0 and len(self._registry) > 0

    @property
    def default_thumbnail_size(self) -> ThumbnailSize:
        return self._config.thumbnail.default_size

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def enrich(self, message: Message) -> EnrichedMessage:
        """Run *message* through the processor chain."""
        enriched = self._chain.process(message)
        self._messages_enriched += 1
        return enriched

    def enrich_many(self, messages: Iterable[Message]) -> list[EnrichedMessage]:
        return [self.enrich(message) for message in messages]

    # ------------------------------------------------------------------
    # Attachments
    # ------------------------------------------------------------------

    def resolve_handler(self, attachment: Attachment) -> BaseAttachmentHandler:
        """Find the handler for *attachment* or raise :class:`UnsupportedAttachmentError`."""
        mime_type = self.resolve_mime_type(attachment)
        handler = self._registry.lookup(mime_type) if mime_type else None
        if handler is None:
            logger.info("no_attachment_handler", attachment_id=attachment.id, mime_type=mime_type)
            raise UnsupportedAttachmentError(mime_type)
        return handler

    @staticmethod
    def resolve_mime_type(attachment: Attachment) -> str | None:
        """Declared MIME type, else a guess from the filename or path."""
        if attachment.mime_type:
            return attachment.mime_type
        guessed, _ = mimetypes.guess_type(attachment.filename or attachment.file_path)
        return guessed

    async def thumbnail(
        self,
        attachment: Attachment,
        max_size: ThumbnailSize | None = None,
    ) -> bytes | None:
        """Render a JPEG thumbnail for *attachment*.

        Returns ``None`` when the handler found nothing renderable or the
        call exceeded the configured timeout.  Raises
        :class:`UnsupportedAttachmentError` when no handler applies; handler
        faults propagate.
        """
        handler = self.resolve_handler(attachment)
        size = max_size or self.default_thumbnail_size

        try:
            data = await asyncio.wait_for(
                handler.generate_thumbnail(attachment.file_path, size),
                timeout=self._config.thumbnail.timeout_seconds,
            )
        except TimeoutError:
            logger.warning(
                "thumbnail_timeout",
                attachment_id=attachment.id,
                handler=handler.id,
                timeout_seconds=self._config.thumbnail.timeout_seconds,
            )
            self._thumbnails_unavailable += 1
            return None
        except ThumbnailUnavailableError as exc:
            logger.info("thumbnail_unavailable", attachment_id=attachment.id, reason=exc.reason)
            self._thumbnails_unavailable += 1
            raise
        except Exception:
            logger.exception("thumbnail_failed", attachment_id=attachment.id, handler=handler.id)
            self._thumbnails_failed += 1
            raise

        if data is None:
            self._thumbnails_unavailable += 1
            logger.info("thumbnail_empty", attachment_id=attachment.id, handler=handler.id)
            return None

        self._thumbnails_generated += 1
        logger.debug(
            "thumbnail_generated",
            attachment_id=attachment.id,
            handler=handler.id,
            bytes=len(data),
        )
        return data

    async def metadata(self, attachment: Attachment) -> AttachmentMetadata:
        """Extract metadata for *attachment* with its handler."""
        handler = self.resolve_handler(attachment)
        try:
            return await asyncio.wait_for(
                handler.extract_metadata(attachment.file_path),
                timeout=self._config.thumbnail.timeout_seconds,
            )
        except TimeoutError:
            logger.warning("metadata_timeout", attachment_id=attachment.id, handler=handler.id)
            return AttachmentMetadata()
