"""Attachment registry — first-match dispatch of MIME types to handlers."""

from __future__ import annotations

import threading

import structlog

from .base import BaseAttachmentHandler

logger = structlog.get_logger()


class AttachmentRegistry:
    """Registry of attachment handlers, tried in registration order.

    Unlike the processor chain there is no priority: handler families are
    expected not to overlap, so the first registered match wins.  Register
    specific handlers (``image/gif``) before generic ones (``image/*``).
    """

    def __init__(self) -> None:
        self._handlers: tuple[BaseAttachmentHandler, ...] = ()
        self._lock = threading.Lock()

    def register(self, handler: BaseAttachmentHandler) -> None:
        """Append a handler to the registry."""
        with self._lock:
            self._handlers = (*self._handlers, handler)
        logger.info(
            "handler_registered",
            handler=handler.id,
            mime_types=handler.supported_mime_types,
        )

    def lookup(self, mime_type: str) -> BaseAttachmentHandler | None:
        """Return the first handler matching *mime_type*, or ``None``."""
        for handler in self.snapshot():
            if handler.matches(mime_type):
                return handler
        return None

    def snapshot(self) -> tuple[BaseAttachmentHandler, ...]:
        """Registered handlers in registration order."""
        with self._lock:
            return self._handlers

    @property
    def all(self) -> list[BaseAttachmentHandler]:
        return list(self.snapshot())

    @property
    def supported_mime_types(self) -> list[str]:
        """Every registered pattern, in lookup order."""
        return [p for h in self.snapshot() for p in h.supported_mime_types]

    def reset(self) -> None:
        """Remove all registered handlers."""
        with self._lock:
            self._handlers = ()

    def __len__(self) -> int:
        return len(self.snapshot())
