"""Processor chain — runs every registered processor over a message, highest priority first."""

from __future__ import annotations

import threading

import structlog

from bridge_schema import EnrichedMessage, Message

from .base import BaseProcessor

logger = structlog.get_logger()


class ProcessorChain:
    """Ordered registry of message processors.

    Processors run in descending priority; equal priorities keep registration
    order.  Registering the same processor twice runs it twice.

    ``process`` copies the processor list under the lock and runs the copy
    without holding it, so a slow processor never blocks registration or
    other ``process`` calls.
    """

    def __init__(self) -> None:
        self._processors: tuple[BaseProcessor, ...] = ()
        self._lock = threading.Lock()

    def register(self, processor: BaseProcessor) -> None:
        """Add a processor to the chain."""
        with self._lock:
            # sorted() is stable: ties stay in registration order
            self._processors = tuple(
                sorted((*self._processors, processor), key=lambda p: -p.priority)
            )
        logger.info("processor_registered", processor=processor.id, priority=processor.priority)

    def process(self, message: Message) -> EnrichedMessage:
        """Run *message* through every registered processor.

        A processor that raises is logged and skipped; the accumulator from
        before it is kept and later processors still run.
        """
        processors = self.snapshot()

        result = EnrichedMessage.from_message(message)
        for processor in processors:
            try:
                result = processor.process(result)
            except Exception:
                logger.exception(
                    "processor_failed",
                    processor=processor.id,
                    message_id=message.id,
                )
        return result

    def snapshot(self) -> tuple[BaseProcessor, ...]:
        """Registered processors in execution order."""
        with self._lock:
            return self._processors

    @property
    def all(self) -> list[BaseProcessor]:
        return list(self.snapshot())

    def reset(self) -> None:
        """Remove all registered processors."""
        with self._lock:
            self._processors = ()

    def __len__(self) -> int:
        return len(self.snapshot())
