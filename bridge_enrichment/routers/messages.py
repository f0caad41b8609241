"""Message enrichment endpoints."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from bridge_schema import Message

from ..deps import get_service
from ..service import EnrichmentService

router = APIRouter(prefix="/api/v1/messages", tags=["messages"])


# Plain ``def`` endpoints: FastAPI runs them in its threadpool, keeping the
# CPU-bound chain off the event loop.


@router.post("/enrich")
def enrich_message(
    message: Message,
    service: Annotated[EnrichmentService, Depends(get_service)],
) -> dict[str, Any]:
    """Return *message* with detected codes, highlights, mentions and emoji flag."""
    return service.enrich(message).to_payload()


@router.post("/enrich/batch")
def enrich_messages(
    messages: list[Message],
    service: Annotated[EnrichmentService, Depends(get_service)],
) -> list[dict[str, Any]]:
    """Enrich a page of messages, preserving order."""
    return [enriched.to_payload() for enriched in service.enrich_many(messages)]
