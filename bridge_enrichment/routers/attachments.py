"""Attachment thumbnail and metadata endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from bridge_schema import Attachment, AttachmentMetadata, ThumbnailSize

from ..config import ThumbnailConfig
from ..deps import get_service, get_store, get_thumbnail_config
from ..errors import ThumbnailUnavailableError, UnsupportedAttachmentError
from ..service import EnrichmentService
from ..store import AttachmentStore

router = APIRouter(prefix="/api/v1/attachments", tags=["attachments"])


def _get_attachment(attachment_id: str, store: AttachmentStore) -> Attachment:
    attachment = store.get(attachment_id)
    if attachment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Attachment not found")
    return attachment


@router.get("/{attachment_id:path}/thumbnail")
async def get_thumbnail(
    attachment_id: str,
    service: Annotated[EnrichmentService, Depends(get_service)],
    store: Annotated[AttachmentStore, Depends(get_store)],
    config: Annotated[ThumbnailConfig, Depends(get_thumbnail_config)],
    width: int | None = Query(default=None, ge=1, le=2048),
    height: int | None = Query(default=None, ge=1, le=2048),
) -> Response:
    """JPEG thumbnail bounded by ``width`` x ``height``.

    Thumbnails for a given attachment and size never change, so responses
    are marked immutable and cacheable.
    """
    attachment = _get_attachment(attachment_id, store)
    size = ThumbnailSize(
        width=width or config.max_width,
        height=height or config.max_height,
    )

    try:
        data = await service.thumbnail(attachment, size)
    except UnsupportedAttachmentError as exc:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=str(exc),
        )
    except ThumbnailUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Thumbnail unavailable: {exc.reason}",
        )

    if data is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No preview available")

    return Response(
        content=data,
        media_type="image/jpeg",
        headers={"Cache-Control": f"public, max-age={config.cache_max_age_seconds}, immutable"},
    )


@router.get("/{attachment_id:path}/metadata", response_model=AttachmentMetadata)
async def get_metadata(
    attachment_id: str,
    service: Annotated[EnrichmentService, Depends(get_service)],
    store: Annotated[AttachmentStore, Depends(get_store)],
):
    """Dimensions and duration of the attachment."""
    attachment = _get_attachment(attachment_id, store)
    try:
        return await service.metadata(attachment)
    except UnsupportedAttachmentError as exc:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=str(exc),
        )
