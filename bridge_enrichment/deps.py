"""FastAPI dependency-injection helpers."""

from __future__ import annotations

from fastapi import Request

from .config import ThumbnailConfig
from .service import EnrichmentService
from .store import AttachmentStore


def get_service(request: Request) -> EnrichmentService:
    return request.app.state.service


def get_store(request: Request) -> AttachmentStore:
    return request.app.state.store


def get_thumbnail_config(request: Request) -> ThumbnailConfig:
    return request.app.state.config.thumbnail
