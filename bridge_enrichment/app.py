"""FastAPI application factory."""

from __future__ import annotations

import structlog
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from .config import EnrichmentConfig
from .routers.attachments import router as attachments_router
from .routers.messages import router as messages_router
from .service import EnrichmentService
from .store import AttachmentStore

logger = structlog.get_logger()


def create_app(
    service: EnrichmentService,
    store: AttachmentStore,
    config: EnrichmentConfig | None = None,
) -> FastAPI:
    """Build the API around an already-composed service and attachment store."""
    if config is None:
        config = EnrichmentConfig()

    app = FastAPI(title="Message Enrichment Service", version="0.1.0")
    app.state.service = service
    app.state.store = store
    app.state.config = config

    app.include_router(messages_router)
    app.include_router(attachments_router)

    @app.get("/health")
    async def health() -> JSONResponse:
        return JSONResponse({
            "service": "enrichment-service",
            "messages_enriched": service.messages_enriched,
            "thumbnails_generated": service.thumbnails_generated,
            "thumbnails_unavailable": service.thumbnails_unavailable,
            "thumbnails_failed": service.thumbnails_failed,
            "processors": service.processor_ids,
            "supported_mime_types": service.supported_mime_types,
        })

    @app.get("/ready")
    async def ready() -> JSONResponse:
        is_ready = service.is_ready
        return JSONResponse(
            {"ready": is_ready},
            status_code=200 if is_ready else 503,
        )

    logger.info(
        "app_created",
        processors=service.processor_ids,
        supported_mime_types=service.supported_mime_types,
    )
    return app
