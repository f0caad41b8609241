"""Entry point: ``python -m bridge_enrichment``."""

from __future__ import annotations

import uvicorn

from .app import create_app
from .config import EnrichmentConfig
from .logging import setup_logging
from .service import EnrichmentService
from .store import DirectoryAttachmentStore


def main() -> None:
    config = EnrichmentConfig()
    setup_logging(json=config.log_json, level=config.log_level)

    service = EnrichmentService(config)
    store = DirectoryAttachmentStore(config.attachments_root)
    app = create_app(service, store, config)

    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
