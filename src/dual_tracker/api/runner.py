#!/usr/bin/env python3
"""FastAPI server runner."""

import uvicorn
import structlog

from dual_tracker.config.loader import load_config
from dual_tracker.logging.setup import configure_logging

logger = structlog.get_logger("api_runner")


def main(config_path: str | None = None) -> None:
    """Run the FastAPI server built from the config at *config_path*."""
    config = load_config(config_path)
    configure_logging(config.logging, component="api")

    from dual_tracker.api.app import create_app

    app = create_app(config)
    logger.info(
        "Starting FastAPI server",
        host=config.api.host,
        port=config.api.port,
        stable_assets=config.assets.stable_assets,
    )

    try:
        uvicorn.run(
            app,
            host=config.api.host,
            port=config.api.port,
            log_config=None  # Use our structlog setup
        )
    except Exception as e:
        logger.error("Failed to start server", error=str(e))
        raise


if __name__ == "__main__":
    main()
