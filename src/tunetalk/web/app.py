"""
FastAPI application for TuneTalk.

``create_app`` wires the routers onto an AppServices container; ``main`` is
the ``tunetalk-server`` entry point.
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from tunetalk import __version__
from tunetalk.context import AppServices
from tunetalk.core.config import Config, get_log_file_path, load_config
from tunetalk.core.output import setup_loguru

from .routers import chat, player


def create_app(config: Optional[Config] = None, services: Optional[AppServices] = None) -> FastAPI:
    """Build the FastAPI app.

    Args:
        config: Configuration (loaded from disk when omitted)
        services: Prebuilt services (built from config when omitted)
    """
    if services is None:
        config = config or load_config()
        services = AppServices.create(config)
    config = services.config

    app = FastAPI(title="TuneTalk API", version=__version__)
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.web.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(player.router, prefix="/api", tags=["player"])
    app.include_router(chat.router, prefix="/api", tags=["chat"])

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


def main() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    config = load_config()
    setup_loguru(
        get_log_file_path(config),
        level=config.logging.level,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count,
        console_output=config.logging.console_output,
    )

    app = create_app(config)
    logger.info(f"Starting TuneTalk on {config.web.host}:{config.web.port}")
    uvicorn.run(app, host=config.web.host, port=config.web.port)


if __name__ == "__main__":
    main()
