from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from vite_bridge.application.vite import Vite
from vite_bridge.infrastructure.config import ViteConfig, get_settings
from vite_bridge.infrastructure.logging import get_logger, setup_logging
from vite_bridge.web.directives import ViteDirectives
from vite_bridge.web.routes import api, pages

logger = get_logger(__name__)


def create_application(
    vite_config: ViteConfig | None = None,
    static_dir: str | None = None,
    configure_logging: bool = True,
) -> FastAPI:
    settings = get_settings()
    config = vite_config or settings.vite

    if configure_logging:
        log_config = settings.logging
        setup_logging(
            level=log_config.level,
            log_file=log_config.file_path,
            structured=log_config.structured,
            enable_console=log_config.console_enabled,
            max_bytes=log_config.max_bytes,
            backup_count=log_config.backup_count,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        vite = await Vite.create(config)
        app.state.vite = vite
        app.state.vite_directives = ViteDirectives(vite)
        logger.info(f"Serving {settings.app.title} with Vite in {vite.mode.value} mode")
        yield

    app = FastAPI(
        title=settings.app.title,
        version=settings.app.version,
        debug=settings.app.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if static_dir:
        # Built assets; in development mode they come from the Vite dev server.
        app.mount("/static", StaticFiles(directory=static_dir, check_dir=False), name="static")

    app.include_router(api.router)
    app.include_router(pages.router)

    return app
