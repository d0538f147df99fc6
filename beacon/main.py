import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from beacon.api.http import (
    health_router, pages_router, theme_router, storage_router, exchange_router
)
from beacon.core.logging import setup_logging
from beacon.core.workspace import Workspace

logger = logging.getLogger(__name__)


def create_app(workspace: Optional[Workspace] = None, autosave: bool = True) -> FastAPI:
    """Сборка приложения с явно созданным workspace"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        current = workspace or Workspace()
        setup_logging(current.config.log_level)
        app.state.workspace = current

        await current.start(autosave=autosave)
        logger.info("Beacon started")
        try:
            yield
        finally:
            # Финальное сохранение до выхода процесса
            await current.stop()
            logger.info("Beacon stopped")

    app = FastAPI(
        title="Beacon",
        description="Local-first document editor core",
        version="1.0.0",
        lifespan=lifespan
    )

    # UI работает локально, поэтому ограничения по источникам не нужны
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Подключаем роутеры
    app.include_router(health_router)
    app.include_router(pages_router)
    app.include_router(theme_router)
    app.include_router(storage_router)
    app.include_router(exchange_router)

    @app.get("/")
    async def root():
        """Корневой эндпоинт"""
        return {
            "message": "Beacon API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/health"
        }

    return app


app = create_app()
