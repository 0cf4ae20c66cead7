"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import cart, deliveries, delivery, health
from .config import Settings, settings
from .persistence.storage import KeyValueStore, build_store
from .services.delivery import DeliveryOrderService

logger = logging.getLogger(__name__)


def create_app(store: Optional[KeyValueStore] = None, config: Settings = settings) -> FastAPI:
    state_store = store if store is not None else build_store(config)

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        await app.state.deliveries.load()
        logger.info(f"Loaded {len(app.state.deliveries.orders)} delivery orders from {type(state_store).__name__}")
        yield

    app = FastAPI(title=config.app_name, lifespan=_lifespan)
    app.state.store = state_store
    app.state.deliveries = DeliveryOrderService(state_store)

    if config.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(config.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/")
    def root():
        return {
            "service": config.app_name,
            "status": "running",
            "api_prefix": config.api_prefix,
            "health": f"{config.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=config.api_prefix)
    app.include_router(delivery.router, prefix=config.api_prefix)
    app.include_router(cart.router, prefix=config.api_prefix)
    app.include_router(deliveries.router, prefix=config.api_prefix)
    return app


app = create_app()
