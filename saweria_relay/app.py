"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import register_exception_handlers, register_routes
from .core import ALLOWED_CORS_ORIGINS, CLEANUP_INTERVAL_SEC, LOG_LEVEL
from .services import DonationStore, new_store, start_cleanup_scheduler

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: DonationStore = app.state.store
    store.open()
    scheduler = start_cleanup_scheduler(store, CLEANUP_INTERVAL_SEC)
    logger.info("Relay started with %s storage", store.backend)
    try:
        yield
    finally:
        scheduler.shutdown(wait=False)
        store.close()
        logger.info("Relay stopped")


def create_app(store: Optional[DonationStore] = None) -> FastAPI:
    app = FastAPI(title="Saweria Relay", version="1.0.0", lifespan=lifespan)
    app.state.store = store if store is not None else new_store()
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    register_routes(app)
    return app


app = create_app()
