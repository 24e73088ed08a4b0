from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from chatboard.core.config import Settings, get_settings
from chatboard.core.logging_config import setup_logging
from chatboard.core.utils import client_ip
from chatboard.repositories.json_storage import JSONMessageStore, StorageError
from chatboard.routers import messages as messages_router
from chatboard.services.message_service import MessageService

logger = logging.getLogger(__name__)


class ClientAddressLogMiddleware(BaseHTTPMiddleware):
    """Log the caller address (X-Forwarded-For aware) of every request."""

    async def dispatch(self, request, call_next):
        logger.info("Incoming request from IP: %s", client_ip(request))
        return await call_next(request)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    store: JSONMessageStore = app.state.message_store
    try:
        store.initialize()
    except StorageError:
        logger.exception("Failed to initialize the data file")
    yield


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build a fully configured app; ``app`` below is the one python -m chatboard serves."""
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(title="Chatboard API", lifespan=_lifespan)
    app.state.settings = settings
    app.state.message_store = JSONMessageStore(settings.data_file)
    app.state.message_service = MessageService(app.state.message_store, settings.id_strategy)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(set(settings.cors_origins)),
            allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(ClientAddressLogMiddleware)

    app.include_router(messages_router.router)
    return app


# built with the settings cached at import time
app = create_app()
