"""Module: main."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vetrecords import __version__
from vetrecords.api.api import api_router
from vetrecords.core.config import Settings, settings as default_settings
from vetrecords.core.errors import register_exception_handlers
from vetrecords.core.logging import setup_logging
from vetrecords.db.init_db import init_db
from vetrecords.db.session import build_engine, build_session_factory

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API with its own engine; the process entry point owns it."""
    settings = settings or default_settings
    setup_logging(settings.log_level)

    engine = build_engine(settings.database_url, echo=settings.sql_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(engine)
        yield
        engine.dispose()
        logger.info("Database engine disposed")

    app = FastAPI(title="Vet Records API", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
