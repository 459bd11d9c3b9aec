"""Perspective Users API — application factory and process bootstrap.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to the {code, message, name} envelope
    - CORS configured from settings (not hardcoded)
    - Settings, logger, store and service are built once in serve() and injected;
      create_app() reads nothing from module state

Design Decisions:
    - Factory over a module-level app: tests build apps around fakes, the
      bootstrap builds one around the real store
    - Store connection opened before the server binds, closed after it drains
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from perspective.api.error_handlers import register_error_handlers
from perspective.api.middleware import SecurityHeadersMiddleware, UnhandledErrorMiddleware
from perspective.api.rest_interface import RestInterface
from perspective.api.routes import health, users
from perspective.config import Settings, load_settings
from perspective.infrastructure.database import MongoDatabase
from perspective.infrastructure.observability import setup_logging
from perspective.infrastructure.user_repository import UserRepository
from perspective.services.user_service import UserService


def create_app(
    settings: Settings,
    user_service: UserService,
    logger: logging.Logger,
    database: MongoDatabase | None = None,
) -> FastAPI:
    """Build the HTTP application around already-constructed collaborators."""
    rest_logger = logger.getChild("presentation.rest")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        rest_logger.info("Perspective API started")
        yield
        rest_logger.info("Perspective API shutting down")

    app = FastAPI(title="Perspective Users API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.user_service = user_service
    app.state.database = database

    # Added innermost first: errors are translated before headers are applied
    app.add_middleware(UnhandledErrorMiddleware, logger=logger)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Range", "X-Current-Page"],
    )

    app.include_router(health.router)
    app.include_router(users.router)

    register_error_handlers(app, logger)
    return app


async def serve(settings: Settings) -> None:
    """Run the service until the server exits, then release the store."""
    logger = setup_logging(settings.log_level, settings.log_format)
    database = MongoDatabase(settings, logger)
    await database.connect()
    interface = None
    try:
        repository = UserRepository(database.collection(), logger)
        await repository.ensure_indexes()
        service = UserService(repository, logger)
        app = create_app(settings, service, logger, database)
        interface = RestInterface(settings, app, logger)
        await interface.start()
        await interface.wait()
    finally:
        try:
            if interface is not None:
                await interface.stop()
        finally:
            await database.close()


def run() -> None:
    """Console entry point."""
    try:
        asyncio.run(serve(load_settings()))
    except KeyboardInterrupt:
        pass
