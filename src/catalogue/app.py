from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from .config import CatalogueSettings, get_settings
from .errors import CatalogueError, NotFound
from .logging import get_logger
from .middleware import setup_middleware
from .repository.store import ProductStore
from .routes import health, products, search
from .services.catalogue import CatalogueService
from .state import ConnectionStateCell
from .supervisor import ConnectionSupervisor

logger = get_logger("catalogue.api")


async def handle_catalogue_error(request: Request, exc: CatalogueError) -> PlainTextResponse:
    log = logger.bind(
        method=request.method,
        path=request.url.path,
        status_code=exc.status_code,
        error_type=exc.error_type,
        **exc.context,
    )
    if isinstance(exc, NotFound):
        log.warning("request_failed")
    elif exc.__cause__ is not None:
        log.error("request_failed", error=repr(exc.__cause__), exc_info=exc.__cause__)
    else:
        log.error("request_failed")
    # Underlying causes stay in the logs
    return PlainTextResponse(exc.public_message, status_code=exc.status_code)


def create_app(
    store: Optional[ProductStore] = None,
    *,
    supervisor: Optional[ConnectionSupervisor] = None,
    settings: Optional[CatalogueSettings] = None,
) -> FastAPI:
    """Build the Catalogue Service application.

    With ``store`` the application starts out connected to it and no
    supervisor runs. Otherwise a :class:`ConnectionSupervisor` (the given
    one, or a MongoDB one built from settings) connects in the background
    once the application starts.
    """

    settings = settings or get_settings()

    if store is not None:
        cell = ConnectionStateCell()
        cell.bind(store)
        supervisor = None
    else:
        if supervisor is None:
            supervisor = ConnectionSupervisor(ConnectionStateCell(), settings=settings)
        cell = supervisor.cell

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("catalogue_startup", service=settings.service_name, connected=cell.connected)
        if supervisor is not None:
            supervisor.start(settings.mongo_url)
        try:
            yield
        finally:
            if supervisor is not None:
                await supervisor.stop()
            logger.info("catalogue_shutdown")

    app = FastAPI(title="Catalogue Service", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.connection = cell
    app.state.supervisor = supervisor
    app.state.catalogue = CatalogueService(cell)

    app.add_exception_handler(CatalogueError, handle_catalogue_error)
    setup_middleware(app)

    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(search.router)

    return app


__all__ = ["create_app", "handle_catalogue_error"]
