"""
Main entrypoint for the Marketplace API.

This module assembles the FastAPI application: it sets up logging,
builds the product store, service and gateway, and includes the
catch-all router that forwards every request to the gateway.  The
application is instantiated at module import time as ``app``, so it
can be served directly::

    uvicorn marketplace_api.app.main:app --reload
"""

import contextlib
from typing import Optional

from fastapi import FastAPI

from .core.config import settings
from .core.logging_config import setup_logging
from .api.endpoints import router
from .api.gateway import HttpGateway
from .services.product_service import ProductService
from .services.product_store import ProductStore


def create_app(store: Optional[ProductStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[ProductStore]
        Store backing the product handlers.  Defaults to a store on
        ``settings.database_url``.

    Returns
    -------
    FastAPI
        A configured FastAPI instance ready to be served.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    store = store or ProductStore(settings.database_url)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        # Creates the database file on first start and applies migrations.
        store.init_db()
        yield

    # OpenAPI pages would shadow part of the catch-all route, so they
    # are only served in debug mode.
    docs_kwargs = {} if settings.debug else {"docs_url": None, "redoc_url": None, "openapi_url": None}
    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        lifespan=lifespan,
        **docs_kwargs,
    )
    app.state.gateway = HttpGateway(ProductService(store))
    app.include_router(router)
    return app


app = create_app()
