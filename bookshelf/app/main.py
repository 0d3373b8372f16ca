"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from bookshelf.app.lifespan import lifespan
from bookshelf.app.middleware import configure_middleware
from bookshelf.app.router import setup_routers
from bookshelf.core.settings import get_app_settings, get_graphql_settings


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Settings are loaded once and cached via LRU cache.
    """
    app_settings = get_app_settings()

    app = FastAPI(
        title=app_settings.title,
        description=app_settings.description,
        version=app_settings.version,
        openapi_url=app_settings.get_openapi_url(),
        debug=app_settings.debug,
        lifespan=lifespan,
    )

    configure_middleware(app)
    setup_routers(app, get_graphql_settings())

    return app


# Application instance for uvicorn
app = create_app()
