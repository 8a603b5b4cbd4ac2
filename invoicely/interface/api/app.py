"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from invoicely.config import Settings
from invoicely.interface.api.routes import auth, health
from invoicely.interface.error import register_error_handlers
from invoicely.util.di.container import create_container, setup_di
from invoicely.util.observability import instrument_fastapi, instrument_httpx


def create_app(
    container: AsyncContainer | None = None, settings: Settings | None = None
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container, the production container when omitted
        settings: Settings used for CORS, loaded from the environment when omitted
    """
    settings = settings or Settings()

    # Instrument httpx for the calls to Google
    instrument_httpx()

    app_instance = FastAPI(
        title="Invoicely Auth API",
        description="Password and Google sign-in for Invoicely",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    # The frontend sends the session cookie cross-origin
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())

    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
