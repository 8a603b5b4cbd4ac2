#!/usr/bin/env python3
"""Start the FastAPI application with Logfire error tracking for startup errors."""

import sys
import logfire
import uvicorn

from invoicely.config import Settings
from invoicely.util.logging import setup_logging
from invoicely.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Logfire first, stdlib logging forwards into it
    configure_logfire(settings)
    setup_logging(settings)

    try:
        logfire.info(
            "Starting Invoicely auth API",
            auth_mode=settings.auth.mode.value,
            google_sign_in=settings.auth.google.enabled,
        )

        uvicorn.run(
            "invoicely.interface.api.app:app",
            host=settings.host if settings.host != "localhost" else "0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
