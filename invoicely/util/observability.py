"""Logfire setup and instrumentation.

Services emit structured events and spans straight through logfire:

    logfire.info("Google sign-in completed", user_id=str(user.id))

    with logfire.span("identity_service.resolve", external_id=profile.external_id):
        ...

Attribute values whose keys look like credentials are scrubbed before
export, on top of Logfire's default patterns.
"""

from typing import Literal

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from invoicely.config import Settings

SERVICE_NAME = "invoicely-auth"
SERVICE_VERSION = "0.1.0"

# Added to Logfire's defaults, which already cover passwords, sessions, cookies and JWTs
SCRUB_PATTERNS = ["bearer", "access_token", "oauth_state"]


def _send_mode(settings: Settings) -> bool | Literal["if-token-present"]:
    """Explicit OBSERVABILITY__SEND_TO_LOGFIRE wins, else send when a token exists."""
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return "if-token-present"


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once at process start.

    Without a token everything stays on the console.
    """
    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        token=settings.observability.logfire_token,
        send_to_logfire=_send_mode(settings),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        auth_mode=settings.auth.mode.value,
        has_token=bool(settings.observability.logfire_token),
    )


def instrument_fastapi(app: FastAPI) -> None:
    # Headers carry bearer tokens and session cookies
    logfire.instrument_fastapi(app, capture_headers=False)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Trace outgoing calls, i.e. the token exchange and userinfo calls to Google."""
    logfire.instrument_httpx()
