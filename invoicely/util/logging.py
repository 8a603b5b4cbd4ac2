"""Standard library logging setup.

Route and error-handler modules log through `logging`; services use
logfire directly. When logs are sent to Logfire, stdlib records are
forwarded there as well so both end up in the same trace.
"""

import logging
import sys

import logfire

from invoicely.config import Settings

# Libraries that are chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "uvicorn.access")


def _level_for(settings: Settings) -> int:
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "test":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure the root logger for the current environment.

    Call after `configure_logfire` so the forwarding handler has a
    configured Logfire instance to write to.
    """
    level = _level_for(settings)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.observability.send_to_logfire or settings.observability.logfire_token:
        handlers.append(logfire.LogfireLoggingHandler())

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    logging.getLogger("invoicely").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
