#!/usr/bin/env python3
"""Apply the users/sessions schema, reporting failures to Logfire.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py <revision> # upgrade to a revision
"""

import sys
import logfire
from alembic import command
from alembic.config import Config

from invoicely.config import Settings
from invoicely.util.logging import setup_logging
from invoicely.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    target = argv[1] if len(argv) > 1 else "head"

    with logfire.span("run_migrations", target=target, environment=settings.environment):
        try:
            command.upgrade(Config("alembic.ini"), target)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                target=target,
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # The app must not start against a half-migrated schema
            raise

    logfire.info("Database migrated", target=target)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
