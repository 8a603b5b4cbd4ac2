"""Translation of driver errors into domain errors."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from invoicely.domain.error import ConflictError, StoreUnavailableError


@asynccontextmanager
async def store_errors(resource: str) -> AsyncIterator[None]:
    """Map SQLAlchemy failures for `resource` onto domain errors.

    Uniqueness violations become ConflictError (field taken from the
    violated constraint name). Connection failures and timeouts become
    StoreUnavailableError.
    """
    try:
        yield
    except IntegrityError as e:
        raise ConflictError(resource, _violated_field(e)) from e
    except (
        OperationalError, InterfaceError, PoolTimeoutError, TimeoutError, OSError
    ) as e:
        raise StoreUnavailableError(f"{resource} store unavailable") from e


def _violated_field(error: IntegrityError) -> str:
    message = str(error.orig)
    if "external_id" in message:
        return "external_id"
    if "email" in message:
        return "email"
    return "id"
