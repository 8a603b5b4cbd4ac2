"""Unit tests for driver error translation."""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from invoicely.domain.error import ConflictError, StoreUnavailableError
from invoicely.persistence.errors import store_errors


def integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO users ...", {}, Exception(message))


class TestStoreErrors:
    @pytest.mark.asyncio
    async def test_email_violation_maps_to_conflict(self):
        with pytest.raises(ConflictError) as exc_info:
            async with store_errors("User"):
                raise integrity_error(
                    'duplicate key value violates unique constraint "uq_users_email"'
                )

        assert exc_info.value.field == "email"

    @pytest.mark.asyncio
    async def test_external_id_violation_maps_to_conflict(self):
        with pytest.raises(ConflictError) as exc_info:
            async with store_errors("User"):
                raise integrity_error(
                    'duplicate key value violates unique constraint "uq_users_external_id"'
                )

        assert exc_info.value.field == "external_id"

    @pytest.mark.asyncio
    async def test_connection_failure_maps_to_unavailable(self):
        with pytest.raises(StoreUnavailableError):
            async with store_errors("Session"):
                raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    @pytest.mark.asyncio
    async def test_timeout_maps_to_unavailable(self):
        with pytest.raises(StoreUnavailableError):
            async with store_errors("Session"):
                raise TimeoutError()

    @pytest.mark.asyncio
    async def test_other_errors_pass_through(self):
        with pytest.raises(KeyError):
            async with store_errors("User"):
                raise KeyError("id")
