"""Server-side session entity."""

from datetime import datetime

from invoicely.domain.model.common import DomainModel
from invoicely.domain.value import SessionId, UserId


class Session(DomainModel):
    """Session bound to exactly one user, valid until `expires_at`."""

    id: SessionId
    user_id: UserId
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Whether the session is past its expiry window."""
        return now >= self.expires_at
