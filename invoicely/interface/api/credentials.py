"""Reading request credentials."""

from fastapi import Request

from invoicely.application.usecase.auth import Credentials
from invoicely.config import AuthSettings
from invoicely.interface.api.cookies import SESSION_COOKIE, decode_session_id

BEARER_PREFIX = "bearer "


def read_credentials(request: Request, settings: AuthSettings) -> Credentials:
    """Collect the bearer token and signed session cookie from a request.

    A session cookie with a bad signature is treated as absent.
    """
    header = request.headers.get("authorization", "")
    token = None
    if header.lower().startswith(BEARER_PREFIX):
        token = header[len(BEARER_PREFIX):].strip() or None

    session_id = decode_session_id(settings, request.cookies.get(SESSION_COOKIE))

    return Credentials(bearer_token=token, session_id=session_id)
