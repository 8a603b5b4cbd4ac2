"""Signed cookies for the session ID and the OAuth state."""

from itsdangerous import BadSignature, URLSafeTimedSerializer
from starlette.responses import Response

from invoicely.config import AuthSettings
from invoicely.domain.model import Session

SESSION_COOKIE = "invoicely_session"
STATE_COOKIE = "invoicely_oauth_state"

SESSION_SALT = "invoicely-session-v1"
STATE_SALT = "invoicely-oauth-state-v1"

# Time allowed between leaving for Google and coming back
STATE_MAX_AGE_SECONDS = 10 * 60


def _serializer(settings: AuthSettings, salt: str) -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(secret_key=settings.session_secret, salt=salt)


def encode_session_id(settings: AuthSettings, session_id: str) -> str:
    return _serializer(settings, SESSION_SALT).dumps(session_id)


def decode_session_id(settings: AuthSettings, value: str | None) -> str | None:
    """Return the session ID from a cookie value, or None if forged or stale."""
    if not value:
        return None
    try:
        session_id = _serializer(settings, SESSION_SALT).loads(
            value, max_age=settings.session_max_age_seconds
        )
    except BadSignature:
        return None
    return session_id if isinstance(session_id, str) else None


def decode_state(settings: AuthSettings, value: str | None) -> str | None:
    if not value:
        return None
    try:
        state = _serializer(settings, STATE_SALT).loads(
            value, max_age=STATE_MAX_AGE_SECONDS
        )
    except BadSignature:
        return None
    return state if isinstance(state, str) else None


def set_session_cookie(response: Response, settings: AuthSettings, session: Session) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=encode_session_id(settings, session.id),
        max_age=settings.session_max_age_seconds,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response, settings: AuthSettings) -> None:
    response.delete_cookie(
        key=SESSION_COOKIE,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
    )


def set_state_cookie(response: Response, settings: AuthSettings, state: str) -> None:
    response.set_cookie(
        key=STATE_COOKIE,
        value=_serializer(settings, STATE_SALT).dumps(state),
        max_age=STATE_MAX_AGE_SECONDS,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/auth",
    )


def clear_state_cookie(response: Response, settings: AuthSettings) -> None:
    response.delete_cookie(
        key=STATE_COOKIE,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/auth",
    )
