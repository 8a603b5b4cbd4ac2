"""Authentication routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request, Response, status
from fastapi.responses import RedirectResponse

from invoicely.application.usecase.auth import (
    AuthenticateUseCase,
    CompleteExternalLoginUseCase,
    GetCurrentUserUseCase,
    InitiateExternalLoginUseCase,
    LoginUseCase,
    LogoutUseCase,
    SignupUseCase,
)
from invoicely.application.usecase.auth.common import AuthResponse
from invoicely.application.usecase.auth.external_login import (
    CompleteExternalLoginRequest,
    InitiateExternalLoginRequest,
)
from invoicely.application.usecase.auth.get_current_user import CurrentUserResponse
from invoicely.application.usecase.auth.login import LoginRequest
from invoicely.application.usecase.auth.logout import LogoutResponse
from invoicely.application.usecase.auth.signup import SignupRequest
from invoicely.config import AuthSettings
from invoicely.interface.api.cookies import (
    SESSION_COOKIE,
    STATE_COOKIE,
    clear_session_cookie,
    clear_state_cookie,
    decode_state,
    set_session_cookie,
    set_state_cookie,
)
from invoicely.interface.api.credentials import read_credentials

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    request: SignupRequest,
    signup_use_case: FromDishka[SignupUseCase],
) -> AuthResponse:
    """Create a password account and return a bearer token.

    Example:
        POST /auth/signup
        {
            "display_name": "alice",
            "email": "alice@example.com",
            "password": "hunter22"
        }
    """
    response = await signup_use_case.execute(request)
    logger.info(f"User signed up: {response.user.id}")
    return response


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    login_use_case: FromDishka[LoginUseCase],
) -> AuthResponse:
    """Log in with email and password and return a bearer token."""
    return await login_use_case.execute(request)


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user(
    request: Request,
    auth_settings: FromDishka[AuthSettings],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
) -> CurrentUserResponse:
    """Return the user behind the bearer token or session cookie.

    Answers 401 when neither credential is valid.
    """
    context = await authenticate_use_case.execute(read_credentials(request, auth_settings))
    return await get_current_user_use_case.execute(context)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    request: Request,
    response: Response,
    auth_settings: FromDishka[AuthSettings],
    logout_use_case: FromDishka[LogoutUseCase],
) -> LogoutResponse:
    """End the session named by the cookie and clear the cookie.

    Bearer tokens cannot be revoked; clients drop them on their side.
    """
    result = await logout_use_case.execute(read_credentials(request, auth_settings))

    # A forged or stale cookie is cleared too
    if result.clear_cookie or request.cookies.get(SESSION_COOKIE):
        clear_session_cookie(response, auth_settings)

    return result


@router.get("/google")
async def google_login(
    auth_settings: FromDishka[AuthSettings],
    initiate_use_case: FromDishka[InitiateExternalLoginUseCase],
) -> RedirectResponse:
    """Redirect the browser to Google's consent screen.

    Answers 503 when Google sign-in is not configured.
    """
    result = await initiate_use_case.execute(InitiateExternalLoginRequest())

    redirect = RedirectResponse(url=result.authorization_url, status_code=status.HTTP_302_FOUND)
    set_state_cookie(redirect, auth_settings, result.state)
    return redirect


@router.get("/google/callback")
async def google_callback(
    request: Request,
    auth_settings: FromDishka[AuthSettings],
    complete_use_case: FromDishka[CompleteExternalLoginUseCase],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> RedirectResponse:
    """Handle Google's redirect and send the browser back to the frontend.

    Example:
        GET /auth/google/callback?code=abc123&state=xyz789

        Redirects to: http://localhost:5173/auth/callback
        Sets cookie: invoicely_session (session mode)
    """
    result = await complete_use_case.execute(
        CompleteExternalLoginRequest(
            code=code,
            state=state,
            expected_state=decode_state(auth_settings, request.cookies.get(STATE_COOKIE)),
            error=error,
        )
    )

    if result.succeeded:
        logger.info("Google sign-in succeeded, redirecting to frontend")
    else:
        logger.warning(f"Google sign-in failed: {result.error}")

    redirect = RedirectResponse(url=result.redirect_url, status_code=status.HTTP_302_FOUND)
    clear_state_cookie(redirect, auth_settings)
    if result.session:
        set_session_cookie(redirect, auth_settings, result.session)
    return redirect
