from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Response, status

from outfit_draw.auth import AuthPolicy, PasswordAuthService
from outfit_draw.context import AppContext
from outfit_draw.dependencies import (
    SESSION_COOKIE,
    clear_session_cookie,
    get_auth,
    get_context,
    get_current_user_id,
    get_password_auth,
    set_session_cookie,
)
from outfit_draw.schemas import AuthResponse, Credentials, MeResponse, SuccessResponse

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    request: Credentials,
    response: Response,
    auth: PasswordAuthService = Depends(get_password_auth),
    context: AppContext = Depends(get_context),
):
    """
    Create new user account and log it in.

    Error cases:
    - 400: Missing fields
    - 400: Username already exists
    - 500: Database error
    """
    user, session_id = auth.signup(request.username, request.password)
    set_session_cookie(response, context, session_id)
    return AuthResponse(user=user)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: Credentials,
    response: Response,
    auth: PasswordAuthService = Depends(get_password_auth),
    context: AppContext = Depends(get_context),
):
    """
    Authenticate user and create session.

    Returns 401 "Invalid credentials" without saying whether the
    username or the password was wrong.
    """
    user, session_id = auth.login(request.username, request.password)
    set_session_cookie(response, context, session_id)
    return AuthResponse(user=user)


@router.post("/logout", response_model=SuccessResponse)
async def logout(
    response: Response,
    session_id: Optional[str] = Cookie(None, alias=SESSION_COOKIE),
    auth: AuthPolicy = Depends(get_auth),
    context: AppContext = Depends(get_context),
):
    """
    Invalidate session and clear cookie.
    Returns success even if session doesn't exist (idempotent).
    """
    await auth.logout(session_id)
    clear_session_cookie(response, context)
    return SuccessResponse()


@router.get("/me", response_model=MeResponse)
async def me(
    user_id: int = Depends(get_current_user_id),
    auth: PasswordAuthService = Depends(get_password_auth),
):
    """
    Authenticated user's information.
    401 when not logged in, 404 when the session outlived its user.
    """
    return MeResponse(user=auth.get_user(user_id))
