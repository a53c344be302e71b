from typing import Optional

from fastapi import Cookie, Depends, Request, Response

from outfit_draw.auth import AuthPolicy, PasswordAuthService
from outfit_draw.context import AppContext
from outfit_draw.errors import AuthError
from outfit_draw.google_auth import GoogleAuthService
from outfit_draw.records import RecordStore

SESSION_COOKIE = "session_id"


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_auth(context: AppContext = Depends(get_context)) -> AuthPolicy:
    return context.auth


def get_password_auth(context: AppContext = Depends(get_context)) -> PasswordAuthService:
    if not isinstance(context.auth, PasswordAuthService):
        raise RuntimeError("Password auth is not enabled")
    return context.auth


def get_google_auth(context: AppContext = Depends(get_context)) -> GoogleAuthService:
    if not isinstance(context.auth, GoogleAuthService):
        raise RuntimeError("Google auth is not enabled")
    return context.auth


def get_record_store(context: AppContext = Depends(get_context)) -> RecordStore:
    if context.records is None:
        raise RuntimeError("Record store is not enabled")
    return context.records


def get_current_user_id(
    session_id: Optional[str] = Cookie(None, alias=SESSION_COOKIE),
    auth: PasswordAuthService = Depends(get_password_auth),
) -> int:
    """
    Resolve the session cookie to a user id.

    Raises AuthError (401) when the cookie is missing, unknown or expired.
    The request body is never consulted.
    """
    user_id = auth.session_user_id(session_id)
    if user_id is None:
        raise AuthError("Not logged in")
    return user_id


def set_session_cookie(response: Response, context: AppContext, session_id: str) -> None:
    """
    Set the session cookie. It only carries the opaque token; user data
    stays server-side.
    """
    response.set_cookie(
        key=SESSION_COOKIE,
        value=session_id,
        max_age=context.settings.session_expire_hours * 3600,
        **context.settings.session_cookie_params(),
    )


def clear_session_cookie(response: Response, context: AppContext) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value="",
        max_age=0,
        **context.settings.session_cookie_params(),
    )
