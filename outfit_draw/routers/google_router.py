from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Response, status
from fastapi.responses import HTMLResponse, PlainTextResponse

from outfit_draw.auth import AuthPolicy
from outfit_draw.context import AppContext
from outfit_draw.dependencies import (
    SESSION_COOKIE,
    clear_session_cookie,
    get_auth,
    get_context,
    get_google_auth,
    set_session_cookie,
)
from outfit_draw.errors import UpstreamError
from outfit_draw.google_auth import GoogleAuthService
from outfit_draw.schemas import AuthUrlResponse, CurrentUserResponse, SuccessResponse

router = APIRouter(tags=["google-auth"])


@router.get("/api/auth/google/url", response_model=AuthUrlResponse)
async def google_auth_url(auth: GoogleAuthService = Depends(get_google_auth)):
    """Provider consent URL for the login popup."""
    return AuthUrlResponse(url=auth.get_auth_url())


@router.get("/auth/google/callback")
async def google_callback(
    code: Optional[str] = None,
    auth: GoogleAuthService = Depends(get_google_auth),
    context: AppContext = Depends(get_context),
):
    """
    OAuth redirect target.

    On success the page tells the opener window and closes itself.
    Failures are reported as plain text, without retry.
    """
    try:
        _, session_id = await auth.handle_callback(code)
    except UpstreamError as exc:
        return PlainTextResponse(exc.message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    response = HTMLResponse(_CALLBACK_HTML)
    set_session_cookie(response, context, session_id)
    return response


@router.get("/api/user", response_model=CurrentUserResponse)
async def current_user(
    session_id: Optional[str] = Cookie(None, alias=SESSION_COOKIE),
    auth: AuthPolicy = Depends(get_auth),
):
    return CurrentUserResponse(user=auth.current_user(session_id))


@router.post("/api/logout", response_model=SuccessResponse)
async def logout(
    response: Response,
    session_id: Optional[str] = Cookie(None, alias=SESSION_COOKIE),
    auth: AuthPolicy = Depends(get_auth),
    context: AppContext = Depends(get_context),
):
    await auth.logout(session_id)
    clear_session_cookie(response, context)
    return SuccessResponse()


_CALLBACK_HTML = """<html>
  <body>
    <script>
      if (window.opener) {
        window.opener.postMessage({ type: 'OAUTH_AUTH_SUCCESS' }, '*');
        window.close();
      } else {
        window.location.href = '/';
      }
    </script>
    <p>Authentication successful. This window should close automatically.</p>
  </body>
</html>
"""
