"""Google OAuth login with sessions held in process memory."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol

import httpx

from outfit_draw.auth import generate_session_id
from outfit_draw.errors import UpstreamError
from outfit_draw.schemas import GoogleProfile

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"
SCOPES = (
    "https://www.googleapis.com/auth/userinfo.profile",
    "https://www.googleapis.com/auth/userinfo.email",
)


class GoogleOAuthClient(Protocol):
    """Interface for the identity provider calls."""

    def authorization_url(self, redirect_uri: str) -> str:
        """Build the consent screen URL."""

    async def exchange_code(self, code: str, redirect_uri: str) -> dict:
        """Exchange an authorization code for tokens."""

    async def fetch_userinfo(self, access_token: str) -> dict:
        """Return the userinfo document for the token owner."""


@dataclass
class HttpxGoogleOAuthClient:
    """Google OAuth client implemented with httpx."""

    client_id: str
    client_secret: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, client_id: str, client_secret: str) -> "HttpxGoogleOAuthClient":
        """Create a client with a managed httpx session."""
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            http_client=httpx.AsyncClient(),
        )

    def authorization_url(self, redirect_uri: str) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "access_type": "offline",
            "scope": " ".join(SCOPES),
        }
        return str(httpx.URL(AUTHORIZE_URL, params=params))

    async def exchange_code(self, code: str, redirect_uri: str) -> dict:
        response = await self.http_client.post(
            TOKEN_URL,
            data={
                "code": code,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "redirect_uri": redirect_uri,
                "grant_type": "authorization_code",
            },
            timeout=10,
        )
        response.raise_for_status()
        return response.json()

    async def fetch_userinfo(self, access_token: str) -> dict:
        response = await self.http_client.get(
            USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=10,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()


@dataclass
class _StoredSession:
    profile: GoogleProfile
    expires_at: datetime


@dataclass
class MemorySessionStore:
    """
    Token -> profile map with a fixed lifetime.

    Expired entries are dropped when they are looked up. Contents do not
    survive a restart.
    """

    expire_hours: int = 24
    sessions: dict[str, _StoredSession] = field(default_factory=dict)

    def create(self, profile: GoogleProfile) -> str:
        session_id = generate_session_id()
        self.sessions[session_id] = _StoredSession(
            profile=profile,
            expires_at=datetime.now(timezone.utc) + timedelta(hours=self.expire_hours),
        )
        return session_id

    def get(self, session_id: str) -> Optional[GoogleProfile]:
        stored = self.sessions.get(session_id)
        if stored is None:
            return None
        if stored.expires_at <= datetime.now(timezone.utc):
            del self.sessions[session_id]
            return None
        return stored.profile

    def destroy(self, session_id: str) -> bool:
        return self.sessions.pop(session_id, None) is not None


@dataclass
class GoogleAuthService:
    """Federated login: provider round trip, then an in-memory session."""

    oauth_client: GoogleOAuthClient
    redirect_uri: str
    store: MemorySessionStore = field(default_factory=MemorySessionStore)

    def get_auth_url(self) -> str:
        return self.oauth_client.authorization_url(self.redirect_uri)

    async def handle_callback(self, code: Optional[str]) -> tuple[GoogleProfile, str]:
        """
        Finish the OAuth flow for an authorization code.

        Raises UpstreamError if the code exchange or the profile fetch fails.
        Returns the profile and the new session id.
        """
        if not code:
            raise UpstreamError("Authentication failed")
        try:
            tokens = await self.oauth_client.exchange_code(code, self.redirect_uri)
            userinfo = await self.oauth_client.fetch_userinfo(tokens["access_token"])
            profile = GoogleProfile(
                id=userinfo["sub"],
                name=userinfo.get("name", ""),
                email=userinfo.get("email", ""),
                picture=userinfo.get("picture", ""),
            )
        except (httpx.HTTPError, KeyError, ValueError):
            logger.exception("Error during Google OAuth callback")
            raise UpstreamError("Authentication failed")

        session_id = self.store.create(profile)
        logger.info("Google user %s logged in", profile.email or profile.id)
        return profile, session_id

    def current_user(self, session_id: Optional[str]) -> Optional[GoogleProfile]:
        if not session_id:
            return None
        return self.store.get(session_id)

    async def logout(self, session_id: Optional[str]) -> bool:
        if not session_id:
            return False
        return self.store.destroy(session_id)
