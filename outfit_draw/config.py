from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.
    Uses pydantic for validation and type safety.
    """
    environment: str = "development"
    debug: bool = True

    # password: local accounts, SQL sessions and server-side records
    # google: OAuth login, in-memory sessions, records kept on the client
    auth_mode: Literal["password", "google"] = "password"

    database_url: str = "sqlite:///./outfit_draw.db"

    # Session lifetime in hours
    session_expire_hours: int = 24

    cookie_secure: bool = False
    cookie_domain: str = "localhost"
    cookie_httponly: bool = True
    cookie_samesite: Literal["lax", "strict", "none"] = "lax"

    google_client_id: str = ""
    google_client_secret: str = ""

    # Public base URL, used to build the OAuth redirect URI
    app_url: str = "http://localhost:3000"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def google_redirect_uri(self) -> str:
        return f"{self.app_url.rstrip('/')}/auth/google/callback"

    def session_cookie_params(self) -> dict:
        """
        Cookie attributes for the session token.

        The OAuth popup flow needs a cross-site cookie, so the google
        mode always sends it as Secure with SameSite=None.
        """
        secure = self.cookie_secure
        samesite = self.cookie_samesite
        if self.auth_mode == "google":
            secure = True
            samesite = "none"
        return {
            "httponly": self.cookie_httponly,
            "secure": secure,
            "samesite": samesite,
            "path": "/",
            "domain": self.cookie_domain if self.cookie_domain != "localhost" else None,
        }


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance. Load once, reuse throughout application lifecycle.
    """
    return Settings()
