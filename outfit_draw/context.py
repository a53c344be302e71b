"""Application context: everything a request handler needs, built once at startup."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Optional

from outfit_draw.auth import AuthPolicy, PasswordAuthService
from outfit_draw.config import Settings, get_settings
from outfit_draw.database import Database
from outfit_draw.google_auth import (
    GoogleAuthService,
    HttpxGoogleOAuthClient,
    MemorySessionStore,
)
from outfit_draw.records import RecordStore


@dataclass
class AppContext:
    """Holds application-wide dependencies."""

    settings: Settings
    auth: AuthPolicy
    close_resources: Callable[[], Awaitable[None]]
    # Only present in password mode; google mode keeps records on the client
    database: Optional[Database] = None
    records: Optional[RecordStore] = None

    async def startup(self) -> None:
        if self.database is not None:
            self.database.init_db()
        if isinstance(self.auth, PasswordAuthService):
            self.auth.cleanup_expired_sessions()


def build_context(settings: Optional[Settings] = None) -> AppContext:
    """Create the context for the configured auth mode."""
    resolved = settings or get_settings()

    if resolved.auth_mode == "google":
        oauth_client = HttpxGoogleOAuthClient.create(
            resolved.google_client_id, resolved.google_client_secret
        )
        auth = GoogleAuthService(
            oauth_client=oauth_client,
            redirect_uri=resolved.google_redirect_uri,
            store=MemorySessionStore(expire_hours=resolved.session_expire_hours),
        )
        return AppContext(
            settings=resolved,
            auth=auth,
            close_resources=oauth_client.close,
        )

    database = Database(resolved.database_url, echo=resolved.debug)

    async def close_resources() -> None:
        database.dispose()

    return AppContext(
        settings=resolved,
        auth=PasswordAuthService(database, session_expire_hours=resolved.session_expire_hours),
        close_resources=close_resources,
        database=database,
        records=RecordStore(database),
    )
