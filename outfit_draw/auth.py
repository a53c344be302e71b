import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol, Union

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from sqlalchemy.exc import IntegrityError

from outfit_draw.database import Database
from outfit_draw.errors import AuthError, ConflictError, NotFoundError, ValidationError
from outfit_draw.models import Session as SessionModel
from outfit_draw.models import User
from outfit_draw.schemas import GoogleProfile, UserResponse

logger = logging.getLogger(__name__)

# Argon2id with library defaults, salt is generated per hash
ph = PasswordHasher()


class AuthPolicy(Protocol):
    """Capabilities shared by every authentication backend."""

    def current_user(self, session_id: Optional[str]) -> Union[UserResponse, GoogleProfile, None]:
        """Return the identity bound to the session, or None when unauthenticated."""

    async def logout(self, session_id: Optional[str]) -> bool:
        """Destroy the session if it exists. Returns True when one was removed."""


def hash_password(password: str) -> str:
    """
    Hash password using Argon2id.

    Returns hash string that includes algorithm parameters and salt.
    Format: $argon2id$v=19$m=65536,t=3,p=4$salt$hash
    """
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify password against stored hash.
    Returns False for any mismatch or malformed hash.
    """
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def generate_session_id() -> str:
    """32 random bytes, hex encoded (64 characters)."""
    return secrets.token_hex(32)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PasswordAuthService:
    """
    Username/password accounts with sessions stored in the database.
    """

    database: Database
    session_expire_hours: int = 24

    def signup(
        self, username: Optional[str], password: Optional[str]
    ) -> tuple[UserResponse, str]:
        """
        Create a user and open a session for it.

        Raises ValidationError when a field is empty and ConflictError when
        the username is taken. Returns the new user and its session id.
        """
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Missing fields")

        with self.database.session() as db:
            if db.query(User.id).filter(User.username == username).first() is not None:
                raise ConflictError("Username already exists")

            user = User(username=username, password_hash=hash_password(password))
            db.add(user)
            try:
                db.commit()
            except IntegrityError:
                # Lost a race with a concurrent signup for the same name
                db.rollback()
                raise ConflictError("Username already exists")
            db.refresh(user)
            result = UserResponse.model_validate(user)

        session_id = self.create_session(result.id)
        logger.info("Created user %s", result.username)
        return result, session_id

    def login(
        self, username: Optional[str], password: Optional[str]
    ) -> tuple[UserResponse, str]:
        """
        Authenticate and open a new session.

        The same error is raised for an unknown user, a wrong password and
        an empty field.
        """
        username = (username or "").strip()
        if not username or not password:
            raise AuthError("Invalid credentials")

        with self.database.session() as db:
            user = db.query(User).filter(User.username == username).first()
            if not user or not verify_password(password, user.password_hash):
                raise AuthError("Invalid credentials")
            result = UserResponse.model_validate(user)

        session_id = self.create_session(result.id)
        logger.info("User %s logged in", result.username)
        return result, session_id

    def create_session(self, user_id: int) -> str:
        session_id = generate_session_id()
        expires_at = _utcnow() + timedelta(hours=self.session_expire_hours)
        with self.database.session() as db:
            db.add(SessionModel(session_id=session_id, user_id=user_id, expires_at=expires_at))
            db.commit()
        return session_id

    def session_user_id(self, session_id: Optional[str]) -> Optional[int]:
        """
        Resolve a session token to its user id.

        Returns None if the session doesn't exist or has expired.
        """
        if not session_id:
            return None
        with self.database.session() as db:
            session = db.query(SessionModel).filter(
                SessionModel.session_id == session_id,
                SessionModel.expires_at > _utcnow(),
            ).first()
            return session.user_id if session else None

    def get_user(self, user_id: int) -> UserResponse:
        with self.database.session() as db:
            user = db.query(User).filter(User.id == user_id).first()
            if user is None:
                raise NotFoundError("User not found")
            return UserResponse.model_validate(user)

    def current_user(self, session_id: Optional[str]) -> Optional[UserResponse]:
        user_id = self.session_user_id(session_id)
        if user_id is None:
            return None
        try:
            return self.get_user(user_id)
        except NotFoundError:
            return None

    async def logout(self, session_id: Optional[str]) -> bool:
        if not session_id:
            return False
        with self.database.session() as db:
            deleted = db.query(SessionModel).filter(
                SessionModel.session_id == session_id
            ).delete()
            db.commit()
        if deleted:
            logger.info("Session closed")
        return deleted > 0

    def cleanup_expired_sessions(self) -> int:
        """
        Remove expired sessions from database.
        Returns number of sessions cleaned up.
        """
        with self.database.session() as db:
            removed = db.query(SessionModel).filter(
                SessionModel.expires_at <= _utcnow()
            ).delete()
            db.commit()
        return removed
