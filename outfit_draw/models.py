from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.sql import func

from outfit_draw.database import Base


class User(Base):
    """
    Account with a unique username and an argon2 password hash.

    password_hash never leaves the database layer.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(150), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username})>"


class Session(Base):
    """
    Server-side session storage.

    session_id is the opaque token stored in the cookie. A session is
    valid until expires_at or until it is deleted on logout.
    """
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(String(64), unique=True, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)

    __table_args__ = (
        Index("ix_session_lookup", "session_id", "expires_at"),
    )

    def __repr__(self):
        return f"<Session(id={self.id}, user_id={self.user_id})>"


class OutfitRecord(Base):
    """
    One logged outfit: the drawn suggestion, an optional photo and a note.

    Records are never updated once written. Ordering newest-first
    follows the autoincrement id.
    """
    __tablename__ = "records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Formatted by the client, stored as-is
    date = Column(String(64), nullable=False, default="")
    style = Column(Text, nullable=False, default="")
    # base64 data URL
    image = Column(Text, nullable=True)
    note = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<OutfitRecord(id={self.id}, user_id={self.user_id})>"
