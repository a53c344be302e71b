from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

# Base class for all models
Base = declarative_base()


class Database:
    """
    Owns the engine and session factory for one application instance.

    Built once at startup and handed to the services that need it.
    """

    def __init__(self, database_url: str, echo: bool = False):
        # check_same_thread=False needed for SQLite with FastAPI
        self.engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False} if database_url.startswith("sqlite") else {},
            echo=echo,
        )
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Provide a session for one unit of work.
        Rolls back on error and always closes.
        """
        db = self.session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def init_db(self) -> None:
        """
        Initialize database schema.
        Creates all tables defined in models.
        """
        # Register the mapped tables on Base.metadata
        from outfit_draw import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()
