"""Database engine and session management."""

from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from kinship.models import Base


def is_memory_sqlite(url: str) -> bool:
    """True for sqlite:// and sqlite:///:memory: (optionally with a driver or query string)."""
    if not url.startswith("sqlite"):
        return False
    _, _, path = url.partition("://")
    path = path.split("?", 1)[0]
    return path in ("", "/", "/:memory:")


class Database:
    """Owns the engine and session factory; built once per application."""

    def __init__(self, url: str, echo: bool = False) -> None:
        if is_memory_sqlite(url):
            # In-memory SQLite must share one connection across worker threads.
            self.engine = create_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        elif url.startswith("sqlite"):
            # File-backed SQLite keeps a connection per session; sessions run on worker threads.
            self.engine = create_engine(url, echo=echo, connect_args={"check_same_thread": False})
        else:
            self.engine = create_engine(url, pool_pre_ping=True, echo=echo)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        """Create missing tables (tests and local SQLite; deployments use alembic)."""
        Base.metadata.create_all(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
