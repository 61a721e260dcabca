import logging
from sqlalchemy import create_engine, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import DATABASE_URL, DEBUG

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def build_engine(url: str):
    """Create a SQLAlchemy engine, with SQLite tweaks for FastAPI's threadpool."""
    kwargs = {"echo": DEBUG}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # In-memory databases only live as long as their connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


# Buat koneksi database
engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db():
    """Create all tables that don't exist yet."""
    # Register models on Base.metadata
    from app.models import wish_orm  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")


def get_db():
    """FastAPI dependency: one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ping_database(db: Session) -> None:
    """Trivial connectivity probe. Raises if storage is unreachable."""
    db.execute(text("SELECT 1"))
