import logging
import os
import threading
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from core.config import Config

logger = logging.getLogger(__name__)

# Base class for all models
Base = declarative_base()

# One writer lock per collection; ids are allocated under these.
COLLECTIONS = (
    "patients",
    "clinical_visits",
    "follow_ups",
    "prescriptions",
    "user_accounts",
)


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:")


def make_engine(url: str):
    """Create an engine for the given URL.

    SQLite connections are shared across threads; in-memory databases use a
    single pooled connection so every session sees the same data.
    """
    if url.startswith("sqlite"):
        if _is_memory_sqlite(url):
            return create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        path = url.split("sqlite:///", 1)[-1]
        if path and os.path.dirname(path):
            os.makedirs(os.path.dirname(path), exist_ok=True)
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url)


class RecordStore:
    """
    Durable keyed storage for the four clinical collections plus user accounts.

    Created empty at startup and passed explicitly to the service facade.

    Usage:
        store = RecordStore("sqlite://")
        store.create_all()
        with store.writing("patients") as db:
            db.add(...)
        with store.session() as db:
            db.query(Model).all()
    """

    def __init__(self, database_url: str | None = None):
        self.database_url = database_url or Config.DATABASE_URL
        self.engine = make_engine(self.database_url)
        # Session factory; records stay readable after commit/close.
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )
        self._locks = {name: threading.Lock() for name in COLLECTIONS}
        # StaticPool shares one connection, so writes and reads must not interleave on it.
        self._connection_lock = threading.RLock() if _is_memory_sqlite(self.database_url) else None

    def create_all(self):
        # Import models so they register on Base.metadata
        import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Schema ready at %s", self.engine.url.render_as_string(hide_password=True))

    def dispose(self):
        self.engine.dispose()

    @contextmanager
    def session(self):
        """
        Context manager for a unit of work.
        Commits on success, rolls back on any exception, always closes.
        """
        if self._connection_lock is not None:
            self._connection_lock.acquire()
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
            if self._connection_lock is not None:
                self._connection_lock.release()

    @contextmanager
    def writing(self, collection: str):
        """Session holding the writer lock of one collection."""
        try:
            lock = self._locks[collection]
        except KeyError:
            raise ValueError(f"Unknown collection: {collection}") from None
        with lock:
            with self.session() as db:
                yield db
