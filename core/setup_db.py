# core/setup_db.py

import logging

from core.config import Config
from core.database import RecordStore
from core.logging_config import configure_logging
from core.time_utils import now_ns
from services.user_service import ensure_admin_principals

logger = logging.getLogger(__name__)


def init_store(database_url: str | None = None, admin_principals=None) -> RecordStore:
    """Create all tables and grant admin to the bootstrap principals."""
    store = RecordStore(database_url)
    store.create_all()

    principals = Config.ADMIN_PRINCIPALS if admin_principals is None else admin_principals
    with store.writing("user_accounts") as db:
        granted = ensure_admin_principals(db, principals, now_ns())
    if granted:
        logger.info("Granted admin to %d bootstrap principal(s)", len(granted))
    return store


def main():
    configure_logging(Config.LOG_LEVEL)
    logger.info("Creating database tables...")
    init_store()
    logger.info("Database initialized successfully.")


if __name__ == "__main__":
    main()
