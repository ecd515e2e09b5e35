import os
from dotenv import load_dotenv

load_dotenv()

# Path: project_root/data/opd.db
BASE_DIR = os.path.dirname(os.path.dirname(__file__))
DB_PATH = os.path.join(BASE_DIR, "data", "opd.db")


def _split_principals(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [p.strip() for p in raw.split(",") if p.strip()]


class Config:
    DATABASE_URL = os.environ.get("OPD_DATABASE_URL") or f"sqlite:///{DB_PATH}"
    LOG_LEVEL = os.environ.get("OPD_LOG_LEVEL") or "INFO"
    ADMIN_PRINCIPALS = _split_principals(os.environ.get("OPD_ADMIN_PRINCIPALS"))
