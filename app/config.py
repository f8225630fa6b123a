import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

APP_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = APP_DIR / "templates"
STATIC_DIR = APP_DIR / "static"

SECRET_KEY = os.getenv("SECRET_KEY", "a_long_and_secret_key_change_me_in_production")
DEBUG = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CATALOG_PATH = os.getenv("CATALOG_PATH", "")
DEFAULT_FACTION = os.getenv("DEFAULT_FACTION", "british_army")


def _load_int(env_key: str, default: int) -> int:
    raw_value = os.getenv(env_key)
    if not raw_value:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


DEFAULT_POINTS_LIMIT = _load_int("DEFAULT_POINTS_LIMIT", 250)
MIN_POINTS_LIMIT = _load_int("MIN_POINTS_LIMIT", 50)
MAX_SESSIONS = _load_int("MAX_SESSIONS", 1000)
