# teamledger/settings.py
import os
import logging
from pathlib import Path

from dotenv import load_dotenv


# --------------------
# Env & configuration
# --------------------
load_dotenv()
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")
VAULT_BUCKET = os.getenv("VAULT_BUCKET") or "vault"
LOG_LEVEL    = (os.getenv("LOG_LEVEL") or "INFO").upper()

LOGS_DIR = Path(os.environ.get("LOGS_DIR") or Path(__file__).resolve().parent / "logs")


class ConfigError(RuntimeError):
    """Required configuration is missing from the environment."""


def supabase_credentials() -> tuple[str, str]:
    """Return (url, key), re-reading the environment so tests can patch it."""
    url = os.getenv("SUPABASE_URL") or SUPABASE_URL
    key = os.getenv("SUPABASE_KEY") or SUPABASE_KEY
    if not url or not key:
        raise ConfigError(
            "Missing Supabase credentials. Set SUPABASE_URL and SUPABASE_KEY "
            "in the environment or in a .env file."
        )
    return url, key


def setup_logging(level: str | None = None, log_file: str = "teamledger.log") -> None:
    LOGS_DIR.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL), logging.INFO),
        format="%(asctime)s %(levelname)s: %(message)s",
        handlers=[
            logging.FileHandler(LOGS_DIR / log_file),
            logging.StreamHandler(),
        ],
    )
