"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


# ── Storage ───────────────────────────────────────────────
DB_STORAGE: str = os.getenv("DB_STORAGE", "animal_registry.sqlite")
DB_SEED_FILE: str = os.getenv("DB_SEED_FILE", "data/aac_shelter_outcomes.csv")
SEED_BATCH_SIZE: int = int(os.getenv("SEED_BATCH_SIZE", "50"))

# ── Default user ──────────────────────────────────────────
DEFAULT_USER_NAME: str = os.getenv("DEFAULT_USER_NAME", "admin")
DEFAULT_USER_PASSWORD: str = os.getenv("DEFAULT_USER_PASSWORD", "")

# ── Security ──────────────────────────────────────────────
SECURITY_PASSWORD_ENCRYPT: bool = _as_bool(os.getenv("SECURITY_PASSWORD_ENCRYPT", "false"))
BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "8"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING").upper()
LOG_FILE: str = os.getenv("LOG_FILE", "")

# ── Screens ───────────────────────────────────────────────
PAGE_SIZE: int = int(os.getenv("PAGE_SIZE", "10"))
