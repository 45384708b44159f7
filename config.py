# =============================================================================
# ⚙️ config.py
# -----------------------------------------------------------------------------
# Runtime configuration for the storefront API.
# Values come from the environment (optionally a .env file next to this module).
# =============================================================================

from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import quote_plus

from dotenv import load_dotenv

# 🔹 .env must be loaded before anything reads os.environ
load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


# -------------------------------------------------------------------------
# 🗄️ Database
# -------------------------------------------------------------------------
MYSQL_USER = os.getenv("MYSQL_USER", "root")
MYSQL_PASS = os.getenv("MYSQL_PASS", "")
MYSQL_HOST = os.getenv("MYSQL_HOST", "localhost")
MYSQL_PORT = os.getenv("MYSQL_PORT", "3306")
MYSQL_DB = os.getenv("MYSQL_DB", "phoenix_cloud")


def _mysql_url() -> str:
    # special characters (@, #, %) in the password must be escaped
    return (
        f"mysql+pymysql://{MYSQL_USER}:{quote_plus(MYSQL_PASS)}"
        f"@{MYSQL_HOST}:{MYSQL_PORT}/{MYSQL_DB}?charset=utf8mb4"
    )


DATABASE_URL = os.getenv("DATABASE_URL", "").strip() or _mysql_url()

DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
DB_POOL_TIMEOUT = float(os.getenv("DB_POOL_TIMEOUT", "10"))
DB_ECHO = _flag("DB_ECHO", "false")

# -------------------------------------------------------------------------
# 🔐 Admin session
# -------------------------------------------------------------------------
SESSION_SECRET = os.getenv("SESSION_SECRET", "phoenix-session-secret")
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "phoenix_admin")
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", str(60 * 60 * 12)))
SESSION_SAME_SITE = os.getenv("SESSION_SAME_SITE", "lax")
SESSION_HTTPS_ONLY = _flag("SESSION_HTTPS_ONLY", "0")

# 0 reopens the mutating endpoints without a session (local development only)
ADMIN_AUTH_REQUIRED = _flag("ADMIN_AUTH_REQUIRED", "1")

DEFAULT_ADMIN_USERNAME = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
# empty: a random password is generated and logged once
DEFAULT_ADMIN_PASSWORD = os.getenv("DEFAULT_ADMIN_PASSWORD", "")

# salt shared by every hash the first deployment produced
LEGACY_PASSWORD_SALT = os.getenv("LEGACY_PASSWORD_SALT", "phoenix-salt")

# -------------------------------------------------------------------------
# 🌐 HTTP
# -------------------------------------------------------------------------
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:5000,http://localhost:5173,http://127.0.0.1:5173",
    ).split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
