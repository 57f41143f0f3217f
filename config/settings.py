"""
Agora – Django Settings (Infrastructure Only)
==============================================
Django serves as the framework container for Agora.
Voting rules live in core/; Django hosts persistence and HTTP glue.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("AGORA_SECRET_KEY", "agora-dev-key-replace-before-deployment")

DEBUG = os.environ.get("AGORA_DEBUG", "1") == "1"

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("AGORA_ALLOWED_HOSTS", "").split(",")
    if host.strip()
]

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    # ── Agora Modules ─────────────────────────────────────
    "core.auth",
    "core.vote_store",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL Routing ───────────────────────────────────────────────
ROOT_URLCONF = "config.urls"

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Production DB configured separately.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("AGORA_DB_PATH", BASE_DIR / "db.sqlite3"),
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Voting ────────────────────────────────────────────────────
# Per-participant credit budget for quadratic voting.
AGORA_TOTAL_CREDITS = int(os.environ.get("AGORA_TOTAL_CREDITS", "100"))
AGORA_VOTABLE_STATUSES = ("approved", "scheduled")
AGORA_STORE_BACKEND = os.environ.get("AGORA_STORE_BACKEND", "db")

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
        },
    },
    "loggers": {
        "agora": {
            "handlers": ["console"],
            "level": os.environ.get("AGORA_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
    },
}
