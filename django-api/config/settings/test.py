"""Test settings: file-backed SQLite, fast hashing, JSON test client."""

from .base import *  # noqa: F401,F403
from .base import BASE_DIR, REST_FRAMEWORK

# A file database lets threaded tests open their own connections.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": str(BASE_DIR / "db.sqlite3"),
        "OPTIONS": {"transaction_mode": "IMMEDIATE", "timeout": 20},
        "TEST": {"NAME": str(BASE_DIR / "test_swaps.sqlite3")},
    }
}

# Password hashers are slow; use a fast one for tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "TEST_REQUEST_DEFAULT_FORMAT": "json",
}

SWAPS_STORE_BACKEND = "django"
