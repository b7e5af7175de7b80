"""Tests for the database settings the swap engine relies on.

Run with: pytest tests/test_settings.py -v
"""

import pytest
from django.db import connection

from config.settings import base


def test_default_sqlite_locks_at_transaction_start():
    default = base.DATABASES["default"]
    if default["ENGINE"] != "django.db.backends.sqlite3":
        pytest.skip("DB_ENGINE points at another backend")

    assert default["OPTIONS"]["transaction_mode"] == "IMMEDIATE"
    assert default["OPTIONS"]["timeout"] > 0


def test_test_database_matches_production_locking():
    assert connection.settings_dict["OPTIONS"]["transaction_mode"] == "IMMEDIATE"
