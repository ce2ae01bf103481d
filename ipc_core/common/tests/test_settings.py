# ipc_core/common/tests/test_settings.py
import pytest
from django.core.exceptions import ImproperlyConfigured

from config.settings.base import postgres_database, require_env


def test_require_env_returns_value(monkeypatch):
    monkeypatch.setenv("IPC_TEST_SETTING", "  value  ")
    assert require_env("IPC_TEST_SETTING") == "value"


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_require_env_rejects_missing_or_blank(monkeypatch, raw):
    if raw is None:
        monkeypatch.delenv("IPC_TEST_SETTING", raising=False)
    else:
        monkeypatch.setenv("IPC_TEST_SETTING", raw)

    with pytest.raises(ImproperlyConfigured):
        require_env("IPC_TEST_SETTING")


def test_postgres_database_needs_host_and_password(monkeypatch):
    monkeypatch.setenv("DB_PASSWORD", "secret")
    monkeypatch.delenv("DB_HOST", raising=False)
    with pytest.raises(ImproperlyConfigured):
        postgres_database()

    monkeypatch.setenv("DB_HOST", "db.internal")
    cfg = postgres_database()
    assert cfg["HOST"] == "db.internal"
    assert cfg["PASSWORD"] == "secret"
    assert cfg["ENGINE"] == "django.db.backends.postgresql"
