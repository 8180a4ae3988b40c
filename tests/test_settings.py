import logging

import structlog

from todo_api import __main__ as entrypoint
from todo_api.logging_config import configure_logging
from todo_api.settings import get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ["PERSISTENCE_BACKEND", "SQLITE_DB_PATH", "CORS_ALLOW_ORIGINS", "LOG_LEVEL", "LOG_JSON", "HOST", "PORT"]:
            monkeypatch.delenv(name, raising=False)
        settings = get_settings()
        assert settings.persistence_backend == "memory"
        assert settings.sqlite_db_path == "./data/todos.db"
        assert settings.cors_allow_origins == ["*"]
        assert settings.log_level == "INFO"
        assert settings.log_json is False
        assert settings.host == "127.0.0.1"
        assert settings.port == 8000

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PERSISTENCE_BACKEND", " SQLite ")
        monkeypatch.setenv("SQLITE_DB_PATH", "/tmp/todo.db")
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test,")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_JSON", "yes")
        monkeypatch.setenv("PORT", "9001")
        settings = get_settings()
        assert settings.persistence_backend == "sqlite"
        assert settings.sqlite_db_path == "/tmp/todo.db"
        assert settings.cors_allow_origins == ["http://a.test", "http://b.test"]
        assert settings.log_level == "DEBUG"
        assert settings.log_json is True
        assert settings.port == 9001

    def test_unknown_backend_and_bad_port_fall_back(self, monkeypatch):
        monkeypatch.setenv("PERSISTENCE_BACKEND", "postgres")
        monkeypatch.setenv("PORT", "not-a-port")
        settings = get_settings()
        assert settings.persistence_backend == "memory"
        assert settings.port == 8000


class TestLogging:
    def test_configure_logging_sets_package_level(self):
        configure_logging(level="DEBUG", log_json=True)
        assert logging.getLogger("todo_api").level == logging.DEBUG
        assert len(logging.getLogger().handlers) == 1
        structlog.get_logger("todo_api.test").debug("Logging configured", check=True)

        configure_logging(level="nonsense")
        assert logging.getLogger("todo_api").level == logging.INFO


class TestEntrypoint:
    def test_main_runs_uvicorn_with_settings(self, monkeypatch):
        calls = []
        monkeypatch.setenv("HOST", "0.0.0.0")
        monkeypatch.setenv("PORT", "8123")
        monkeypatch.setattr(entrypoint.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))

        entrypoint.main()

        assert calls == [(("todo_api.main:app",), {"host": "0.0.0.0", "port": 8123})]
