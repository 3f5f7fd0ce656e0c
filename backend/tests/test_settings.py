from pathlib import Path

import pytest

from settings import DEFAULT_BOOKS_DB_PATH, Settings

ENV_VARS = (
    "HOST",
    "PORT",
    "LOG_LEVEL",
    "BOOKS_DB_PATH",
    "BOOKS_IN_MEMORY",
    "CORS_ENABLED",
    "CORS_ORIGIN",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    s = Settings()
    assert s.HOST == "0.0.0.0"
    assert s.PORT == 4000
    assert s.LOG_LEVEL == "INFO"
    assert s.BOOKS_DB_PATH == DEFAULT_BOOKS_DB_PATH == Path("data/books.json")
    assert not s.BOOKS_DB_PATH.is_absolute()
    assert s.BOOKS_IN_MEMORY is False
    assert s.CORS_ENABLED is False
    assert s.CORS_ORIGIN == "http://localhost:3000"


def test_port_from_env(clean_env):
    clean_env.setenv("PORT", "8080")
    assert Settings().PORT == 8080


def test_blank_port_falls_back_to_default(clean_env):
    clean_env.setenv("PORT", "  ")
    assert Settings().PORT == 4000


def test_invalid_port_raises(clean_env):
    clean_env.setenv("PORT", "vierzig")
    with pytest.raises(ValueError):
        Settings()


@pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", "on"])
def test_truthy_flags(clean_env, value):
    clean_env.setenv("BOOKS_IN_MEMORY", value)
    clean_env.setenv("CORS_ENABLED", value)
    s = Settings()
    assert s.BOOKS_IN_MEMORY is True
    assert s.CORS_ENABLED is True


@pytest.mark.parametrize("value", ["0", "false", "no", "off", ""])
def test_falsy_flags(clean_env, value):
    clean_env.setenv("BOOKS_IN_MEMORY", value)
    clean_env.setenv("CORS_ENABLED", value)
    s = Settings()
    assert s.BOOKS_IN_MEMORY is False
    assert s.CORS_ENABLED is False


def test_store_path_and_origin_from_env(clean_env, tmp_path):
    clean_env.setenv("BOOKS_DB_PATH", str(tmp_path / "b.json"))
    clean_env.setenv("CORS_ORIGIN", "http://books.example")
    s = Settings()
    assert s.BOOKS_DB_PATH == tmp_path / "b.json"
    assert s.CORS_ORIGIN == "http://books.example"
