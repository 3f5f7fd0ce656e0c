import os
from pathlib import Path

# Basic settings helper to read environment configuration.

# Relative to the working directory the server is started from.
DEFAULT_BOOKS_DB_PATH = Path("data") / "books.json"


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _as_int(val: str | None, default: int) -> int:
    if val is None or not val.strip():
        return default
    return int(val)


class Settings:
    def __init__(self) -> None:
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = _as_int(os.getenv("PORT"), 4000)
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
        # Backing file for the book collection. Relative paths resolve
        # against the current working directory.
        self.BOOKS_DB_PATH: Path = Path(os.getenv("BOOKS_DB_PATH") or DEFAULT_BOOKS_DB_PATH)
        self.BOOKS_IN_MEMORY: bool = _as_bool(os.getenv("BOOKS_IN_MEMORY"), False)
        # Cross-origin access is off unless explicitly enabled, and then only
        # for a single origin.
        self.CORS_ENABLED: bool = _as_bool(os.getenv("CORS_ENABLED"), False)
        self.CORS_ORIGIN: str = os.getenv("CORS_ORIGIN", "http://localhost:3000")


settings = Settings()
