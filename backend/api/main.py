"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload
or:       python -m api.main
"""
import logging
from pathlib import Path
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.errors import register_error_handlers
from api.routes import books
from logging_config import setup_logging
from repositories import BooksRepository
from settings import Settings, settings
from storage.book_store import BookStore

logger = logging.getLogger(__name__)


async def strip_trailing_slash(request: Request, call_next):
    """Route "/api/books/" like "/api/books" instead of redirecting."""
    path = request.scope["path"]
    if path != "/" and path.endswith("/"):
        request.scope["path"] = path.rstrip("/") or "/"
    return await call_next(request)


def create_app(store: Optional[BookStore] = None, app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the API around ``store``.

    Without an explicit store one is created from settings and loaded
    immediately, so a corrupt backing file fails here with StoreLoadError
    instead of after the server starts accepting requests.
    """
    cfg = app_settings or settings
    setup_logging(cfg.LOG_LEVEL)

    if store is None:
        store = BookStore(None if cfg.BOOKS_IN_MEMORY else cfg.BOOKS_DB_PATH)
        store.load()

    app = FastAPI(
        title="Book Records API",
        description="CRUD API for book records backed by a JSON file",
        version="0.1.0",
    )
    app.state.books_repo = BooksRepository(store)

    register_error_handlers(app)
    app.middleware("http")(strip_trailing_slash)

    # Added after the error middleware so 500 responses carry CORS headers too.
    if cfg.CORS_ENABLED:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[cfg.CORS_ORIGIN],
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(books.router, prefix="/api/books", tags=["books"])

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


def main() -> None:
    logger.info("Server läuft: http://localhost:%s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
