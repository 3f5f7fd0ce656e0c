"""
JSON file store for book records.

Holds the whole collection in memory and rewrites the backing file after
every mutation. Files are laid out as a single pretty-printed JSON array:

    [
      {"id": "...", "title": "...", ...},
      ...
    ]

A store created without a path is memory-only and never touches the disk.
"""
import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from domain.models import Book

logger = logging.getLogger(__name__)


class StoreLoadError(RuntimeError):
    """The backing file exists but could not be read as a list of books."""


class BookStore:
    """
    In-memory collection of books with synchronous file persistence.

    There is no locking: every method runs to completion without yielding,
    so callers on a single event loop never observe a half-applied change.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else None
        self.books: List[Book] = []

    @property
    def in_memory(self) -> bool:
        return self.path is None

    def load(self) -> List[Book]:
        """
        Read the persisted collection, replacing the in-memory one.

        A missing file yields an empty collection. Unreadable or malformed
        content raises StoreLoadError.
        """
        if self.path is None:
            self.books = []
            return self.books

        if not self.path.exists():
            logger.info("Book store %s not found, starting with an empty collection", self.path)
            self.books = []
            return self.books

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error("Failed to load book store %s: %s", self.path, e)
            raise StoreLoadError(f"Cannot read {self.path}: {e}") from e

        if not isinstance(raw, list):
            raise StoreLoadError(f"{self.path} must contain a JSON array, got {type(raw).__name__}")

        books = []
        for index, item in enumerate(raw):
            try:
                books.append(Book.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.error("Invalid book at index %d in %s: %s", index, self.path, e)
                raise StoreLoadError(f"Invalid book at index {index} in {self.path}") from e

        self.books = books
        logger.info("Loaded %d books from %s", len(books), self.path)
        return self.books

    def save(self) -> bool:
        """
        Overwrite the backing file with the current collection.

        Returns False if the write failed. Failures are logged, not raised,
        and the in-memory collection is kept as is.
        """
        if self.path is None:
            return True

        try:
            data = json.dumps([b.to_dict() for b in self.books], indent=2, ensure_ascii=False)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(data, encoding="utf-8")
        except (OSError, TypeError, ValueError):
            logger.exception("Failed to save book store %s", self.path)
            return False
        return True

    def reset(self, books: Optional[Iterable[Book]] = None) -> None:
        """Replace the collection (empty by default) and flush it."""
        self.books = list(books or [])
        self.save()

    def reload(self) -> List[Book]:
        """Drop in-memory state and read the backing file again."""
        return self.load()

    def index_of(self, book_id: str) -> int:
        """Position of ``book_id`` in the collection, or -1."""
        for i, book in enumerate(self.books):
            if book.id == book_id:
                return i
        return -1
