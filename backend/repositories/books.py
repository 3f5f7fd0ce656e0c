"""
Book repository backed by the JSON book store.
"""
import logging
from typing import Any, List, Mapping, Optional

from domain.models import Book, utc_now
from storage.book_store import BookStore

logger = logging.getLogger(__name__)


class BooksRepository:
    """CRUD operations for books.

    Input is expected to be validated by the caller. Every mutation is
    flushed to the store immediately.
    """

    def __init__(self, store: BookStore):
        self.store = store

    def list_books(self) -> List[Book]:
        return list(self.store.books)

    def get_book(self, book_id: str) -> Optional[Book]:
        index = self.store.index_of(book_id)
        if index == -1:
            return None
        return self.store.books[index]

    def create_book(self, data: Mapping[str, Any]) -> Book:
        now = utc_now()
        book = Book(
            id=Book.generate_id(),
            title=data["title"],
            author=data["author"],
            isbn=data["isbn"],
            published_date=data["published_date"],
            available=data["available"],
            created_at=now,
            updated_at=now,
        )
        self.store.books.append(book)
        self.store.save()
        logger.info("Created book %s", book.id)
        return book

    def update_book(self, book_id: str, changes: Mapping[str, Any]) -> Optional[Book]:
        """Merge ``changes`` over an existing book. Returns None if not found."""
        index = self.store.index_of(book_id)
        if index == -1:
            return None

        original = self.store.books[index]
        # Clock adjustments must not move updatedAt backwards.
        updated_at = max(utc_now(), original.updated_at)
        updated = original.merged(dict(changes), updated_at)
        self.store.books[index] = updated
        self.store.save()
        logger.info("Updated book %s", book_id)
        return updated

    def delete_book(self, book_id: str) -> bool:
        index = self.store.index_of(book_id)
        if index == -1:
            return False

        del self.store.books[index]
        self.store.save()
        logger.info("Deleted book %s", book_id)
        return True
