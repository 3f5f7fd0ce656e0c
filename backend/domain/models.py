"""
Core domain models for the book records API.
These are framework-agnostic and shared by the store, repository and routes.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict
import uuid


# Fields a client may set. Everything else is server-assigned.
EDITABLE_FIELDS = ("title", "author", "isbn", "published_date", "available")


def utc_now() -> datetime:
    # JSON timestamps carry millisecond precision, so the in-memory value
    # is truncated to match what a reload from disk would produce.
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def format_timestamp(value: datetime) -> str:
    """Serialize a UTC datetime as ``2025-01-01T12:00:00.000Z``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class Book:
    """
    A book record.

    ``published_date`` is kept as the ``YYYY-MM-DD`` string the client sent.
    ``created_at`` never changes after creation; ``updated_at`` moves
    forward on every successful update.
    """
    id: str
    title: str
    author: str
    isbn: str
    published_date: str
    available: bool
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @staticmethod
    def generate_id() -> str:
        return str(uuid.uuid4())

    def merged(self, changes: Dict[str, Any], updated_at: datetime) -> "Book":
        """Return a copy with ``changes`` applied over the editable fields."""
        values = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}
        return replace(self, updated_at=updated_at, **values)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "publishedDate": self.published_date,
            "available": self.available,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Book":
        """Build a Book from its JSON form. Raises KeyError/ValueError on bad input."""
        return cls(
            id=str(data["id"]),
            title=data["title"],
            author=data["author"],
            isbn=data["isbn"],
            published_date=data["publishedDate"],
            available=data["available"],
            created_at=parse_timestamp(data["createdAt"]),
            updated_at=parse_timestamp(data["updatedAt"]),
        )
