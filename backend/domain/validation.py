"""
Parse-and-validate step for incoming book payloads.

``parse_book_payload`` turns an arbitrary decoded JSON value into either a
``ValidBook`` carrying an immutable ``BookInput`` or an ``InvalidBook``
carrying every rule violation at once. Messages are the ones returned to
API clients.
"""
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

TITLE_ERROR = "Titel ist erforderlich und muss mindestens 3 Zeichen lang sein."
AUTHOR_ERROR = "Autor ist erforderlich und muss mindestens 3 Zeichen lang sein."
ISBN_ERROR = "ISBN ist erforderlich und muss 10-13 Ziffern lang sein."
PUBLISHED_DATE_ERROR = (
    "publishedDate ist erforderlich und muss ein gültiges ISO-Datum sein (YYYY-MM-DD)."
)
AVAILABLE_ERROR = "Verfügbarkeit (available) muss ein Boolean (true/false) sein."

DATE_SHAPE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# Keyed by the wire name, in the order errors are reported.
FIELD_ERRORS: Dict[str, str] = {
    "title": TITLE_ERROR,
    "author": AUTHOR_ERROR,
    "isbn": ISBN_ERROR,
    "publishedDate": PUBLISHED_DATE_ERROR,
    "available": AVAILABLE_ERROR,
}


class BookInput(BaseModel):
    """The client-editable fields of a book, already validated."""

    model_config = ConfigDict(strict=True, frozen=True, extra="ignore")

    title: str = Field(min_length=3)
    author: str = Field(min_length=3)
    isbn: str = Field(pattern=r"^[0-9]{10,13}$")
    published_date: str = Field(alias="publishedDate")
    available: bool

    @field_validator("published_date")
    @classmethod
    def _check_published_date(cls, v: str) -> str:
        # strptime alone accepts "2025-1-1" and "2025-01- 1".
        if not DATE_SHAPE.fullmatch(v):
            raise ValueError("expected YYYY-MM-DD")
        datetime.strptime(v, "%Y-%m-%d")
        return v

    def to_changes(self) -> Dict[str, Any]:
        """Field values keyed by domain attribute name."""
        return self.model_dump()


@dataclass(frozen=True)
class ValidBook:
    data: BookInput


@dataclass(frozen=True)
class InvalidBook:
    errors: List[str]


ParseResult = Union[ValidBook, InvalidBook]


def parse_book_payload(payload: Any) -> ParseResult:
    """Validate ``payload`` against all book rules without short-circuiting."""
    if not isinstance(payload, dict):
        return InvalidBook(errors=list(FIELD_ERRORS.values()))

    try:
        return ValidBook(data=BookInput.model_validate(payload))
    except ValidationError as exc:
        failed = {err["loc"][0] for err in exc.errors() if err["loc"]}
        return InvalidBook(errors=[msg for name, msg in FIELD_ERRORS.items() if name in failed])


def validate_book_payload(payload: Any) -> List[str]:
    """Return the list of rule violations; an empty list means valid."""
    result = parse_book_payload(payload)
    if isinstance(result, InvalidBook):
        return result.errors
    return []
