"""
Books API routes.
"""
import json
from typing import Any, List

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from api.errors import BookNotFoundError, InvalidPayloadError
from domain.models import Book, format_timestamp
from domain.validation import InvalidBook, parse_book_payload
from repositories import BooksRepository

INVALID_JSON_ERROR = "Der Request-Body muss gültiges JSON sein."

router = APIRouter()


class BookResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    author: str
    isbn: str
    published_date: str
    available: bool
    created_at: str
    updated_at: str


def book_to_response(book: Book) -> BookResponse:
    """Convert domain Book to API response."""
    return BookResponse(
        id=book.id,
        title=book.title,
        author=book.author,
        isbn=book.isbn,
        published_date=book.published_date,
        available=book.available,
        created_at=format_timestamp(book.created_at),
        updated_at=format_timestamp(book.updated_at),
    )


def get_books_repo(request: Request) -> BooksRepository:
    """Repository bound to the application's book store."""
    return request.app.state.books_repo


async def read_json_body(request: Request) -> Any:
    """Decode the request body. An empty body counts as ``{}``."""
    body = await request.body()
    if not body.strip():
        return {}
    try:
        return json.loads(body)
    except (ValueError, RecursionError):
        raise InvalidPayloadError([INVALID_JSON_ERROR])


async def validated_book_changes(request: Request) -> dict:
    result = parse_book_payload(await read_json_body(request))
    if isinstance(result, InvalidBook):
        raise InvalidPayloadError(result.errors)
    return result.data.to_changes()


@router.get("", response_model=List[BookResponse])
async def list_books(repo: BooksRepository = Depends(get_books_repo)):
    """List all books in insertion order."""
    return [book_to_response(b) for b in repo.list_books()]


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(book_id: str, repo: BooksRepository = Depends(get_books_repo)):
    book = repo.get_book(book_id)
    if not book:
        raise BookNotFoundError()
    return book_to_response(book)


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
async def create_book(
    changes: dict = Depends(validated_book_changes),
    repo: BooksRepository = Depends(get_books_repo),
):
    """Create a new book."""
    return book_to_response(repo.create_book(changes))


@router.put("/{book_id}", response_model=BookResponse)
async def update_book(
    book_id: str,
    changes: dict = Depends(validated_book_changes),
    repo: BooksRepository = Depends(get_books_repo),
):
    """Update a book.

    The body is validated as a complete book even though the stored record
    is merged field by field, so a PUT must always carry all five fields.
    """
    book = repo.update_book(book_id, changes)
    if not book:
        raise BookNotFoundError()
    return book_to_response(book)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(book_id: str, repo: BooksRepository = Depends(get_books_repo)):
    if not repo.delete_book(book_id):
        raise BookNotFoundError()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
