import pytest
from pydantic import ValidationError

from domain.validation import (
    AUTHOR_ERROR,
    AVAILABLE_ERROR,
    ISBN_ERROR,
    PUBLISHED_DATE_ERROR,
    TITLE_ERROR,
    InvalidBook,
    ValidBook,
    parse_book_payload,
    validate_book_payload,
)


def _payload(**overrides):
    data = {
        "title": "Der Prozess",
        "author": "Franz Kafka",
        "isbn": "9783596294312",
        "publishedDate": "1925-04-26",
        "available": True,
    }
    data.update(overrides)
    return data


def test_valid_payload_has_no_errors():
    assert validate_book_payload(_payload()) == []


def test_parse_returns_immutable_book_input():
    result = parse_book_payload(_payload(id="ignored", extra="x"))
    assert isinstance(result, ValidBook)
    assert result.data.to_changes() == {
        "title": "Der Prozess",
        "author": "Franz Kafka",
        "isbn": "9783596294312",
        "published_date": "1925-04-26",
        "available": True,
    }
    with pytest.raises(ValidationError):
        result.data.title = "Changed"


def test_all_rules_reported_together_in_order():
    result = parse_book_payload({})
    assert isinstance(result, InvalidBook)
    assert result.errors == [
        TITLE_ERROR,
        AUTHOR_ERROR,
        ISBN_ERROR,
        PUBLISHED_DATE_ERROR,
        AVAILABLE_ERROR,
    ]


def test_missing_title_only():
    data = _payload()
    del data["title"]
    assert validate_book_payload(data) == [TITLE_ERROR]


@pytest.mark.parametrize("title", ["", "ab", 12345, None])
def test_title_rules(title):
    assert validate_book_payload(_payload(title=title)) == [TITLE_ERROR]


def test_short_author_and_bad_isbn_both_reported():
    errors = validate_book_payload(_payload(author="Al", isbn="12345"))
    assert errors == [AUTHOR_ERROR, ISBN_ERROR]


@pytest.mark.parametrize("isbn", ["123456789", "12345678901234", "12345abcde", "", 1234567890, "1234567890\n"])
def test_isbn_rejected(isbn):
    assert validate_book_payload(_payload(isbn=isbn)) == [ISBN_ERROR]


@pytest.mark.parametrize("isbn", ["1234567890", "1234567890123"])
def test_isbn_length_bounds_accepted(isbn):
    assert validate_book_payload(_payload(isbn=isbn)) == []


@pytest.mark.parametrize("value", ["2025-02-30", "2025-13-01", "2025-1-1", "gestern", "", 20250101])
def test_published_date_rejected(value):
    assert validate_book_payload(_payload(publishedDate=value)) == [PUBLISHED_DATE_ERROR]


def test_leap_day_accepted():
    assert validate_book_payload(_payload(publishedDate="2024-02-29")) == []


@pytest.mark.parametrize("value", [1, 0, "true", None, "false"])
def test_available_must_be_boolean(value):
    assert validate_book_payload(_payload(available=value)) == [AVAILABLE_ERROR]


def test_available_false_is_valid():
    assert validate_book_payload(_payload(available=False)) == []


@pytest.mark.parametrize("payload", [[], "book", 42, None])
def test_non_object_payload_fails_every_rule(payload):
    assert len(validate_book_payload(payload)) == 5
