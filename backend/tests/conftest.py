import os
import sys
from pathlib import Path

import pytest

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

# Keep the module-level app in api.main off the real data file.
os.environ.setdefault("BOOKS_IN_MEMORY", "true")

from fastapi.testclient import TestClient  # noqa: E402

from api.main import create_app  # noqa: E402
from storage.book_store import BookStore  # noqa: E402


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "books.json"


@pytest.fixture
def store(store_path):
    s = BookStore(store_path)
    s.reset()
    return s


@pytest.fixture
def client(store):
    return TestClient(create_app(store=store))


@pytest.fixture
def book_payload():
    return {
        "title": "Jest ile Test",
        "author": "Test Yazarı",
        "isbn": "1111222233",
        "publishedDate": "2025-01-01",
        "available": True,
    }
