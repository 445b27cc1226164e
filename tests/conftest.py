"""
pytest Fixtures for Catalog Tests

Shared fixtures used across all test files.

DATABASE ISOLATION:
===================
Each test gets its own SQLite file under pytest's tmp_path. A file (not
:memory:) is used because the repository opens a new session per
operation, and concurrent queries run on several threads at once; every
connection has to see the same database.

The app's repository dependency is overridden so requests made through
the TestClient use the test database.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
# Tables are created per test below, never in the working directory
import os

os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DEBUG"] = "false"

from collections.abc import Generator
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine
from sqlalchemy.orm import selectinload

from catalog.database import build_engine, build_session_factory, create_tables, drop_tables
from catalog.dependencies import get_repository
from catalog.main import app
from catalog.models import Author, Book, BookInstance, BookInstanceStatus, Genre
from catalog.services.repository import CatalogRepository


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture
def engine(tmp_path) -> Generator[Engine, None, None]:
    """A fresh database with every catalog table, removed after the test."""
    engine = build_engine(f"sqlite:///{tmp_path / 'catalog.db'}")
    create_tables(engine)

    yield engine

    drop_tables(engine)
    engine.dispose()


@pytest.fixture
def repo(engine: Engine) -> CatalogRepository:
    """Persistence gateway bound to the test database."""
    return CatalogRepository(build_session_factory(engine))


@pytest.fixture
def client(repo: CatalogRepository) -> Generator[TestClient, None, None]:
    """
    Test client whose requests use the test database.

    We override the get_repository dependency to return our gateway.
    """
    app.dependency_overrides[get_repository] = lambda: repo

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
# Created through the repository, so they are committed and visible to
# every session the app opens.


@pytest.fixture
def sample_author(repo: CatalogRepository) -> Author:
    """Create a sample author for testing."""
    author_id = repo.insert(Author, {
        "first_name": "Patrick",
        "family_name": "Rothfuss",
        "date_of_birth": date(1973, 6, 6),
        "date_of_death": None,
    })
    return repo.get(Author, author_id)


@pytest.fixture
def sample_genre(repo: CatalogRepository) -> Genre:
    """Create a sample genre for testing."""
    genre_id = repo.insert(Genre, {"name": "Fantasy"})
    return repo.get(Genre, genre_id)


@pytest.fixture
def sample_book(
    repo: CatalogRepository,
    sample_author: Author,
    sample_genre: Genre,
) -> Book:
    """
    Create a sample book with an author and one genre.

    This fixture depends on sample_author and sample_genre fixtures.
    """
    book_id = repo.insert(Book, {
        "title": "The Name of the Wind",
        "author_id": sample_author.id,
        "summary": "The tale of Kvothe, from his childhood in a troupe of traveling players.",
        "isbn": "9781473211896",
        "genres": [sample_genre.id],
    })
    return repo.get(Book, book_id, selectinload(Book.author), selectinload(Book.genres))


@pytest.fixture
def sample_bookinstance(repo: CatalogRepository, sample_book: Book) -> BookInstance:
    """Create an available copy of the sample book."""
    bookinstance_id = repo.insert(BookInstance, {
        "book_id": sample_book.id,
        "imprint": "Gollancz, 2011.",
        "status": BookInstanceStatus.AVAILABLE.value,
        "due_back": None,
    })
    return repo.get(BookInstance, bookinstance_id, selectinload(BookInstance.book))


@pytest.fixture
def loaned_bookinstance(repo: CatalogRepository, sample_book: Book) -> BookInstance:
    """Create a loaned copy of the sample book with a due date."""
    bookinstance_id = repo.insert(BookInstance, {
        "book_id": sample_book.id,
        "imprint": "DAW Books, 2007.",
        "status": BookInstanceStatus.LOANED.value,
        "due_back": date(2020, 6, 1),
    })
    return repo.get(BookInstance, bookinstance_id, selectinload(BookInstance.book))
