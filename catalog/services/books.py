"""
Book Workflows

Request handling for the book pages, independent of HTTP:

- list / detail: query and render
- create / update: show the form; on submit validate, then either show the
  form again with the errors or save and redirect to the book
- delete: confirm; refuse while copies of the book exist

Every function returns an Outcome (see services/outcomes.py).
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from sqlalchemy.orm import selectinload
from starlette.concurrency import run_in_threadpool

from catalog.models import Author, Book, BookInstance, Genre
from catalog.schemas import BookForm, FieldError, RawValue
from catalog.services.aggregate import gather_named
from catalog.services.outcomes import (
    Blocked,
    Choice,
    Invalid,
    NotFound,
    Outcome,
    Page,
    Redirect,
    body_id,
    returns_failure,
)
from catalog.services.repository import CatalogRepository

logger = logging.getLogger(__name__)

BOOK_LIST_URL = "/catalog/books"

# Relationships shown wherever a single book is displayed
BOOK_REFERENCES = (selectinload(Book.author), selectinload(Book.genres))


# =============================================================================
# Helpers
# =============================================================================
def form_references(repo: CatalogRepository) -> dict[str, Callable[[], Any]]:
    """Queries for the author and genre lists of the book form."""
    return {
        "authors": lambda: repo.find(Author, order_by=(Author.family_name, Author.first_name)),
        "genres": lambda: repo.find(Genre, order_by=(Genre.name,)),
    }


def book_with_copies(repo: CatalogRepository, book_id: int) -> dict[str, Callable[[], Any]]:
    """Queries for a book and the copies that refer to it."""
    return {
        "book": lambda: repo.get(Book, book_id, *BOOK_REFERENCES),
        "book_instances": lambda: repo.find(BookInstance, BookInstance.book_id == book_id),
    }


def form_context(
    title: str,
    references: Mapping[str, Any],
    values: Mapping[str, Any],
    errors: list[FieldError] | None = None,
) -> dict[str, Any]:
    """
    Context for book_form.html.

    Authors and genres are wrapped in Choice so the template can pre-select
    the submitted (or stored) author and tick the submitted genres.
    """
    selected_genres = {str(genre_id) for genre_id in values.get("genre", [])}
    selected_author = str(values.get("author", ""))
    return {
        "title": title,
        "authors": [
            Choice(author, str(author.id) == selected_author)
            for author in references["authors"]
        ],
        "genres": [
            Choice(genre, str(genre.id) in selected_genres)
            for genre in references["genres"]
        ],
        "form": dict(values),
        "errors": errors or [],
    }


# =============================================================================
# Read
# =============================================================================
@returns_failure
async def book_list(repo: CatalogRepository) -> Outcome:
    books = await run_in_threadpool(
        repo.find, Book, options=(selectinload(Book.author),), order_by=(Book.title,)
    )
    return Page("book_list", {"title": "Book List", "book_list": books})


@returns_failure
async def book_detail(repo: CatalogRepository, book_id: int) -> Outcome:
    results = await gather_named(book_with_copies(repo, book_id))
    book = results["book"]
    if book is None:
        return NotFound("Book not found")

    return Page("book_detail", {
        "title": book.title,
        "book": book,
        "book_instances": results["book_instances"],
    })


# =============================================================================
# Create
# =============================================================================
@returns_failure
async def book_create_form(repo: CatalogRepository) -> Outcome:
    references = await gather_named(form_references(repo))
    return Page("book_form", form_context("Create Book", references, {}))


@returns_failure
async def book_create(repo: CatalogRepository, raw: Mapping[str, RawValue]) -> Outcome:
    result = BookForm.check(raw)

    if not result.is_valid:
        logger.info(f"Book form rejected: {[e.field for e in result.errors]}")
        references = await gather_named(form_references(repo))
        context = form_context("Create Book", references, result.values, result.errors)
        return Invalid("book_form", context, errors=result.errors)

    # Genre ids that name no genre are dropped by the repository, not stored
    book_id = await run_in_threadpool(repo.insert, Book, result.record.to_values())
    logger.info(f"Created book id={book_id}")
    return Redirect(Book.url_for(book_id))


# =============================================================================
# Update
# =============================================================================
@returns_failure
async def book_update_form(repo: CatalogRepository, book_id: int) -> Outcome:
    results = await gather_named({
        "book": lambda: repo.get(Book, book_id, *BOOK_REFERENCES),
        **form_references(repo),
    })
    book = results["book"]
    if book is None:
        return NotFound("Book not found")

    context = form_context("Update Book", results, BookForm.values_from(book))
    context["book"] = book
    return Page("book_form", context)


@returns_failure
async def book_update(
    repo: CatalogRepository,
    book_id: int,
    raw: Mapping[str, RawValue],
) -> Outcome:
    result = BookForm.check(raw)

    if not result.is_valid:
        logger.info(f"Book form rejected for id={book_id}: {[e.field for e in result.errors]}")
        references = await gather_named(form_references(repo))
        context = form_context("Update Book", references, result.values, result.errors)
        return Invalid("book_form", context, errors=result.errors)

    # Unknown genre ids are dropped here too
    book = await run_in_threadpool(repo.replace, Book, book_id, result.record.to_values())
    if book is None:
        return NotFound("Book not found")

    logger.info(f"Updated book id={book_id}")
    return Redirect(book.url)


# =============================================================================
# Delete
# =============================================================================
@returns_failure
async def book_delete_form(repo: CatalogRepository, book_id: int) -> Outcome:
    results = await gather_named(book_with_copies(repo, book_id))
    if results["book"] is None:
        return Redirect(BOOK_LIST_URL)

    return Page("book_delete", {
        "title": "Delete Book",
        "book": results["book"],
        "book_instances": results["book_instances"],
    })


@returns_failure
async def book_delete(repo: CatalogRepository, raw: Mapping[str, RawValue]) -> Outcome:
    """
    Delete the book whose id is posted as "bookid".

    A book that is already gone counts as deleted. A book with copies is
    kept and the confirmation page is shown again listing the copies.
    """
    book_id = body_id(raw, "bookid")
    if book_id is None:
        return Redirect(BOOK_LIST_URL)

    results = await gather_named(book_with_copies(repo, book_id))
    book = results["book"]
    if book is None:
        return Redirect(BOOK_LIST_URL)

    book_instances = results["book_instances"]
    if book_instances:
        logger.info(f"Delete of book id={book_id} blocked by {len(book_instances)} copies")
        return Blocked(
            "book_delete",
            {"title": "Delete Book", "book": book, "book_instances": book_instances},
            dependents=book_instances,
        )

    await run_in_threadpool(repo.remove, Book, book_id)
    logger.info(f"Deleted book id={book_id}")
    return Redirect(BOOK_LIST_URL)
