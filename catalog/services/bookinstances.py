"""
BookInstance Workflows

Request handling for the pages about individual copies of books. Same
shape as the book workflows; deleting a copy is never blocked.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy.orm import selectinload
from starlette.concurrency import run_in_threadpool

from catalog.models import Book, BookInstance, BookInstanceStatus
from catalog.schemas import BookInstanceForm, FieldError, RawValue
from catalog.services.aggregate import gather_named
from catalog.services.outcomes import (
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

BOOKINSTANCE_LIST_URL = "/catalog/bookinstances"


def copy_title(prefix: str, bookinstance: BookInstance) -> str:
    # The referenced book may have been removed
    title = bookinstance.book.title if bookinstance.book is not None else "Unknown book"
    return f"{prefix}: {title}"


def book_titles(repo: CatalogRepository) -> list[Book]:
    return repo.find(Book, order_by=(Book.title,))


def form_context(
    title: str,
    books: Sequence[Book],
    values: Mapping[str, Any],
    errors: list[FieldError] | None = None,
) -> dict[str, Any]:
    """Context for bookinstance_form.html, with the chosen book pre-selected."""
    selected_book = str(values.get("book", ""))
    selected_status = str(values.get("status") or BookInstanceStatus.MAINTENANCE.value)
    return {
        "title": title,
        "book_list": [Choice(book, str(book.id) == selected_book) for book in books],
        "statuses": [
            Choice(status.value, status.value == selected_status)
            for status in BookInstanceStatus
        ],
        "form": dict(values),
        "errors": errors or [],
    }


# =============================================================================
# Read
# =============================================================================
@returns_failure
async def bookinstance_list(repo: CatalogRepository) -> Outcome:
    bookinstances = await run_in_threadpool(
        repo.find, BookInstance, options=(selectinload(BookInstance.book),)
    )
    return Page("bookinstance_list", {
        "title": "Book Instance List",
        "bookinstance_list": bookinstances,
    })


@returns_failure
async def bookinstance_detail(repo: CatalogRepository, bookinstance_id: int) -> Outcome:
    bookinstance = await run_in_threadpool(
        repo.get, BookInstance, bookinstance_id, selectinload(BookInstance.book)
    )
    if bookinstance is None:
        return NotFound("Book copy not found")

    return Page("bookinstance_detail", {
        "title": copy_title("Copy", bookinstance),
        "bookinstance": bookinstance,
    })


# =============================================================================
# Create
# =============================================================================
@returns_failure
async def bookinstance_create_form(repo: CatalogRepository) -> Outcome:
    books = await run_in_threadpool(book_titles, repo)
    return Page("bookinstance_form", form_context("Create BookInstance", books, {}))


@returns_failure
async def bookinstance_create(repo: CatalogRepository, raw: Mapping[str, RawValue]) -> Outcome:
    result = BookInstanceForm.check(raw)

    if not result.is_valid:
        logger.info(f"BookInstance form rejected: {[e.field for e in result.errors]}")
        books = await run_in_threadpool(book_titles, repo)
        context = form_context("Create BookInstance", books, result.values, result.errors)
        return Invalid("bookinstance_form", context, errors=result.errors)

    bookinstance_id = await run_in_threadpool(
        repo.insert, BookInstance, result.record.to_values()
    )
    logger.info(f"Created book instance id={bookinstance_id}")
    return Redirect(BookInstance.url_for(bookinstance_id))


# =============================================================================
# Update
# =============================================================================
@returns_failure
async def bookinstance_update_form(repo: CatalogRepository, bookinstance_id: int) -> Outcome:
    results = await gather_named({
        "bookinstance": lambda: repo.get(
            BookInstance, bookinstance_id, selectinload(BookInstance.book)
        ),
        "books": lambda: book_titles(repo),
    })
    bookinstance = results["bookinstance"]
    if bookinstance is None:
        return NotFound("Book copy not found")

    context = form_context(
        copy_title("Update", bookinstance),
        results["books"],
        BookInstanceForm.values_from(bookinstance),
    )
    context["bookinstance"] = bookinstance
    return Page("bookinstance_form", context)


@returns_failure
async def bookinstance_update(
    repo: CatalogRepository,
    bookinstance_id: int,
    raw: Mapping[str, RawValue],
) -> Outcome:
    result = BookInstanceForm.check(raw)

    if not result.is_valid:
        logger.info(
            f"BookInstance form rejected for id={bookinstance_id}: "
            f"{[e.field for e in result.errors]}"
        )
        books = await run_in_threadpool(book_titles, repo)
        context = form_context("Update BookInstance", books, result.values, result.errors)
        return Invalid("bookinstance_form", context, errors=result.errors)

    bookinstance = await run_in_threadpool(
        repo.replace, BookInstance, bookinstance_id, result.record.to_values()
    )
    if bookinstance is None:
        return NotFound("Book copy not found")

    logger.info(f"Updated book instance id={bookinstance_id}")
    return Redirect(bookinstance.url)


# =============================================================================
# Delete
# =============================================================================
@returns_failure
async def bookinstance_delete_form(repo: CatalogRepository, bookinstance_id: int) -> Outcome:
    bookinstance = await run_in_threadpool(
        repo.get, BookInstance, bookinstance_id, selectinload(BookInstance.book)
    )
    if bookinstance is None:
        return Redirect(BOOKINSTANCE_LIST_URL)

    return Page("bookinstance_delete", {
        "title": copy_title("Delete Copy", bookinstance),
        "bookinstance": bookinstance,
    })


@returns_failure
async def bookinstance_delete(repo: CatalogRepository, raw: Mapping[str, RawValue]) -> Outcome:
    """Delete the copy whose id is posted as "bookinstanceid"; a missing copy counts as deleted."""
    bookinstance_id = body_id(raw, "bookinstanceid")
    if bookinstance_id is not None:
        removed = await run_in_threadpool(repo.remove, BookInstance, bookinstance_id)
        if removed:
            logger.info(f"Deleted book instance id={bookinstance_id}")
    return Redirect(BOOKINSTANCE_LIST_URL)
