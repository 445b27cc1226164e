"""
Author Workflows

Request handling for the author pages. An author cannot be deleted while
any book still names them as its author.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from starlette.concurrency import run_in_threadpool

from catalog.models import Author, Book
from catalog.schemas import AuthorForm, RawValue
from catalog.services.aggregate import gather_named
from catalog.services.outcomes import (
    Blocked,
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

AUTHOR_LIST_URL = "/catalog/authors"


def author_with_books(repo: CatalogRepository, author_id: int) -> dict[str, Callable[[], Any]]:
    return {
        "author": lambda: repo.get(Author, author_id),
        "author_books": lambda: repo.find(
            Book, Book.author_id == author_id, order_by=(Book.title,)
        ),
    }


@returns_failure
async def author_list(repo: CatalogRepository) -> Outcome:
    authors = await run_in_threadpool(
        repo.find, Author, order_by=(Author.family_name, Author.first_name)
    )
    return Page("author_list", {"title": "Author List", "author_list": authors})


@returns_failure
async def author_detail(repo: CatalogRepository, author_id: int) -> Outcome:
    results = await gather_named(author_with_books(repo, author_id))
    author = results["author"]
    if author is None:
        return NotFound("Author not found")

    return Page("author_detail", {
        "title": "Author Detail",
        "author": author,
        "author_books": results["author_books"],
    })


@returns_failure
async def author_create_form(repo: CatalogRepository) -> Outcome:
    return Page("author_form", {"title": "Create Author", "form": {}, "errors": []})


@returns_failure
async def author_create(repo: CatalogRepository, raw: Mapping[str, RawValue]) -> Outcome:
    result = AuthorForm.check(raw)
    if not result.is_valid:
        logger.info(f"Author form rejected: {[e.field for e in result.errors]}")
        return Invalid(
            "author_form",
            {"title": "Create Author", "form": result.values, "errors": result.errors},
            errors=result.errors,
        )

    author_id = await run_in_threadpool(repo.insert, Author, result.record.to_values())
    logger.info(f"Created author id={author_id}")
    return Redirect(Author.url_for(author_id))


@returns_failure
async def author_update_form(repo: CatalogRepository, author_id: int) -> Outcome:
    author = await run_in_threadpool(repo.get, Author, author_id)
    if author is None:
        return NotFound("Author not found")

    return Page("author_form", {
        "title": "Update Author",
        "author": author,
        "form": AuthorForm.values_from(author),
        "errors": [],
    })


@returns_failure
async def author_update(
    repo: CatalogRepository,
    author_id: int,
    raw: Mapping[str, RawValue],
) -> Outcome:
    result = AuthorForm.check(raw)
    if not result.is_valid:
        logger.info(f"Author form rejected for id={author_id}: {[e.field for e in result.errors]}")
        return Invalid(
            "author_form",
            {"title": "Update Author", "form": result.values, "errors": result.errors},
            errors=result.errors,
        )

    author = await run_in_threadpool(repo.replace, Author, author_id, result.record.to_values())
    if author is None:
        return NotFound("Author not found")

    logger.info(f"Updated author id={author_id}")
    return Redirect(author.url)


@returns_failure
async def author_delete_form(repo: CatalogRepository, author_id: int) -> Outcome:
    results = await gather_named(author_with_books(repo, author_id))
    if results["author"] is None:
        return Redirect(AUTHOR_LIST_URL)

    return Page("author_delete", {
        "title": "Delete Author",
        "author": results["author"],
        "author_books": results["author_books"],
    })


@returns_failure
async def author_delete(repo: CatalogRepository, raw: Mapping[str, RawValue]) -> Outcome:
    """Delete the author posted as "authorid" unless books still refer to them."""
    author_id = body_id(raw, "authorid")
    if author_id is None:
        return Redirect(AUTHOR_LIST_URL)

    results = await gather_named(author_with_books(repo, author_id))
    author = results["author"]
    if author is None:
        return Redirect(AUTHOR_LIST_URL)

    author_books = results["author_books"]
    if author_books:
        logger.info(f"Delete of author id={author_id} blocked by {len(author_books)} books")
        return Blocked(
            "author_delete",
            {"title": "Delete Author", "author": author, "author_books": author_books},
            dependents=author_books,
        )

    await run_in_threadpool(repo.remove, Author, author_id)
    logger.info(f"Deleted author id={author_id}")
    return Redirect(AUTHOR_LIST_URL)
