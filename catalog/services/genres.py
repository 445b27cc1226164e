"""
Genre Workflows

Request handling for the genre pages. Creating a genre whose name is
already taken (ignoring case) leads to the existing genre instead of a
duplicate. A genre cannot be deleted while books are filed under it.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from sqlalchemy import func
from starlette.concurrency import run_in_threadpool

from catalog.models import Book, Genre
from catalog.schemas import GenreForm, RawValue
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

GENRE_LIST_URL = "/catalog/genres"


def genre_with_books(repo: CatalogRepository, genre_id: int) -> dict[str, Callable[[], Any]]:
    return {
        "genre": lambda: repo.get(Genre, genre_id),
        "genre_books": lambda: repo.find(
            Book, Book.genres.any(Genre.id == genre_id), order_by=(Book.title,)
        ),
    }


@returns_failure
async def genre_list(repo: CatalogRepository) -> Outcome:
    genres = await run_in_threadpool(repo.find, Genre, order_by=(Genre.name,))
    return Page("genre_list", {"title": "Genre List", "genre_list": genres})


@returns_failure
async def genre_detail(repo: CatalogRepository, genre_id: int) -> Outcome:
    results = await gather_named(genre_with_books(repo, genre_id))
    genre = results["genre"]
    if genre is None:
        return NotFound("Genre not found")

    return Page("genre_detail", {
        "title": "Genre Detail",
        "genre": genre,
        "genre_books": results["genre_books"],
    })


@returns_failure
async def genre_create_form(repo: CatalogRepository) -> Outcome:
    return Page("genre_form", {"title": "Create Genre", "form": {}, "errors": []})


@returns_failure
async def genre_create(repo: CatalogRepository, raw: Mapping[str, RawValue]) -> Outcome:
    result = GenreForm.check(raw)
    if not result.is_valid:
        logger.info(f"Genre form rejected: {[e.field for e in result.errors]}")
        return Invalid(
            "genre_form",
            {"title": "Create Genre", "form": result.values, "errors": result.errors},
            errors=result.errors,
        )

    name = result.record.name
    existing = await run_in_threadpool(
        repo.find, Genre, func.lower(Genre.name) == name.lower()
    )
    if existing:
        return Redirect(existing[0].url)

    genre_id = await run_in_threadpool(repo.insert, Genre, result.record.to_values())
    logger.info(f"Created genre id={genre_id}")
    return Redirect(Genre.url_for(genre_id))


@returns_failure
async def genre_update_form(repo: CatalogRepository, genre_id: int) -> Outcome:
    genre = await run_in_threadpool(repo.get, Genre, genre_id)
    if genre is None:
        return NotFound("Genre not found")

    return Page("genre_form", {
        "title": "Update Genre",
        "genre": genre,
        "form": GenreForm.values_from(genre),
        "errors": [],
    })


@returns_failure
async def genre_update(
    repo: CatalogRepository,
    genre_id: int,
    raw: Mapping[str, RawValue],
) -> Outcome:
    result = GenreForm.check(raw)
    if not result.is_valid:
        logger.info(f"Genre form rejected for id={genre_id}: {[e.field for e in result.errors]}")
        return Invalid(
            "genre_form",
            {"title": "Update Genre", "form": result.values, "errors": result.errors},
            errors=result.errors,
        )

    genre = await run_in_threadpool(repo.replace, Genre, genre_id, result.record.to_values())
    if genre is None:
        return NotFound("Genre not found")

    logger.info(f"Updated genre id={genre_id}")
    return Redirect(genre.url)


@returns_failure
async def genre_delete_form(repo: CatalogRepository, genre_id: int) -> Outcome:
    results = await gather_named(genre_with_books(repo, genre_id))
    if results["genre"] is None:
        return Redirect(GENRE_LIST_URL)

    return Page("genre_delete", {
        "title": "Delete Genre",
        "genre": results["genre"],
        "genre_books": results["genre_books"],
    })


@returns_failure
async def genre_delete(repo: CatalogRepository, raw: Mapping[str, RawValue]) -> Outcome:
    """Delete the genre posted as "genreid" unless books are filed under it."""
    genre_id = body_id(raw, "genreid")
    if genre_id is None:
        return Redirect(GENRE_LIST_URL)

    results = await gather_named(genre_with_books(repo, genre_id))
    genre = results["genre"]
    if genre is None:
        return Redirect(GENRE_LIST_URL)

    genre_books = results["genre_books"]
    if genre_books:
        logger.info(f"Delete of genre id={genre_id} blocked by {len(genre_books)} books")
        return Blocked(
            "genre_delete",
            {"title": "Delete Genre", "genre": genre, "genre_books": genre_books},
            dependents=genre_books,
        )

    await run_in_threadpool(repo.remove, Genre, genre_id)
    logger.info(f"Deleted genre id={genre_id}")
    return Redirect(GENRE_LIST_URL)
