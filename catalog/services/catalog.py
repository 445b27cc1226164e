"""
Catalog Home

The home page shows how many books, copies, available copies, authors and
genres the library holds, counted concurrently.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from catalog.models import Author, Book, BookInstance, BookInstanceStatus, Genre
from catalog.services.aggregate import gather_named
from catalog.services.outcomes import Outcome, Page
from catalog.services.repository import CatalogRepository

logger = logging.getLogger(__name__)


async def index(repo: CatalogRepository) -> Outcome:
    """
    Render the home page.

    A failed count does not fail the page: it is rendered with an error
    notice in place of the counts.
    """
    try:
        counts = await gather_named({
            "book_count": lambda: repo.count(Book),
            "book_instance_count": lambda: repo.count(BookInstance),
            "book_instance_available_count": lambda: repo.count(
                BookInstance, BookInstance.status == BookInstanceStatus.AVAILABLE.value
            ),
            "author_count": lambda: repo.count(Author),
            "genre_count": lambda: repo.count(Genre),
        })
    except SQLAlchemyError as exc:
        logger.error(f"Could not count catalog records: {exc}")
        return Page("index", {"title": "Local Library Home", "error": True, "data": {}})

    return Page("index", {"title": "Local Library Home", "error": False, "data": counts})
