"""
Concurrent Query Aggregation

Pages are often assembled from several independent queries: the catalog
home page shows five counts, a book page shows the book and its copies.
gather_named() runs such queries concurrently and joins their results into
one mapping.

The repository is synchronous (SQLAlchemy sessions are blocking), so every
operation runs in Starlette's thread pool while the request coroutine waits.
Each repository call uses its own session, which is what makes running them
side by side safe.

Usage:
    results = await gather_named({
        "book": lambda: repo.get(Book, book_id),
        "book_instances": lambda: repo.find(BookInstance, BookInstance.book_id == book_id),
    })
    results["book"], results["book_instances"]

If any operation raises, the first exception propagates to the caller and
no partial results are returned. Operations still waiting to start are
cancelled; ones already running in a thread are waited for and their
results discarded.
"""

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import Any

from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)


async def gather_named(operations: Mapping[str, Callable[[], Any]]) -> dict[str, Any]:
    """
    Run named blocking operations concurrently.

    Args:
        operations: Name -> zero-argument callable

    Returns:
        Name -> the callable's return value, for every name given

    Raises:
        Exception: The first exception raised by any operation
    """
    names = list(operations)
    tasks = [
        asyncio.ensure_future(run_in_threadpool(operation))
        for operation in operations.values()
    ]
    try:
        results = await asyncio.gather(*tasks)
    except Exception as exc:
        logger.debug(f"Aggregation of {names} failed: {exc!r}")
        for task in tasks:
            task.cancel()
        # Wait for the siblings so none outlives the request
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return dict(zip(names, results))
