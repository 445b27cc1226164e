"""
Workflow Outcomes

Every catalog workflow returns one of the outcome values below instead of
writing a response or raising for expected conditions. The routers hand the
outcome to catalog.rendering.respond(), which picks the status code:

    Page      200  a page to render
    Invalid   200  a form shown again with field errors; nothing was saved
    Blocked   200  a delete confirmation shown again; dependents still exist
    Redirect  303  after a successful write, or for a target that is gone
    NotFound  404  the record the page is about does not exist
    Failure   500  a database error; the details are logged, not shown
"""

import functools
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from catalog.schemas import MAX_RECORD_ID, FieldError, RawValue, Scalar

logger = logging.getLogger(__name__)


@dataclass
class Page:
    """Render template (without the .html suffix) with context."""

    template: str
    context: dict[str, Any] = field(default_factory=dict)


@dataclass
class Invalid(Page):
    """A rejected form, rendered with the sanitized values and the errors."""

    errors: list[FieldError] = field(default_factory=list)


@dataclass
class Blocked(Page):
    """A delete that was refused because other records still refer to the target."""

    dependents: list[Any] = field(default_factory=list)


@dataclass
class Redirect:
    url: str


@dataclass
class NotFound:
    message: str


@dataclass
class Failure:
    """A database error, kept as raised."""

    error: Exception


Outcome = Page | Redirect | NotFound | Failure


@dataclass
class Choice:
    """
    An option in a form's reference list.

    checked marks it as selected (a ticked genre checkbox, the chosen
    author or book).
    """

    item: Any
    checked: bool = False


def returns_failure(
    func: Callable[..., Awaitable[Outcome]],
) -> Callable[..., Awaitable[Outcome]]:
    """
    Turn a database error raised by a workflow into a Failure outcome.

    The error is not retried; it is logged and returned as is.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Outcome:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as exc:
            logger.error(f"Database error in {func.__name__}: {exc}")
            return Failure(exc)

    return wrapper


def body_id(raw: Mapping[str, RawValue], name: str) -> int | None:
    """
    Read a record id posted in the form body (e.g. "bookid").

    Returns None when the field is missing, not an integer, or outside the
    range a primary key can hold.
    """
    value = raw.get(name)
    if not isinstance(value, Scalar):
        return None
    try:
        record_id = int(value.value.strip())
    except ValueError:
        return None
    if not 1 <= record_id <= MAX_RECORD_ID:
        return None
    return record_id
