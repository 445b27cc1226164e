"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.

- Repository: the persistence gateway. Tests replace get_repository with
  one bound to a test database via app.dependency_overrides.
- FormInput: the submitted form body read into tagged raw values.
- RecordId: a record id taken from the URL path. Ids a primary key cannot
  hold fail validation, which the app renders as a 404 page.
"""

from typing import Annotated

from fastapi import Depends, Path, Request

from catalog.database import SessionLocal
from catalog.schemas import MAX_RECORD_ID, RawValue, read_form
from catalog.services.repository import CatalogRepository


def get_repository() -> CatalogRepository:
    """
    Persistence gateway dependency.

    The gateway opens a session per operation, so one instance per request
    is all that is needed.
    """
    return CatalogRepository(SessionLocal)


Repository = Annotated[CatalogRepository, Depends(get_repository)]


async def get_form_input(request: Request) -> dict[str, RawValue]:
    """Parse an application/x-www-form-urlencoded or multipart body."""
    form = await request.form()
    return read_form(form)


FormInput = Annotated[dict[str, RawValue], Depends(get_form_input)]


RecordId = Annotated[int, Path(ge=1, le=MAX_RECORD_ID)]
