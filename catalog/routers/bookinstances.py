"""
Book Instances Router

HTML pages for individual copies of books.
"""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from catalog.dependencies import FormInput, RecordId, Repository
from catalog.rendering import respond
from catalog.services import bookinstances

router = APIRouter(
    prefix="/catalog",
    tags=["Book Instances"],
    default_response_class=HTMLResponse,
)


@router.get("/bookinstances", summary="List all copies")
async def list_bookinstances(request: Request, repo: Repository) -> Response:
    return respond(request, await bookinstances.bookinstance_list(repo))


@router.get("/bookinstance/create", summary="Copy create form")
async def create_bookinstance_form(request: Request, repo: Repository) -> Response:
    return respond(request, await bookinstances.bookinstance_create_form(repo))


@router.post("/bookinstance/create", summary="Create a copy")
async def create_bookinstance(request: Request, repo: Repository, form: FormInput) -> Response:
    return respond(request, await bookinstances.bookinstance_create(repo, form))


@router.get("/bookinstance/{bookinstance_id}", summary="Copy detail")
async def bookinstance_detail(request: Request, bookinstance_id: RecordId, repo: Repository) -> Response:
    return respond(request, await bookinstances.bookinstance_detail(repo, bookinstance_id))


@router.get("/bookinstance/{bookinstance_id}/update", summary="Copy update form")
async def update_bookinstance_form(
    request: Request,
    bookinstance_id: RecordId,
    repo: Repository,
) -> Response:
    return respond(request, await bookinstances.bookinstance_update_form(repo, bookinstance_id))


@router.post("/bookinstance/{bookinstance_id}/update", summary="Update a copy")
async def update_bookinstance(
    request: Request,
    bookinstance_id: RecordId,
    repo: Repository,
    form: FormInput,
) -> Response:
    return respond(
        request, await bookinstances.bookinstance_update(repo, bookinstance_id, form)
    )


@router.get("/bookinstance/{bookinstance_id}/delete", summary="Copy delete confirmation")
async def delete_bookinstance_form(
    request: Request,
    bookinstance_id: RecordId,
    repo: Repository,
) -> Response:
    return respond(request, await bookinstances.bookinstance_delete_form(repo, bookinstance_id))


@router.post("/bookinstance/{bookinstance_id}/delete", summary="Delete a copy")
async def delete_bookinstance(
    request: Request,
    bookinstance_id: RecordId,
    repo: Repository,
    form: FormInput,
) -> Response:
    """The copy to delete is the one posted as "bookinstanceid"."""
    return respond(request, await bookinstances.bookinstance_delete(repo, form))
