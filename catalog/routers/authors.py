"""
Authors Router

HTML pages for authors.
Follows the same patterns as the books router.
"""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from catalog.dependencies import FormInput, RecordId, Repository
from catalog.rendering import respond
from catalog.services import authors

router = APIRouter(
    prefix="/catalog",
    tags=["Authors"],
    default_response_class=HTMLResponse,
)


@router.get("/authors", summary="List all authors")
async def list_authors(request: Request, repo: Repository) -> Response:
    return respond(request, await authors.author_list(repo))


@router.get("/author/create", summary="Author create form")
async def create_author_form(request: Request, repo: Repository) -> Response:
    return respond(request, await authors.author_create_form(repo))


@router.post("/author/create", summary="Create an author")
async def create_author(request: Request, repo: Repository, form: FormInput) -> Response:
    return respond(request, await authors.author_create(repo, form))


@router.get("/author/{author_id}", summary="Author detail")
async def author_detail(request: Request, author_id: RecordId, repo: Repository) -> Response:
    return respond(request, await authors.author_detail(repo, author_id))


@router.get("/author/{author_id}/update", summary="Author update form")
async def update_author_form(request: Request, author_id: RecordId, repo: Repository) -> Response:
    return respond(request, await authors.author_update_form(repo, author_id))


@router.post("/author/{author_id}/update", summary="Update an author")
async def update_author(
    request: Request,
    author_id: RecordId,
    repo: Repository,
    form: FormInput,
) -> Response:
    return respond(request, await authors.author_update(repo, author_id, form))


@router.get("/author/{author_id}/delete", summary="Author delete confirmation")
async def delete_author_form(request: Request, author_id: RecordId, repo: Repository) -> Response:
    return respond(request, await authors.author_delete_form(repo, author_id))


@router.post("/author/{author_id}/delete", summary="Delete an author")
async def delete_author(
    request: Request,
    author_id: RecordId,
    repo: Repository,
    form: FormInput,
) -> Response:
    return respond(request, await authors.author_delete(repo, form))
