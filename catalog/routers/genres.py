"""
Genres Router

HTML pages for genres.
Follows the same patterns as the books router.
"""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from catalog.dependencies import FormInput, RecordId, Repository
from catalog.rendering import respond
from catalog.services import genres

router = APIRouter(
    prefix="/catalog",
    tags=["Genres"],
    default_response_class=HTMLResponse,
)


@router.get("/genres", summary="List all genres")
async def list_genres(request: Request, repo: Repository) -> Response:
    return respond(request, await genres.genre_list(repo))


@router.get("/genre/create", summary="Genre create form")
async def create_genre_form(request: Request, repo: Repository) -> Response:
    return respond(request, await genres.genre_create_form(repo))


@router.post("/genre/create", summary="Create a genre")
async def create_genre(request: Request, repo: Repository, form: FormInput) -> Response:
    return respond(request, await genres.genre_create(repo, form))


@router.get("/genre/{genre_id}", summary="Genre detail")
async def genre_detail(request: Request, genre_id: RecordId, repo: Repository) -> Response:
    return respond(request, await genres.genre_detail(repo, genre_id))


@router.get("/genre/{genre_id}/update", summary="Genre update form")
async def update_genre_form(request: Request, genre_id: RecordId, repo: Repository) -> Response:
    return respond(request, await genres.genre_update_form(repo, genre_id))


@router.post("/genre/{genre_id}/update", summary="Update a genre")
async def update_genre(
    request: Request,
    genre_id: RecordId,
    repo: Repository,
    form: FormInput,
) -> Response:
    return respond(request, await genres.genre_update(repo, genre_id, form))


@router.get("/genre/{genre_id}/delete", summary="Genre delete confirmation")
async def delete_genre_form(request: Request, genre_id: RecordId, repo: Repository) -> Response:
    return respond(request, await genres.genre_delete_form(repo, genre_id))


@router.post("/genre/{genre_id}/delete", summary="Delete a genre")
async def delete_genre(
    request: Request,
    genre_id: RecordId,
    repo: Repository,
    form: FormInput,
) -> Response:
    return respond(request, await genres.genre_delete(repo, form))
