"""
Books Router

HTML pages for books: list, detail, create, update and delete.

The handlers only collect the path id and form body, call the matching
workflow in services/books.py and turn its outcome into a response.

NOTE: /book/create is declared before /book/{book_id} so "create" is not
taken for an id.
"""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from catalog.dependencies import FormInput, RecordId, Repository
from catalog.rendering import respond
from catalog.services import books

router = APIRouter(
    prefix="/catalog",
    tags=["Books"],
    default_response_class=HTMLResponse,
)


@router.get("/books", summary="List all books")
async def list_books(request: Request, repo: Repository) -> Response:
    return respond(request, await books.book_list(repo))


@router.get("/book/create", summary="Book create form")
async def create_book_form(request: Request, repo: Repository) -> Response:
    return respond(request, await books.book_create_form(repo))


@router.post("/book/create", summary="Create a book")
async def create_book(request: Request, repo: Repository, form: FormInput) -> Response:
    return respond(request, await books.book_create(repo, form))


@router.get("/book/{book_id}", summary="Book detail")
async def book_detail(request: Request, book_id: RecordId, repo: Repository) -> Response:
    return respond(request, await books.book_detail(repo, book_id))


@router.get("/book/{book_id}/update", summary="Book update form")
async def update_book_form(request: Request, book_id: RecordId, repo: Repository) -> Response:
    return respond(request, await books.book_update_form(repo, book_id))


@router.post("/book/{book_id}/update", summary="Update a book")
async def update_book(
    request: Request,
    book_id: RecordId,
    repo: Repository,
    form: FormInput,
) -> Response:
    return respond(request, await books.book_update(repo, book_id, form))


@router.get("/book/{book_id}/delete", summary="Book delete confirmation")
async def delete_book_form(request: Request, book_id: RecordId, repo: Repository) -> Response:
    return respond(request, await books.book_delete_form(repo, book_id))


@router.post("/book/{book_id}/delete", summary="Delete a book")
async def delete_book(
    request: Request,
    book_id: RecordId,
    repo: Repository,
    form: FormInput,
) -> Response:
    """The book to delete is the one posted as "bookid", not the one in the path."""
    return respond(request, await books.book_delete(repo, form))
