"""
Catalog Home Router

The catalog landing page with record counts.
"""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from catalog.dependencies import Repository
from catalog.rendering import respond
from catalog.services.catalog import index as catalog_index

router = APIRouter(
    prefix="/catalog",
    tags=["Catalog"],
    default_response_class=HTMLResponse,
)


@router.get("", summary="Catalog home")
async def index(request: Request, repo: Repository) -> Response:
    return respond(request, await catalog_index(repo))
