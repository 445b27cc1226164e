"""
Page Rendering

Turns workflow outcomes into HTTP responses using Jinja2 templates from
catalog/templates/.

Text is stored HTML-escaped (see schemas/forms.py). Templates pass stored
text through the "unescape" filter before Jinja2's autoescaping, so a
title like "Tom & Jerry" is shown as typed, never double-escaped and
never as raw markup:

    {{ book.title|unescape }}
"""

import html
import logging
from pathlib import Path
from typing import Any

from fastapi import Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from catalog.config import get_settings
from catalog.services.outcomes import Failure, NotFound, Outcome, Redirect

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


def unescape(value: Any) -> str:
    """Undo the escaping applied when the text was submitted."""
    if value is None:
        return ""
    return html.unescape(str(value))


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["unescape"] = unescape


def render(
    request: Request,
    view: str,
    context: dict[str, Any],
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    """Render catalog/templates/<view>.html with the given context."""
    return templates.TemplateResponse(
        request,
        f"{view}.html",
        context,
        status_code=status_code,
    )


def render_error(request: Request, status_code: int, message: str, detail: str | None = None) -> HTMLResponse:
    return render(
        request,
        "error",
        {"title": "Error", "message": message, "status_code": status_code, "detail": detail},
        status_code=status_code,
    )


def respond(request: Request, outcome: Outcome) -> Response:
    """
    Map a workflow outcome to a response.

    Page (including Invalid and Blocked) -> 200, Redirect -> 303,
    NotFound -> 404, Failure -> 500 with no database details unless the
    app runs in debug mode.
    """
    if isinstance(outcome, Redirect):
        # 303 so the browser follows a POST with a GET
        return RedirectResponse(outcome.url, status_code=status.HTTP_303_SEE_OTHER)

    if isinstance(outcome, NotFound):
        return render_error(request, status.HTTP_404_NOT_FOUND, outcome.message)

    if isinstance(outcome, Failure):
        detail = str(outcome.error) if get_settings().debug else None
        return render_error(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "A database error occurred. Please try again later.",
            detail,
        )

    return render(request, outcome.template, outcome.context)
