"""Site root routes."""

from fastapi import APIRouter
from starlette.responses import RedirectResponse

from library_catalog.core.errors import SERVER_ERROR_MESSAGE, create_http_error

router = APIRouter(tags=["index"])


@router.get("/", include_in_schema=False)
async def home() -> RedirectResponse:
    """Redirect to the book list."""
    return RedirectResponse("/books", status_code=303)


@router.get("/error", include_in_schema=False)
async def server_error() -> None:
    """Deliberately trigger the 500 error page."""
    raise create_http_error(500, SERVER_ERROR_MESSAGE)
