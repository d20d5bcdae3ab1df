"""Book catalog routes: list, paginate, search, create, update and delete."""

from fastapi import APIRouter, Depends, Form, Request
from fastapi.templating import Jinja2Templates
from loguru import logger
from sqlmodel import Session
from starlette.responses import RedirectResponse, Response

from library_catalog.api.http.app_data import ApplicationDependencies
from library_catalog.api.http.deps import (
    get_app_dependencies,
    get_book_form,
    get_book_repository,
    get_catalog_config,
    get_db_session,
    get_templates,
)
from library_catalog.core.errors import BookValidationError, not_found
from library_catalog.core.pagination import Pagination, parse_page
from library_catalog.entities.book import BookDraft, BookRepository
from library_catalog.runtime.config.config_data import CatalogConfig

NEW_BOOK_TITLE = "Add a New Book"
UPDATE_BOOK_TITLE = "Update Book"
SEARCH_TITLE = "Library Search Results"

router = APIRouter(prefix="/books", tags=["books"])


def _home() -> RedirectResponse:
    # 303 so the browser follows a form POST with a GET
    return RedirectResponse("/", status_code=303)


@router.get("", include_in_schema=False)
@router.get("/", include_in_schema=False)
def list_books() -> RedirectResponse:
    """Redirect to the first page of the book list."""
    return RedirectResponse("/books/page/1", status_code=303)


@router.get("/new")
def new_book(
    request: Request,
    templates: Jinja2Templates = Depends(get_templates),
) -> Response:
    """Show the create new book form."""
    return templates.TemplateResponse(
        request,
        "new-book.html",
        {"book": BookDraft(), "errors": [], "title": NEW_BOOK_TITLE},
    )


@router.post("/new")
def create_book(
    request: Request,
    draft: BookDraft = Depends(get_book_form),
    session: Session = Depends(get_db_session),
    repository: BookRepository = Depends(get_book_repository),
    templates: Jinja2Templates = Depends(get_templates),
) -> Response:
    """Create a book, or redisplay the form with its validation errors."""
    try:
        repository.create(draft.fields())
    except BookValidationError as exc:
        logger.info("Book rejected", fields=sorted(exc.fields))
        return templates.TemplateResponse(
            request,
            "new-book.html",
            {"book": draft, "errors": exc.errors, "title": NEW_BOOK_TITLE},
            status_code=422,
        )
    session.commit()
    return _home()


@router.post("/search")
def search_books(
    request: Request,
    searchbar: str = Form(""),
    repository: BookRepository = Depends(get_book_repository),
    templates: Jinja2Templates = Depends(get_templates),
) -> Response:
    """Search title, author, genre and year; a blank query lists everything."""
    books = repository.search(searchbar)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "books": books,
            "title": SEARCH_TITLE,
            "can_reset": True,
            "mode": "search",
            "search_query": searchbar,
        },
    )


@router.get("/page/{page}")
def list_page(
    request: Request,
    page: str,
    repository: BookRepository = Depends(get_book_repository),
    catalog: CatalogConfig = Depends(get_catalog_config),
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
    templates: Jinja2Templates = Depends(get_templates),
) -> Response:
    """Render one page of books sorted by title."""
    page_number = parse_page(page)
    if page_number is None:
        raise not_found()

    pagination = Pagination(
        page=page_number, page_size=catalog.page_size, total=repository.count()
    )
    if not pagination.is_valid:
        raise not_found()

    books = repository.list_page(limit=pagination.page_size, offset=pagination.offset)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "books": books,
            "title": app_deps.config.app.title,
            "mode": "list",
            "pagination": pagination,
            "page": pagination.page,
            "total_pages": pagination.total_pages,
            "prev_page": pagination.prev_page,
            "next_page": pagination.next_page,
        },
    )


@router.get("/{book_id}")
def book_detail(
    request: Request,
    book_id: str,
    repository: BookRepository = Depends(get_book_repository),
    templates: Jinja2Templates = Depends(get_templates),
) -> Response:
    """Show the book detail / update form."""
    book = repository.get(book_id)
    if book is None:
        raise not_found()
    return templates.TemplateResponse(
        request,
        "update-book.html",
        {"book": BookDraft.from_book(book), "errors": [], "title": book.title},
    )


@router.post("/{book_id}")
def update_book(
    request: Request,
    book_id: str,
    draft: BookDraft = Depends(get_book_form),
    session: Session = Depends(get_db_session),
    repository: BookRepository = Depends(get_book_repository),
    templates: Jinja2Templates = Depends(get_templates),
) -> Response:
    """Replace a book's fields, or redisplay the form with its errors."""
    if repository.get(book_id) is None:
        raise not_found()

    try:
        repository.update(book_id, draft.fields())
    except BookValidationError as exc:
        logger.info("Book update rejected", book_id=book_id, fields=sorted(exc.fields))
        return templates.TemplateResponse(
            request,
            "update-book.html",
            {
                "book": draft.model_copy(update={"id": book_id}),
                "errors": exc.errors,
                "title": UPDATE_BOOK_TITLE,
            },
            status_code=422,
        )
    session.commit()
    return _home()


@router.post("/{book_id}/delete")
def delete_book(
    book_id: str,
    session: Session = Depends(get_db_session),
    repository: BookRepository = Depends(get_book_repository),
) -> RedirectResponse:
    """Delete a book. This cannot be undone."""
    if not repository.delete(book_id):
        raise not_found()
    session.commit()
    return _home()
