"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Form, Request
from fastapi.templating import Jinja2Templates
from sqlmodel import Session

from library_catalog.api.http.app_data import ApplicationDependencies
from library_catalog.entities.book import BookDraft, BookRepository
from library_catalog.runtime.config.config_data import CatalogConfig


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the dependencies created at application startup."""
    return request.app.state.app_dependencies


def get_db_session(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> Iterator[Session]:
    """Yield a request-scoped session.

    Handlers commit explicitly; anything left uncommitted when the handler
    raises is rolled back.
    """
    session = app_deps.database_service.get_session()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_book_repository(session: Session = Depends(get_db_session)) -> BookRepository:
    """Get a book repository bound to the request session."""
    return BookRepository(session)


def get_templates(request: Request) -> Jinja2Templates:
    """Get the template renderer."""
    return request.app.state.templates


def get_catalog_config(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> CatalogConfig:
    """Get the catalog browsing settings."""
    return app_deps.config.catalog


def get_book_form(
    title: str = Form(""),
    author: str = Form(""),
    genre: str = Form(""),
    year: str = Form(""),
) -> BookDraft:
    """Collect the submitted book form fields exactly as entered."""
    return BookDraft(title=title, author=author, genre=genre, year=year)
