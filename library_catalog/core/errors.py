"""Error values shared by the data layer and the HTTP layer."""

from __future__ import annotations

import traceback
from dataclasses import dataclass

from loguru import logger
from starlette.exceptions import HTTPException

NOT_FOUND_MESSAGE = "Oops! The page you requested doesn't appear to exist..."
SERVER_ERROR_MESSAGE = "There appears to be a problem with the server."


class CatalogHTTPError(HTTPException):
    """HTTP error forwarded to the application's error pages."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(status_code=status_code, detail=message)
        self.message = message

    @property
    def status(self) -> int:
        return self.status_code


def create_http_error(status: int, message: str) -> CatalogHTTPError:
    """Build an error for ``status``, log it with the current stack, and return it.

    The caller raises the returned error so the registered exception handlers
    render the matching error page.
    """
    err = CatalogHTTPError(status, message)

    stack = "".join(traceback.format_stack(limit=8)[:-1])
    logger.bind(status_code=status).warning(
        "Error status code: {}\n{}", status, stack
    )
    return err


def not_found() -> CatalogHTTPError:
    return create_http_error(404, NOT_FOUND_MESSAGE)


@dataclass(frozen=True)
class FieldError:
    """A single violated constraint on a book field."""

    field: str
    message: str


class BookValidationError(Exception):
    """Raised by the data layer when submitted book fields fail validation."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        super().__init__("; ".join(error.message for error in errors))

    @property
    def fields(self) -> set[str]:
        return {error.field for error in self.errors}
