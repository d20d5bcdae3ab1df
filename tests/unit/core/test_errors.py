from loguru import logger
from starlette.exceptions import HTTPException

from library_catalog.core.errors import (
    NOT_FOUND_MESSAGE,
    BookValidationError,
    CatalogHTTPError,
    FieldError,
    create_http_error,
    not_found,
)


def test_create_http_error_carries_status_and_message():
    err = create_http_error(500, "Something broke")

    assert isinstance(err, CatalogHTTPError)
    assert isinstance(err, HTTPException)
    assert err.status == 500
    assert err.status_code == 500
    assert err.message == "Something broke"
    assert err.detail == "Something broke"


def test_create_http_error_logs_status_and_stack():
    messages = []
    handler_id = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        create_http_error(404, "gone")
    finally:
        logger.remove(handler_id)

    assert len(messages) == 1
    assert "Error status code: 404" in messages[0]
    assert "test_create_http_error_logs_status_and_stack" in messages[0]


def test_not_found():
    err = not_found()

    assert err.status == 404
    assert err.message == NOT_FOUND_MESSAGE


def test_book_validation_error():
    errors = [
        FieldError("title", 'Please provide a value for "Title"'),
        FieldError("year", 'Please provide a whole number for "Year"'),
    ]

    exc = BookValidationError(errors)

    assert exc.errors == errors
    assert exc.fields == {"title", "year"}
    assert str(exc) == (
        'Please provide a value for "Title"; Please provide a whole number for "Year"'
    )
