"""Book repository for data access operations."""

from collections.abc import Mapping
from typing import Any

from loguru import logger
from pydantic import ValidationError
from sqlalchemy import String, cast, func, or_
from sqlmodel import Session, col, select

from library_catalog.core.errors import BookValidationError, FieldError
from library_catalog.entities.book.entity import BOOK_FIELDS, REQUIRED_MESSAGES, Book
from library_catalog.entities.book.table import BookTable


def _field_errors(exc: ValidationError) -> list[FieldError]:
    """Flatten a pydantic error into one entry per violated field constraint."""
    errors = []
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "book"
        if error["type"] == "missing" and field in REQUIRED_MESSAGES:
            message = REQUIRED_MESSAGES[field]
        else:
            message = error["msg"]
        errors.append(FieldError(field=field, message=message))
    return errors


class BookRepository:
    """Data-access layer for books.

    Mutating calls flush but do not commit; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def build(data: Mapping[str, Any], **extra: Any) -> Book:
        """Validate submitted fields into an unsaved Book.

        Raises:
            BookValidationError: if any field violates its constraints.
        """
        values = {name: data.get(name) for name in BOOK_FIELDS}
        try:
            return Book.model_validate({**values, **extra})
        except ValidationError as exc:
            raise BookValidationError(_field_errors(exc)) from exc

    def create(self, data: Mapping[str, Any]) -> Book:
        """Create a new book from submitted fields."""
        book = self.build(data)
        row = BookTable(**book.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        logger.info("Book created", book_id=row.id, title=row.title)
        return Book.model_validate(row, from_attributes=True)

    def get(self, book_id: str) -> Book | None:
        """Get a book by ID."""
        row = self._session.get(BookTable, book_id)
        if row is None:
            return None
        return Book.model_validate(row, from_attributes=True)

    def update(self, book_id: str, data: Mapping[str, Any]) -> Book | None:
        """Replace every editable field of an existing book.

        Returns None when the book does not exist. The stored row is left
        untouched when validation fails.
        """
        row = self._session.get(BookTable, book_id)
        if row is None:
            return None

        book = self.build(data, id=row.id, created_at=row.created_at)
        for name in BOOK_FIELDS:
            setattr(row, name, getattr(book, name))
        row.touch()

        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        logger.info("Book updated", book_id=row.id)
        return Book.model_validate(row, from_attributes=True)

    def delete(self, book_id: str) -> bool:
        """Delete a book. Returns False if it did not exist."""
        row = self._session.get(BookTable, book_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        logger.info("Book deleted", book_id=book_id)
        return True

    def count(self) -> int:
        """Total number of books."""
        statement = select(func.count()).select_from(BookTable)
        return self._session.exec(statement).one()

    def list_page(self, limit: int, offset: int) -> list[Book]:
        """One slice of the catalog, ordered by title."""
        statement = (
            select(BookTable)
            .order_by(col(BookTable.title).asc(), col(BookTable.id).asc())
            .offset(offset)
            .limit(limit)
        )
        rows = self._session.exec(statement).all()
        return [Book.model_validate(row, from_attributes=True) for row in rows]

    def search(self, query: str | None) -> list[Book]:
        """Books whose title, author, genre or year contain ``query``.

        Matching is case-insensitive. A blank query matches every book.
        """
        statement = select(BookTable)

        term = (query or "").lower()
        if term.strip():
            statement = statement.where(
                or_(
                    func.lower(col(BookTable.title), type_=String).contains(
                        term, autoescape=True
                    ),
                    func.lower(col(BookTable.author), type_=String).contains(
                        term, autoescape=True
                    ),
                    func.lower(col(BookTable.genre), type_=String).contains(
                        term, autoescape=True
                    ),
                    cast(col(BookTable.year), String).contains(term, autoescape=True),
                )
            )

        statement = statement.order_by(col(BookTable.title).asc(), col(BookTable.id).asc())
        rows = self._session.exec(statement).all()
        logger.debug("Book search", query=term, matches=len(rows))
        return [Book.model_validate(row, from_attributes=True) for row in rows]

    def list_all(self) -> list[Book]:
        """List all books ordered by title."""
        return self.search(None)
