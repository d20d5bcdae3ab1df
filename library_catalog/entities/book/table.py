"""Book database table model."""

from sqlmodel import Field

from library_catalog.entities._base import CatalogRecordTable


class BookTable(CatalogRecordTable, table=True):
    """Database persistence model for books.

    This represents how the Book entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    __tablename__ = "books"

    title: str = Field(index=True)
    author: str
    genre: str | None = None
    year: int | None = None
