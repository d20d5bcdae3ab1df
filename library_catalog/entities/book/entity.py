"""Entity: Book."""

from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from library_catalog.entities._base import CatalogRecord

REQUIRED_MESSAGES = {
    "title": 'Please provide a value for "Title"',
    "author": 'Please provide a value for "Author"',
}
YEAR_MESSAGE = 'Please provide a whole number for "Year"'
YEAR_RANGE = (-9999, 9999)

BOOK_FIELDS = ("title", "author", "genre", "year")


class Book(CatalogRecord):
    """Book entity representing a catalog record.

    This is the domain model that contains business logic and validation.
    Title and author are required; genre and year are optional. Accepted
    text is kept as submitted; only blank genre and year become None.
    """

    title: str = Field(description="Title")
    author: str = Field(description="Author")
    genre: str | None = Field(default=None, description="Genre")
    year: int | None = Field(default=None, description="Publication year")

    @field_validator("title", "author", mode="before")
    @classmethod
    def _require_text(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise PydanticCustomError("required", REQUIRED_MESSAGES[info.field_name])
        return value

    @field_validator("genre", mode="before")
    @classmethod
    def _blank_genre(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("year", mode="before")
    @classmethod
    def _parse_year(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, bool):
            raise PydanticCustomError("whole_number", YEAR_MESSAGE)
        if isinstance(value, str):
            if not value.strip():
                return None
            try:
                value = int(value)
            except ValueError:
                raise PydanticCustomError("whole_number", YEAR_MESSAGE) from None
        if isinstance(value, float):
            if not value.is_integer():
                raise PydanticCustomError("whole_number", YEAR_MESSAGE)
            value = int(value)
        # Keeps the value inside what every database integer column can hold
        if isinstance(value, int) and not YEAR_RANGE[0] <= value <= YEAR_RANGE[1]:
            raise PydanticCustomError("whole_number", YEAR_MESSAGE)
        return value

    def __eq__(self, other: Any) -> bool:
        """Compare books by business attributes, ignoring timestamps."""
        if not isinstance(other, Book):
            return False

        return (
            self.id == other.id
            and self.title == other.title
            and self.author == other.author
            and self.genre == other.genre
            and self.year == other.year
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((self.id, self.title, self.author, self.genre, self.year))


class BookDraft(BaseModel):
    """Unsaved book built from raw form input.

    Holds exactly what the user submitted so a form can be redisplayed
    alongside its validation errors.
    """

    id: str | None = None
    title: str = ""
    author: str = ""
    genre: str = ""
    year: str = ""

    @field_validator("title", "author", "genre", "year", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @classmethod
    def from_book(cls, book: Book) -> "BookDraft":
        return cls(
            id=book.id,
            title=book.title,
            author=book.author,
            genre=book.genre,
            year=book.year,
        )

    def fields(self) -> dict[str, str]:
        """Submitted values keyed by book field name."""
        return self.model_dump(include=set(BOOK_FIELDS))
