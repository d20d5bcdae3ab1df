"""Consolidated data layer tests.

This module covers:
- Book entity operations (creation, validation, equality, UUID handling)
- Book table operations (persistence through SQLModel)
- Book repository operations (using in-memory SQLite for fast, real database testing)
"""

from uuid import UUID

import pytest
from pydantic import ValidationError
from sqlmodel import Session, select

from library_catalog.core.errors import BookValidationError
from library_catalog.entities.book import Book, BookDraft, BookRepository, BookTable
from tests.fixtures.core import make_book_records


class TestBookEntity:
    """Test Book domain entity."""

    def test_book_creation(self):
        """Test book entity creation with required fields."""
        book = Book(title="Emma", author="Jane Austen")

        assert book.title == "Emma"
        assert book.author == "Jane Austen"
        assert book.genre is None
        assert book.year is None
        assert book.created_at is not None
        UUID(book.id)  # Raises ValueError if invalid

    def test_book_creation_with_explicit_id(self):
        """Book can be created with explicit ID."""
        book = Book(id="book-123", title="Emma", author="Jane Austen")

        assert book.id == "book-123"

    def test_form_text_is_kept_as_submitted(self):
        """Text is stored untrimmed, blank genre becomes None, year text is parsed."""
        book = Book(title="  Emma ", author=" Jane Austen", genre="   ", year=" 1815 ")

        assert book.title == "  Emma "
        assert book.author == " Jane Austen"
        assert book.genre is None
        assert book.year == 1815

    def test_blank_year_is_none(self):
        assert Book(title="Emma", author="Jane Austen", year="").year is None

    @pytest.mark.parametrize("field", ["title", "author"])
    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_required_fields_reject_blank(self, field, value):
        data = {"title": "Emma", "author": "Jane Austen", field: value}

        with pytest.raises(ValidationError) as exc_info:
            Book(**data)

        errors = exc_info.value.errors()
        assert len(errors) == 1
        assert errors[0]["loc"] == (field,)
        assert errors[0]["msg"] == f'Please provide a value for "{field.title()}"'

    @pytest.mark.parametrize("value", ["nineteen", "19.5", "2001a"])
    def test_year_must_be_whole_number(self, value):
        with pytest.raises(ValidationError) as exc_info:
            Book(title="Emma", author="Jane Austen", year=value)

        assert exc_info.value.errors()[0]["msg"] == 'Please provide a whole number for "Year"'

    @pytest.mark.parametrize("value", ["99999999999999999999", "10000", -10000, 1e12])
    def test_year_must_fit_the_column(self, value):
        with pytest.raises(ValidationError) as exc_info:
            Book(title="Emma", author="Jane Austen", year=value)

        assert exc_info.value.errors()[0]["msg"] == 'Please provide a whole number for "Year"'

    @pytest.mark.parametrize("value, expected", [("-500", -500), ("9999", 9999), (2001.0, 2001)])
    def test_year_bounds_are_inclusive(self, value, expected):
        assert Book(title="Emma", author="Jane Austen", year=value).year == expected

    def test_book_equality(self):
        """Should compare books by their business attributes, ignoring timestamps."""
        book1 = Book(id="1", title="Emma", author="Jane Austen", year=1815)
        book2 = Book(id="1", title="Emma", author="Jane Austen", year=1815)
        book3 = Book(id="2", title="Emma", author="Jane Austen", year=1815)

        assert book1 == book2
        assert book1 != book3
        assert hash(book1) == hash(book2)


class TestBookDraft:
    """Test the unsaved form snapshot."""

    def test_draft_keeps_raw_input(self):
        draft = BookDraft(title="", author="Someone", genre="", year="soon")

        assert draft.fields() == {
            "title": "",
            "author": "Someone",
            "genre": "",
            "year": "soon",
        }
        assert draft.id is None

    def test_draft_from_book(self):
        book = Book(id="b1", title="Emma", author="Jane Austen", genre=None, year=1815)

        draft = BookDraft.from_book(book)

        assert draft.id == "b1"
        assert draft.genre == ""
        assert draft.year == "1815"


class TestBookTable:
    """Test Book database table operations."""

    def test_book_table_creation(self, session: Session):
        row = BookTable(id="test-id", title="Emma", author="Jane Austen", year=1815)

        session.add(row)
        session.commit()

        saved = session.get(BookTable, "test-id")
        assert saved is not None
        assert saved.title == "Emma"
        assert saved.genre is None

    def test_touch_advances_updated_at(self):
        row = BookTable(title="Emma", author="Jane Austen")
        created_at, before = row.created_at, row.updated_at

        row.touch()

        assert row.updated_at >= before
        assert row.created_at == created_at

    def test_table_name(self):
        assert BookTable.__tablename__ == "books"


class TestBookRepository:
    """Test BookRepository against a real in-memory database."""

    def test_create_persists_submitted_fields(self, repository: BookRepository, session: Session):
        created = repository.create(
            {"title": "Emma", "author": "Jane Austen", "genre": "Classic", "year": "1815"}
        )
        session.commit()

        stored = repository.get(created.id)
        assert stored == created
        assert (stored.title, stored.author, stored.genre, stored.year) == (
            "Emma",
            "Jane Austen",
            "Classic",
            1815,
        )
        assert repository.count() == 1

    def test_create_ignores_unknown_and_server_fields(self, repository: BookRepository):
        created = repository.create(
            {"title": "Emma", "author": "Jane Austen", "id": "chosen-by-client", "isbn": "x"}
        )

        assert created.id != "chosen-by-client"

    def test_create_rejects_invalid_input_without_inserting(
        self, repository: BookRepository
    ):
        with pytest.raises(BookValidationError) as exc_info:
            repository.create({"title": "", "author": "", "genre": "", "year": "abc"})

        assert [error.field for error in exc_info.value.errors] == ["title", "author", "year"]
        assert exc_info.value.fields == {"title", "author", "year"}
        assert repository.count() == 0

    def test_create_with_missing_keys_reports_required_messages(
        self, repository: BookRepository
    ):
        with pytest.raises(BookValidationError) as exc_info:
            repository.create({})

        messages = [error.message for error in exc_info.value.errors]
        assert messages == [
            'Please provide a value for "Title"',
            'Please provide a value for "Author"',
        ]

    def test_get_missing_returns_none(self, repository: BookRepository):
        assert repository.get("does-not-exist") is None

    def test_update_replaces_all_fields(self, repository: BookRepository, session: Session):
        created = repository.create(
            {"title": "Emma", "author": "Jane Austen", "genre": "Classic", "year": "1815"}
        )

        updated = repository.update(
            created.id, {"title": "Persuasion", "author": "Jane Austen", "genre": "", "year": ""}
        )
        session.commit()

        assert updated is not None
        assert updated.id == created.id
        stored = repository.get(created.id)
        assert stored.title == "Persuasion"
        assert stored.genre is None
        assert stored.year is None

    def test_update_missing_returns_none(self, repository: BookRepository):
        assert repository.update("nope", {"title": "A", "author": "B"}) is None

    def test_update_invalid_leaves_row_unchanged(
        self, repository: BookRepository, session: Session
    ):
        created = repository.create({"title": "Emma", "author": "Jane Austen"})
        session.commit()

        with pytest.raises(BookValidationError):
            repository.update(created.id, {"title": "", "author": "Jane Austen"})

        session.expire_all()
        assert repository.get(created.id).title == "Emma"

    def test_delete(self, repository: BookRepository, session: Session):
        keep = repository.create({"title": "Emma", "author": "Jane Austen"})
        drop = repository.create({"title": "Dracula", "author": "Bram Stoker"})
        session.commit()

        assert repository.delete(drop.id) is True
        session.commit()

        assert repository.get(drop.id) is None
        assert repository.get(keep.id) is not None
        assert repository.count() == 1

    def test_delete_missing_returns_false(self, repository: BookRepository):
        repository.create({"title": "Emma", "author": "Jane Austen"})

        assert repository.delete("nope") is False
        assert repository.count() == 1

    def test_list_page_orders_by_title(self, repository: BookRepository):
        records = make_book_records(25)
        for record in reversed(records):
            repository.create(record)

        first = repository.list_page(limit=10, offset=0)
        last = repository.list_page(limit=10, offset=20)

        assert [book.title for book in first] == [r["title"] for r in records[:10]]
        assert [book.title for book in last] == [r["title"] for r in records[20:]]

    def test_search_blank_matches_everything_sorted(self, repository: BookRepository):
        for title in ["Mockingjay", "Catching Fire", "The Hunger Games"]:
            repository.create({"title": title, "author": "Suzanne Collins"})

        for query in ["", "   ", None]:
            titles = [book.title for book in repository.search(query)]
            assert titles == ["Catching Fire", "Mockingjay", "The Hunger Games"]

    def test_search_matches_each_field_case_insensitively(self, repository: BookRepository):
        repository.create({"title": "Emma", "author": "Jane Austen", "genre": "Classic", "year": "1815"})
        repository.create({"title": "Dracula", "author": "Bram Stoker", "genre": "Horror", "year": "1897"})

        assert [b.title for b in repository.search("emm")] == ["Emma"]
        assert [b.title for b in repository.search("STOKER")] == ["Dracula"]
        assert [b.title for b in repository.search("horr")] == ["Dracula"]
        assert [b.title for b in repository.search("181")] == ["Emma"]
        assert repository.search("zzz") == []

    def test_search_keeps_surrounding_spaces(self, repository: BookRepository):
        repository.create({"title": "The Hobbit", "author": "J.R.R. Tolkien"})
        repository.create({"title": "Breathe", "author": "Anon"})

        assert [b.title for b in repository.search("the")] == ["Breathe", "The Hobbit"]
        assert [b.title for b in repository.search("the ")] == ["The Hobbit"]

    def test_create_stores_text_as_submitted(self, repository: BookRepository):
        created = repository.create({"title": " Emma", "author": "Jane Austen "})

        stored = repository.get(created.id)
        assert (stored.title, stored.author) == (" Emma", "Jane Austen ")

    def test_search_treats_wildcards_literally(self, repository: BookRepository):
        repository.create({"title": "100% Cotton", "author": "Anon"})
        repository.create({"title": "Plain", "author": "Anon"})

        assert [b.title for b in repository.search("%")] == ["100% Cotton"]
        assert repository.search("_") == []

    def test_list_all(self, repository: BookRepository, session: Session):
        repository.create({"title": "B", "author": "x"})
        repository.create({"title": "A", "author": "y"})

        assert [book.title for book in repository.list_all()] == ["A", "B"]
        rows = session.exec(select(BookTable)).all()
        assert len(rows) == 2
