"""Unit tests for the Book entity and its table model."""

import pytest
from pydantic import ValidationError

from src.catalog.entities.book import Book, BookCreate, BookTable


class TestBook:
    """Test the Book domain model."""

    def test_defaults(self):
        book = Book(isbn="978-0-13", title="Clean Code")

        assert book.total_pages == 0
        assert book.views == 0

    def test_book_is_frozen(self):
        book = Book(isbn="978-0-13", title="Clean Code", total_pages=464)

        with pytest.raises(ValidationError):
            book.views = 5

    def test_with_views_returns_copy(self):
        book = Book(isbn="978-0-13", title="Clean Code", total_pages=464)

        viewed = book.with_views(3)

        assert viewed.views == 3
        assert book.views == 0
        assert viewed.isbn == book.isbn
        assert viewed.title == book.title
        assert viewed.total_pages == book.total_pages

    def test_with_views_never_decreases(self):
        book = Book(isbn="978-0-13", title="Clean Code", views=4)

        with pytest.raises(ValueError):
            book.with_views(3)

    @pytest.mark.parametrize(
        "fields",
        [
            {"isbn": "", "title": "Empty"},
            {"isbn": "1", "title": "Negative", "total_pages": -1},
            {"isbn": "1", "title": "Negative", "views": -1},
        ],
    )
    def test_invalid_books_rejected(self, fields):
        with pytest.raises(ValidationError):
            Book(**fields)


class TestBookCreate:
    """Test the candidate model accepted by the create use case."""

    def test_to_book_starts_with_zero_views(self):
        candidate = BookCreate(isbn="978-0-13", title="Clean Code", total_pages=464)

        book = candidate.to_book()

        assert book == Book(isbn="978-0-13", title="Clean Code", total_pages=464, views=0)

    def test_isbn_is_stripped(self):
        candidate = BookCreate(isbn="  978-0-13 ", title="Clean Code")

        assert candidate.isbn == "978-0-13"

    def test_blank_isbn_rejected(self):
        with pytest.raises(ValidationError):
            BookCreate(isbn="   ", title="Blank")

    def test_views_are_not_accepted_from_callers(self):
        candidate = BookCreate.model_validate(
            {"isbn": "1", "title": "T", "total_pages": 10, "views": 99}
        )

        assert candidate.to_book().views == 0


class TestBookTable:
    """Test the persistence model."""

    def test_round_trip_through_table(self, session):
        book = Book(isbn="978-0-13", title="Clean Code", total_pages=464, views=2)

        row = BookTable.from_book(book)
        session.add(row)
        session.commit()
        session.refresh(row)

        assert row.id
        assert row.created_at is not None
        assert row.deleted_at is None
        assert row.to_book() == book
