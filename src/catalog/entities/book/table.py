"""Book database table model."""

from sqlmodel import Field

from src.catalog.entities._base import EntityTable
from src.catalog.entities.book.entity import Book


class BookTable(EntityTable, table=True):
    """Database persistence model for books.

    This represents how the Book entity is stored in the database.
    It's separate from the domain entity so the audit columns never leak
    into the catalog contract.
    """

    __tablename__ = "books"

    isbn: str = Field(unique=True, index=True, nullable=False)
    title: str
    total_pages: int = Field(default=0)
    views: int = Field(default=0)

    @classmethod
    def from_book(cls, book: Book) -> "BookTable":
        return cls(
            isbn=book.isbn,
            title=book.title,
            total_pages=book.total_pages,
            views=book.views,
        )

    def to_book(self) -> Book:
        return Book.model_validate(self, from_attributes=True)
