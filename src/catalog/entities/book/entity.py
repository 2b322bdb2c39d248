"""Entity: Book."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Book(BaseModel):
    """Book entity representing a catalog record.

    The ISBN is the natural identifier. Everything except ``views`` is fixed
    at creation, so the model is frozen and stores hand out updated copies.
    """

    model_config = ConfigDict(frozen=True)

    isbn: str = Field(min_length=1, description="International Standard Book Number")
    title: str = Field(description="Display title")
    total_pages: int = Field(default=0, ge=0, description="Number of pages")
    views: int = Field(default=0, ge=0, description="Successful reads by ISBN")

    def with_views(self, views: int) -> "Book":
        """Return a copy carrying a new view count."""
        if views < self.views:
            raise ValueError("views never decrease")
        return self.model_copy(update={"views": views})


class BookCreate(BaseModel):
    """Candidate record accepted by the create use case."""

    isbn: str = Field(min_length=1, description="International Standard Book Number")
    title: str = Field(description="Display title")
    total_pages: int = Field(default=0, ge=0, description="Number of pages")

    @field_validator("isbn")
    @classmethod
    def _strip_isbn(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("isbn must not be blank")
        return value

    def to_book(self) -> Book:
        """Build the record to store, with its view counter at zero."""
        return Book(isbn=self.isbn, title=self.title, total_pages=self.total_pages, views=0)
