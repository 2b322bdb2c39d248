"""Book API router: create, list and get by ISBN."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.catalog.api.http.deps import get_catalog_service
from src.catalog.api.http.errors import map_catalog_error
from src.catalog.core.errors import CatalogError
from src.catalog.core.services import CatalogService
from src.catalog.entities.book import Book, BookCreate

router = APIRouter(prefix="/api/v1", tags=["books"])


class CreateBookResponse(BaseModel):
    isbn: str
    title: str
    total_pages: int

    @classmethod
    def from_book(cls, book: Book) -> "CreateBookResponse":
        return cls(isbn=book.isbn, title=book.title, total_pages=book.total_pages)


class GetBookResponse(BaseModel):
    isbn: str
    title: str
    total_pages: int
    views: int

    @classmethod
    def from_book(cls, book: Book) -> "GetBookResponse":
        return cls.model_validate(book, from_attributes=True)


@router.post("/createBook", response_model=CreateBookResponse)
async def create_book(
    payload: BookCreate,
    service: CatalogService = Depends(get_catalog_service),
) -> CreateBookResponse:
    """Create a new book."""
    try:
        book = await service.create_book(payload)
    except CatalogError as e:
        raise map_catalog_error(e) from e
    return CreateBookResponse.from_book(book)


@router.get("/getBooks", response_model=list[GetBookResponse])
async def list_books(
    service: CatalogService = Depends(get_catalog_service),
) -> list[GetBookResponse]:
    """List all books."""
    try:
        books = await service.list_books()
    except CatalogError as e:
        raise map_catalog_error(e) from e
    return [GetBookResponse.from_book(book) for book in books]


@router.get("/getBookByIsbn/{isbn}", response_model=GetBookResponse)
async def get_book(
    isbn: str,
    service: CatalogService = Depends(get_catalog_service),
) -> GetBookResponse:
    """Get a book by ISBN, counting the view."""
    try:
        book = await service.get_book(isbn)
    except CatalogError as e:
        raise map_catalog_error(e) from e
    return GetBookResponse.from_book(book)
