"""Capabilities the catalog consumes from external services."""

from abc import ABC, abstractmethod

from src.catalog.entities.book import Book


class IsbnChecker(ABC):
    """Validates ISBNs against an authoritative external source."""

    @abstractmethod
    async def check_isbn(self, isbn: str) -> bool:
        """Return whether ``isbn`` is valid.

        Raises:
            CollaboratorUnavailableError: The checker could not be reached
        """


class Notifier(ABC):
    """Announces newly created books."""

    @abstractmethod
    async def send_creation_notice(self, recipient: str, book: Book) -> None:
        """Send a creation notice for ``book`` to ``recipient``.

        Raises:
            CollaboratorError: The notice was not accepted
        """
