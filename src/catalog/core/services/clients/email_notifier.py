"""HTTP client for the external email service."""

from __future__ import annotations

import hashlib
from typing import Any

import httpx
from loguru import logger

from src.catalog.core.errors import CollaboratorError, CollaboratorUnavailableError
from src.catalog.core.services.clients.base import Notifier
from src.catalog.entities.book import Book


def _idempotency_key(recipient: str, book: Book) -> str:
    """Stable key so the provider won't send duplicates for the same book."""
    payload_hash = hashlib.sha256(
        (recipient + "\x1f" + book.isbn).encode("utf-8")
    ).hexdigest()
    return f"book-created:{payload_hash}"


def build_payload(recipient: str, book: Book) -> dict[str, Any]:
    return {
        "email": recipient,
        "book": {
            "isbn": book.isbn,
            "title": book.title,
            "total_pages": book.total_pages,
            "views": book.views,
        },
    }


class HttpEmailNotifier(Notifier):
    """Posts creation notices to ``{base_url}/send-email``."""

    name = "Email notifier"

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = f"{base_url.rstrip('/')}/send-email"
        self._timeout = timeout
        self._client = client

    async def _post(self, payload: dict[str, Any], headers: dict[str, str]) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(
                self._url, json=payload, headers=headers, timeout=self._timeout
            )
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.post(self._url, json=payload, headers=headers)

    async def send_creation_notice(self, recipient: str, book: Book) -> None:
        headers = {
            "Idempotency-Key": _idempotency_key(recipient, book),
            "Content-Type": "application/json",
        }
        try:
            response = await self._post(build_payload(recipient, book), headers)
        except httpx.HTTPError as e:
            reason = str(e) or type(e).__name__
            logger.bind(isbn=book.isbn, error_type=type(e).__name__).warning(
                "Email notifier call failed: {}", reason
            )
            raise CollaboratorUnavailableError(self.name, reason) from e

        if response.status_code == httpx.codes.OK:
            logger.bind(isbn=book.isbn).info("Creation notice sent")
            return

        raise CollaboratorError(
            self.name, f"status {response.status_code}: {response.text[:200]}"
        )
