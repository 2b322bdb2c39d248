"""HTTP client for the external ISBN checker."""

from __future__ import annotations

from urllib.parse import quote

import httpx
from loguru import logger

from src.catalog.core.errors import CollaboratorUnavailableError
from src.catalog.core.services.clients.base import IsbnChecker


class HttpIsbnChecker(IsbnChecker):
    """Asks ``GET {base_url}/isbn/{isbn}``; HTTP 200 means the ISBN is valid.

    Any other status is a negative answer. Transport errors and timeouts are
    reported as ``CollaboratorUnavailableError`` so callers never block past
    ``timeout``.
    """

    name = "ISBN checker"

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client

    def _url(self, isbn: str) -> str:
        return f"{self._base_url}/isbn/{quote(isbn, safe='')}"

    async def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url, timeout=self._timeout)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.get(url)

    async def check_isbn(self, isbn: str) -> bool:
        url = self._url(isbn)
        try:
            response = await self._get(url)
        except httpx.HTTPError as e:
            reason = str(e) or type(e).__name__
            logger.bind(isbn=isbn, error_type=type(e).__name__).warning(
                "ISBN checker call failed: {}", reason
            )
            raise CollaboratorUnavailableError(self.name, reason) from e

        valid = response.status_code == httpx.codes.OK
        logger.bind(isbn=isbn, status_code=response.status_code).debug(
            "ISBN checker answered valid={}", valid
        )
        return valid
