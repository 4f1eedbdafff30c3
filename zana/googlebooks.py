"""Async client for Google Books API."""
import logging
from typing import Optional

import httpx

from zana.client import BookClient
from zana.config import GoogleBooksConfig
from zana.models import Book
from zana.parse import parse_volumes_response
from zana.transport import classify_response, decode_json, send_get

logger = logging.getLogger(__name__)

VOLUMES_PATH = "/books/v1/volumes"
# Only request the fields needed to build a Book
VOLUME_FIELDS = "items(volumeInfo(description,pageCount,averageRating,ratingsCount))"


class GoogleBooksClient(BookClient):
    """Client for Google Books API. A single volumes search per lookup."""

    def __init__(self, config: GoogleBooksConfig, http_client: Optional[httpx.AsyncClient] = None):
        """
        Initialize Google Books client.

        Args:
            config: API key, base URL and timeouts
            http_client: Optional preconfigured HTTP client
        """
        super().__init__(config.timeout, config.connect_timeout, http_client)
        self.api_key = config.api_key
        self.api_url = config.api_url.rstrip("/")

    async def book_by_isbn(self, isbn: str) -> Optional[Book]:
        return await self.search(f"isbn:{isbn}")

    async def book_by_title_author(self, author: str, title: str) -> Optional[Book]:
        return await self.search(f"inauthor:{author} intitle:{title}")

    async def search(self, query: str) -> Optional[Book]:
        """
        Search volumes and normalize the first result.

        Args:
            query: Search query string

        Returns:
            Book or None when no volume matches
        """
        params = {
            "maxResults": 1,
            "fields": VOLUME_FIELDS,
            "q": query,
        }

        if self.api_key:
            params["key"] = self.api_key

        response = await send_get(
            self.http_client,
            f"{self.api_url}{VOLUMES_PATH}",
            params=params,
            headers={"Accept-Encoding": "gzip"}
        )
        classify_response(response)

        book = parse_volumes_response(decode_json(response))
        if book is None:
            logger.info(f"No volume found for query: {query}")
        return book
