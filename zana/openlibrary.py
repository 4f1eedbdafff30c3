"""
Async client for Open Library.

Three requests are needed for one book, each depending on the previous one:

1. the edition, looked up by ISBN, gives the page count and its works
2. the first work gives the description
3. the ratings of that work

Open Library has no author/title lookup for a single book, so
book_by_title_author always returns None.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from zana.client import BookClient
from zana.config import OpenLibraryConfig
from zana.models import Book
from zana.parse import first_work_key, parse_open_library_book
from zana.transport import classify_response, decode_json, send_get

logger = logging.getLogger(__name__)

ISBN_PATH = "/isbn"
RATINGS_PATH = "/ratings"


class OpenLibraryClient(BookClient):
    """Client for Open Library API."""

    def __init__(self, config: OpenLibraryConfig, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__(config.timeout, config.connect_timeout, http_client)
        self.api_url = config.api_url.rstrip("/")

    async def book_by_isbn(self, isbn: str) -> Optional[Book]:
        edition = await self.fetch_edition(isbn)
        if edition is None:
            return None

        work_key = first_work_key(edition)
        if not work_key:
            logger.debug(f"No works found for book with ISBN({isbn}) on Open Library")
            return None

        work = await self.fetch_work(work_key)
        ratings = await self.fetch_ratings(work_key)
        return parse_open_library_book(edition, work, ratings)

    async def book_by_title_author(self, author: str, title: str) -> Optional[Book]:
        logger.debug("Lookup by author and title is not supported by Open Library")
        return None

    async def fetch_edition(self, isbn: str) -> Optional[Dict[str, Any]]:
        """Fetch the edition for an ISBN, or None on 404."""
        response = await send_get(self.http_client, f"{self.api_url}{ISBN_PATH}/{isbn}.json")
        if response.status_code == 404:
            logger.debug(f"Book with ISBN({isbn}) not found on Open Library")
            return None
        return decode_json(classify_response(response))

    async def fetch_work(self, work_key: str) -> Dict[str, Any]:
        """Fetch a work by its key, e.g. /works/OL15302039W."""
        response = await send_get(self.http_client, f"{self.api_url}{work_key}.json")
        return decode_json(classify_response(response))

    async def fetch_ratings(self, work_key: str) -> Dict[str, Any]:
        """Fetch the ratings summary of a work."""
        response = await send_get(self.http_client, f"{self.api_url}{work_key}{RATINGS_PATH}.json")
        return decode_json(classify_response(response))
