"""Capability shared by every book metadata provider."""
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from zana.models import Book
from zana.transport import create_http_client


class BookClient(ABC):
    """
    Client for a third-party book catalog.

    Lookups return None when the catalog affirmatively has no match, and
    raise a ClientError when no conclusive answer could be obtained
    (transport failure, rate limiting or an unexpected status). A catalog
    that cannot search by author and title returns None for that lookup.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        connect_timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        # Reused for every request made by this client
        self.http_client = http_client or create_http_client(timeout, connect_timeout)

    @abstractmethod
    async def book_by_isbn(self, isbn: str) -> Optional[Book]:
        """Return the book with the given ISBN, or None if not found."""

    @abstractmethod
    async def book_by_title_author(self, author: str, title: str) -> Optional[Book]:
        """Return the first book matching author and title, or None."""

    async def close(self):
        """Close the HTTP client."""
        await self.http_client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
