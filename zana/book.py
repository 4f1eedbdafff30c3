"""Fetch books from the provider selected for a request."""
import logging
from enum import Enum
from typing import Optional

from zana.client import BookClient
from zana.errors import MissingParameter
from zana.models import Book

logger = logging.getLogger(__name__)


class RequestType(Enum):
    """Supported book data providers."""
    GOOGLE_BOOKS = "googlebooks"
    OPEN_LIBRARY = "openlibrary"

    @classmethod
    def from_str(cls, value: str) -> "RequestType":
        """Parse the `type` request parameter."""
        try:
            return cls(value)
        except ValueError:
            raise MissingParameter("Invalid type") from None


class BookService:
    """Holds one client per provider and routes lookups to them."""

    def __init__(self, googlebooks_client: BookClient, openlibrary_client: BookClient):
        self.googlebooks_client = googlebooks_client
        self.openlibrary_client = openlibrary_client

    def client_for(self, request_type: RequestType) -> BookClient:
        if request_type is RequestType.GOOGLE_BOOKS:
            return self.googlebooks_client
        return self.openlibrary_client

    async def fetch_by_isbn(self, request_type: RequestType, isbn: str) -> Optional[Book]:
        logger.debug(f"Fetching book by isbn {isbn} from {request_type.value}")
        return await self.client_for(request_type).book_by_isbn(isbn)

    async def fetch_by_title_author(
        self,
        request_type: RequestType,
        title: str,
        author: str
    ) -> Optional[Book]:
        logger.debug(f"Fetching book by title {title} and author {author} from {request_type.value}")
        return await self.client_for(request_type).book_by_title_author(author, title)

    async def fetch_book(
        self,
        request_type: RequestType,
        isbn: str = "",
        title: str = "",
        author: str = ""
    ) -> Optional[Book]:
        """
        Fetch a book by ISBN, or by title and author when no ISBN is given.

        Args:
            request_type: Provider to query
            isbn: ISBN, takes precedence when non-empty
            title: Book title
            author: Book author

        Returns:
            Book, or None if the provider has no match

        Raises:
            MissingParameter: Neither ISBN nor both title and author given
            ClientError: The provider could not complete the lookup
        """
        if isbn:
            return await self.fetch_by_isbn(request_type, isbn)
        if title and author:
            return await self.fetch_by_title_author(request_type, title, author)
        raise MissingParameter("Either ISBN or title and author must be provided")

    async def close(self):
        """Close both provider clients."""
        await self.googlebooks_client.close()
        await self.openlibrary_client.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
