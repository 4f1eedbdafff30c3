"""
HTTP boundary for book lookups.

Extracts query parameters, calls the BookService and maps results and
errors to JSON responses. This is the only place where errors are turned
into HTTP status codes.
"""
import asyncio
import json
import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from http import HTTPStatus
from typing import Any, Dict, Mapping, Optional

from zana.book import BookService, RequestType
from zana.config import Config
from zana.errors import (
    ClientError,
    HttpError,
    MissingParameter,
    NotFound,
    RateLimitExceeded,
)
from zana.googlebooks import GoogleBooksClient
from zana.openlibrary import OpenLibraryClient
from zana.params import AWSParamStore

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

GENERIC_DETAILS = "Something went wrong, please try again."


@dataclass
class Response:
    """Status code and JSON body returned to the caller."""
    status_code: int
    body: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=lambda: {"content-type": "application/json"})

    def to_lambda(self) -> Dict[str, Any]:
        """Format as an API Gateway proxy response."""
        return {
            "statusCode": self.status_code,
            "headers": self.headers,
            "body": json.dumps(self.body),
        }


def success_response(book) -> Response:
    return Response(200, book.to_dict())


def failure_response(error: str, details: str, status_code: int) -> Response:
    return Response(status_code, {"error": error, "details": details, "status_code": status_code})


def _valid_status(status_code: int) -> int:
    try:
        HTTPStatus(status_code)
    except ValueError:
        return 503
    return status_code


def error_response(error: Exception) -> Response:
    """
    Map an error raised while handling a request to a failure response.

    Args:
        error: MissingParameter, a ClientError, or any unexpected exception

    Returns:
        Response with the matching status code and details
    """
    if isinstance(error, MissingParameter):
        return failure_response("MissingParameter", error.details, 400)
    if isinstance(error, NotFound):
        return failure_response("NotFound", "Book not found", 404)
    if isinstance(error, RateLimitExceeded):
        return failure_response("RateLimitExceeded", "Rate limit exceeded for external service", 429)
    if isinstance(error, HttpError):
        return failure_response("HttpClientError", error.body, _valid_status(error.status_code))
    if isinstance(error, ClientError):
        return failure_response("HttpClientError", "Could not retrieve data from external service", 503)
    return failure_response("ServiceError", GENERIC_DETAILS, 500)


def request_type(params: Mapping[str, str]) -> RequestType:
    """Return the provider selected by the `type` query parameter."""
    value = params.get("type")
    if not value:
        raise MissingParameter("Type is required")
    return RequestType.from_str(value)


async def handle_request(service: BookService, params: Optional[Mapping[str, str]]) -> Response:
    """
    Look up a book for the given query parameters.

    Args:
        service: Service holding the provider clients
        params: Query parameters (type, isbn, title, author)

    Returns:
        Success or failure response
    """
    params = params or {}
    try:
        selected = request_type(params)
        book = await service.fetch_book(
            selected,
            isbn=params.get("isbn", ""),
            title=params.get("title", ""),
            author=params.get("author", "")
        )
    except MissingParameter as e:
        logger.warning(f"Invalid request: {e.details}")
        return error_response(e)
    except RateLimitExceeded as e:
        logger.warning(f"Rate limited: {e}")
        return error_response(e)
    except ClientError as e:
        logger.error(f"Could not retrieve book data: {e!r}")
        return error_response(e)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return error_response(e)

    if book is None:
        logger.warning(f"Book not found for {dict(params)}")
        return error_response(NotFound())
    return success_response(book)


@lru_cache(maxsize=1)
def load_config() -> Config:
    """Load configuration once per process."""
    return Config.from_env(AWSParamStore.from_env())


def create_service(config: Config) -> BookService:
    return BookService(
        GoogleBooksClient(config.googlebooks),
        OpenLibraryClient(config.openlibrary)
    )


async def _handle_event(event: Dict[str, Any]) -> Response:
    async with create_service(load_config()) as service:
        return await handle_request(service, event.get("queryStringParameters"))


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Serverless entry point."""
    try:
        response = asyncio.run(_handle_event(event))
    except Exception as e:
        logger.error(f"Could not handle request: {e}", exc_info=True)
        response = error_response(e)
    return response.to_lambda()

