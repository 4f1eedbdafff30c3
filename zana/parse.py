"""Parse and normalize Google Books and Open Library responses."""
import logging
from typing import Dict, Any, Optional, Union

from zana.errors import TransportFailure
from zana.models import Book, Rating

logger = logging.getLogger(__name__)

NUMBER = (int, float)


def _expect(value: Any, expected_type, name: str) -> Any:
    """
    Check the type of a field from an upstream payload.

    Args:
        value: Field value
        expected_type: Type or tuple of types accepted
        name: Field name used in the error message

    Returns:
        The value unchanged

    Raises:
        TransportFailure: The payload does not have the expected shape
    """
    # bool is a subclass of int but never a valid count or rating
    if isinstance(value, bool) or not isinstance(value, expected_type):
        raise TransportFailure(f"unexpected {name} in response: {value!r}")
    return value


def parse_volume(item: Dict[str, Any]) -> Book:
    """
    Parse a single volume item from Google Books API.

    Args:
        item: Single item from the volumes response

    Returns:
        Book with rating only when both average and count are non-zero
    """
    _expect(item, dict, "volume item")
    volume_info = _expect(item.get("volumeInfo") or {}, dict, "volumeInfo")

    # Missing optional fields fall back to empty values
    description = _expect(volume_info.get("description") or "", str, "description")
    page_count = _expect(volume_info.get("pageCount") or 0, int, "pageCount")
    average_rating = _expect(volume_info.get("averageRating") or 0, NUMBER, "averageRating")
    ratings_count = _expect(volume_info.get("ratingsCount") or 0, int, "ratingsCount")

    if not average_rating or not ratings_count:
        logger.debug(
            f"Rating not added: average_rating={average_rating}, ratings_count={ratings_count}"
        )
        return Book(page_count=page_count, description=description)

    return Book(
        page_count=page_count,
        description=description,
        rating=Rating(average_rating=float(average_rating), ratings_count=ratings_count)
    )


def parse_volumes_response(response_json: Dict[str, Any]) -> Optional[Book]:
    """
    Parse full Google Books volumes response.

    Args:
        response_json: Complete API response JSON

    Returns:
        Book built from the first item, or None if there are no items
    """
    items = _expect(response_json.get("items") or [], list, "items")
    if not items:
        return None
    return parse_volume(items[0])


def first_work_key(edition_json: Dict[str, Any]) -> Optional[str]:
    """Return the key of the first work an Open Library edition belongs to."""
    works = _expect(edition_json.get("works") or [], list, "works")
    if not works:
        return None

    work = _expect(works[0], dict, "work")
    key = work.get("key")
    if key is None:
        return None
    return _expect(key, str, "work key")


def parse_description(description: Union[str, Dict[str, Any], None]) -> str:
    """
    Normalize an Open Library description.

    Works store the description either as a plain string or as a typed
    text object, e.g. {"type": "/type/text", "value": "..."}.
    """
    if description is None:
        return ""
    if isinstance(description, dict):
        return _expect(description.get("value") or "", str, "description value")
    return _expect(description, str, "description")


def parse_ratings(ratings_json: Dict[str, Any]) -> Optional[Rating]:
    """Parse the summary of an Open Library ratings response."""
    summary = _expect(ratings_json.get("summary") or {}, dict, "ratings summary")
    average = summary.get("average")
    count = _expect(summary.get("count") or 0, int, "ratings count")

    if average is None or not count:
        return None
    return Rating(average_rating=float(_expect(average, NUMBER, "average rating")), ratings_count=count)


def parse_open_library_book(
    edition_json: Dict[str, Any],
    work_json: Dict[str, Any],
    ratings_json: Dict[str, Any]
) -> Book:
    """
    Combine the three Open Library responses into a single Book.

    Args:
        edition_json: Response of the ISBN lookup
        work_json: Response of the work lookup
        ratings_json: Response of the work ratings lookup

    Returns:
        Book object
    """
    return Book(
        page_count=_expect(edition_json.get("number_of_pages") or 0, int, "number_of_pages"),
        description=parse_description(work_json.get("description")),
        rating=parse_ratings(ratings_json)
    )
