"""Tests for parsing functions."""
import pytest

from zana.errors import TransportFailure
from zana.models import Book, Rating
from zana.parse import (
    first_work_key,
    parse_description,
    parse_open_library_book,
    parse_ratings,
    parse_volume,
    parse_volumes_response,
)


def test_parse_volume_complete():
    """Test parsing a volume with all fields present."""
    item = {
        "volumeInfo": {
            "description": "A great book",
            "pageCount": 544,
            "averageRating": 4,
            "ratingsCount": 12
        }
    }

    book = parse_volume(item)

    assert book.page_count == 544
    assert book.description == "A great book"
    assert book.rating == Rating(average_rating=4.0, ratings_count=12)


def test_parse_volume_missing_fields():
    """Test parsing a volume with missing optional fields."""
    book = parse_volume({"volumeInfo": {}})

    assert book == Book(page_count=0, description="", rating=None)


def test_parse_volume_zero_average_has_no_rating():
    item = {"volumeInfo": {"pageCount": 100, "averageRating": 0, "ratingsCount": 5}}

    assert parse_volume(item).rating is None


def test_parse_volume_zero_count_has_no_rating():
    item = {"volumeInfo": {"pageCount": 100, "averageRating": 3.5, "ratingsCount": 0}}

    assert parse_volume(item).rating is None


def test_parse_volumes_response_uses_first_item():
    response = {
        "items": [
            {"volumeInfo": {"pageCount": 1}},
            {"volumeInfo": {"pageCount": 2}}
        ]
    }

    assert parse_volumes_response(response).page_count == 1


def test_parse_volumes_response_without_items():
    assert parse_volumes_response({}) is None
    assert parse_volumes_response({"items": []}) is None
    assert parse_volumes_response({"items": None}) is None


def test_description_shapes_are_equivalent():
    """Plain and typed text descriptions normalize to the same string."""
    text = "Logen Ninefingers, infamous barbarian, has finally run out of luck."

    assert parse_description(text) == text
    assert parse_description({"type": "/type/text", "value": text}) == text
    assert parse_description(None) == ""


def test_parse_ratings():
    assert parse_ratings({"summary": {"average": 4.5, "count": 23}}) == Rating(4.5, 23)
    assert parse_ratings({"summary": {"average": None, "count": 0}}) is None
    assert parse_ratings({}) is None


def test_first_work_key():
    assert first_work_key({"works": [{"key": "/works/OL1W"}, {"key": "/works/OL2W"}]}) == "/works/OL1W"
    assert first_work_key({"works": []}) is None
    assert first_work_key({}) is None


def test_parse_open_library_book(sample):
    book = parse_open_library_book(
        sample("openlibrary_isbn.json"),
        sample("openlibrary_works.json"),
        sample("openlibrary_ratings.json")
    )

    assert book == Book(
        page_count=542,
        description="Logen Ninefingers, infamous barbarian, has finally run out of luck.",
        rating=Rating(average_rating=4.5, ratings_count=23)
    )


def test_book_to_dict():
    book = Book(page_count=560, description="A book", rating=Rating(3.5, 107))

    assert book.to_dict() == {
        "page_count": 560,
        "description": "A book",
        "rating": {"average_rating": 3.5, "ratings_count": 107}
    }
    assert Book(page_count=1).to_dict()["rating"] is None


@pytest.mark.parametrize("response", [
    {"items": {"volumeInfo": {}}},
    {"items": ["x"]},
    {"items": [{"volumeInfo": "x"}]},
    {"items": [{"volumeInfo": {"pageCount": "560"}}]},
    {"items": [{"volumeInfo": {"description": ["text"]}}]},
    {"items": [{"volumeInfo": {"averageRating": "3.5", "ratingsCount": 107}}]},
    {"items": [{"volumeInfo": {"averageRating": 3.5, "ratingsCount": True}}]},
])
def test_malformed_volumes_response(response):
    """Unexpected shapes are reported as transport failures, never defaulted."""
    with pytest.raises(TransportFailure):
        parse_volumes_response(response)


@pytest.mark.parametrize("edition", [
    {"works": ["/works/OL15302039W"]},
    {"works": {"key": "/works/OL15302039W"}},
    {"works": [{"key": 15302039}]},
])
def test_malformed_works(edition):
    with pytest.raises(TransportFailure):
        first_work_key(edition)


@pytest.mark.parametrize("description", [42, ["text"], {"value": 42}])
def test_malformed_description(description):
    with pytest.raises(TransportFailure):
        parse_description(description)


@pytest.mark.parametrize("ratings", [
    {"summary": "4.5"},
    {"summary": {"average": "4.5", "count": 23}},
    {"summary": {"average": 4.5, "count": "23"}},
])
def test_malformed_ratings(ratings):
    with pytest.raises(TransportFailure):
        parse_ratings(ratings)


def test_malformed_page_count():
    with pytest.raises(TransportFailure):
        parse_open_library_book({"number_of_pages": "542"}, {}, {})
