"""Data models for books."""
from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class Rating:
    """Average rating and number of ratings for a book.

    Only created for ratings that were actually observed upstream. A book
    that has not been rated yet has no Rating at all.
    """
    average_rating: float
    ratings_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "average_rating": self.average_rating,
            "ratings_count": self.ratings_count,
        }


@dataclass(frozen=True)
class Book:
    """Normalized book representation shared by every provider."""
    page_count: int
    description: str = ""
    rating: Optional[Rating] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the normalized output shape."""
        return {
            "page_count": self.page_count,
            "description": self.description,
            "rating": self.rating.to_dict() if self.rating else None,
        }
