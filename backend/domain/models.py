"""
Core domain models for the tourist places service.
These are framework-agnostic and shared by the store, repository and API.
"""
import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_float(value: Any) -> float:
    # bool is an int subclass but never a valid coordinate or rating
    if isinstance(value, bool):
        return 0.0
    if not isinstance(value, (int, float)):
        return 0.0
    try:
        number = float(value)
    except OverflowError:
        return 0.0
    # JSON has no token for inf or nan
    return number if math.isfinite(number) else 0.0


def _as_str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


@dataclass
class Place:
    """
    A tourist place and everything attached to it.

    The JSON field names differ from the attribute names (``placeName``,
    ``photoURLs``); use ``to_dict``/``from_dict`` for anything that crosses
    the wire or touches the backing file.
    """
    id: str = ""
    place_name: str = ""
    rating: float = 0.0
    description: str = ""
    photo_urls: List[str] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)
    longitude: float = 0.0
    latitude: float = 0.0

    def copy(self) -> "Place":
        """Return a copy that shares no lists with this instance."""
        return replace(
            self,
            photo_urls=list(self.photo_urls),
            comments=list(self.comments),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "placeName": self.place_name,
            "rating": self.rating,
            "description": self.description,
            "photoURLs": list(self.photo_urls),
            "comments": list(self.comments),
            "longitude": self.longitude,
            "latitude": self.latitude,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Place":
        """Build a Place from its JSON form; missing or mistyped fields fall back to zero values."""
        return cls(
            id=_as_str(data.get("id")),
            place_name=_as_str(data.get("placeName")),
            rating=_as_float(data.get("rating")),
            description=_as_str(data.get("description")),
            photo_urls=_as_str_list(data.get("photoURLs")),
            comments=_as_str_list(data.get("comments")),
            longitude=_as_float(data.get("longitude")),
            latitude=_as_float(data.get("latitude")),
        )
