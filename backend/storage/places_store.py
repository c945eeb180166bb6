"""
JSON file storage for places.

The whole collection lives in a single JSON array. It is read once at
startup and rewritten in full after every mutation.
"""
import json
import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional

from domain.models import Place

logger = logging.getLogger(__name__)

# Decimal IDs with an optional sign, nothing else
_NUMERIC_ID = re.compile(r"[+-]?[0-9]+")


class PlacesFileStore:
    """
    Reads and writes the places document.

    By default the document is placed under the package-local
    `backend/data/` directory so that processes started from different
    working directories share one file.
    """

    DEFAULT_PATH = Path(__file__).resolve().parents[1] / "data" / "places.json"

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path) if path else self.DEFAULT_PATH

    def load(self) -> List[Place]:
        """
        Load every place from the backing file.

        A missing, unreadable or malformed file yields an empty list. The
        failure is logged and startup carries on with no data.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Could not read places file %s: %s", self.path, e)
            return []

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning("Places file %s is not valid JSON: %s", self.path, e)
            return []

        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning(
                "Places file %s holds a %s, expected an array",
                self.path,
                type(data).__name__,
            )
            return []

        places = [Place.from_dict(item) for item in data if isinstance(item, dict)]
        skipped = len(data) - len(places)
        if skipped:
            logger.warning("Skipped %s non-object entries in %s", skipped, self.path)
        return places

    def save(self, places: Iterable[Place]) -> None:
        """Overwrite the backing file with the full collection. Errors are logged, not raised."""
        payload = [p.to_dict() for p in places]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False, allow_nan=False), encoding="utf-8")
        except (OSError, ValueError):
            logger.exception("Failed to write places file %s", self.path)

    @staticmethod
    def next_id(places: Iterable[Place]) -> int:
        """One more than the largest numeric ID; non-numeric IDs count as 0."""
        highest = 0
        for place in places:
            value = int(place.id) if _NUMERIC_ID.fullmatch(place.id) else 0
            highest = max(highest, value)
        return highest + 1
