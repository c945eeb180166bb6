"""
Place repository: the in-memory collection backed by the JSON file store.
"""
import logging
from typing import Callable, List, Optional

from domain.models import Place
from repositories.locks import ReadWriteLock
from storage.places_store import PlacesFileStore

logger = logging.getLogger(__name__)


class PlacesRepository:
    """
    CRUD operations for places.

    Every mutation runs under the write lock together with the flush to
    disk, so at most one mutation is in flight at a time and the file
    always matches memory once the lock is released. Reads share the read
    lock and hand out copies.

    The ID counter is seeded once from the loaded data and only ever goes
    up, so IDs of deleted places are never reused.
    """

    def __init__(self, store: PlacesFileStore, places: Optional[List[Place]] = None):
        self._store = store
        self._places: List[Place] = list(places or [])
        self._last_id = store.next_id(self._places) - 1
        self._lock = ReadWriteLock()

    @classmethod
    def from_store(cls, store: PlacesFileStore) -> "PlacesRepository":
        places = store.load()
        logger.info("Loaded %s places from %s", len(places), store.path)
        return cls(store, places)

    @property
    def last_id(self) -> int:
        return self._last_id

    def _index_of(self, place_id: str) -> Optional[int]:
        for i, place in enumerate(self._places):
            if place.id == place_id:
                return i
        return None

    def _mutate(self, place_id: str, change: Callable[[Place], None]) -> Optional[Place]:
        """Apply `change` to the first place with `place_id` and persist. Caller holds the write lock."""
        idx = self._index_of(place_id)
        if idx is None:
            return None
        place = self._places[idx]
        change(place)
        self._store.save(self._places)
        return place

    def list_places(self) -> List[Place]:
        with self._lock.read():
            return [p.copy() for p in self._places]

    def count(self) -> int:
        with self._lock.read():
            return len(self._places)

    def get_place(self, place_id: str) -> Optional[Place]:
        with self._lock.read():
            idx = self._index_of(place_id)
            return self._places[idx].copy() if idx is not None else None

    def create_place(self, place: Place) -> Place:
        """Store a new place under the next ID; any ID on `place` is ignored."""
        with self._lock.write():
            self._last_id += 1
            stored = place.copy()
            stored.id = str(self._last_id)
            self._places.append(stored)
            self._store.save(self._places)
            return stored.copy()

    def replace_place(self, place_id: str, place: Place) -> bool:
        """Overwrite every field of the place except its ID. Returns False if not found."""
        with self._lock.write():
            idx = self._index_of(place_id)
            if idx is None:
                return False
            updated = place.copy()
            updated.id = self._places[idx].id
            self._places[idx] = updated
            self._store.save(self._places)
            return True

    def delete_place(self, place_id: str) -> bool:
        with self._lock.write():
            idx = self._index_of(place_id)
            if idx is None:
                return False
            del self._places[idx]
            self._store.save(self._places)
            return True

    def add_comment(self, place_id: str, text: str) -> bool:
        with self._lock.write():
            return self._mutate(place_id, lambda p: p.comments.append(text)) is not None

    def add_photo(self, place_id: str, url: str) -> bool:
        with self._lock.write():
            return self._mutate(place_id, lambda p: p.photo_urls.append(url)) is not None

    def apply_rating(self, place_id: str, value: float) -> Optional[float]:
        """
        Fold `value` into the rating as ``(rating + value) / 2``.

        No rating count is kept, so this is a damped average rather than
        the mean of every rating ever submitted. Returns the new rating, or
        None if the place does not exist.
        """
        def _rate(place: Place) -> None:
            # halves first so two large finite ratings cannot overflow to inf
            place.rating = place.rating / 2 + value / 2

        with self._lock.write():
            place = self._mutate(place_id, _rate)
            return place.rating if place is not None else None
