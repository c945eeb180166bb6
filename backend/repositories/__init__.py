from .places import PlacesRepository
from .locks import ReadWriteLock

__all__ = ["PlacesRepository", "ReadWriteLock"]
