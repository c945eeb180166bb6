import os
from typing import List, Optional

# Basic settings helper to read environment configuration.


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _as_int(val: str | None, default: int) -> int:
    try:
        return int(val) if val is not None else default
    except ValueError:
        return default


def _split_csv(val: str) -> List[str]:
    return [item.strip() for item in val.split(",") if item.strip()]


class Settings:
    def __init__(self, places_file: Optional[str] = None) -> None:
        # None means the store's package-local default under backend/data
        self.PLACES_FILE: Optional[str] = places_file or os.getenv("PLACES_FILE") or None
        self.CORS_ALLOW_ORIGINS: List[str] = _split_csv(os.getenv("CORS_ALLOW_ORIGINS", "*"))
        self.PLACES_DOCS_ENABLED: bool = _as_bool(os.getenv("PLACES_DOCS_ENABLED"), True)
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = _as_int(os.getenv("PORT"), 8080)
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
