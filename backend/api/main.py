"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload
      or: python -m api.main
"""
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.routes import places
from repositories.places import PlacesRepository
from settings import Settings, settings as default_settings
from storage.places_store import PlacesFileStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application and load the places document.

    The repository is created once here and shared with every request
    through `app.state`.
    """
    settings = settings or default_settings
    docs = settings.PLACES_DOCS_ENABLED

    app = FastAPI(
        title="Tourist Places API",
        description="Manage tourist places: CRUD operations, ratings, comments and photos.",
        version="1.0.0",
        docs_url="/swagger" if docs else None,
        redoc_url=None,
        openapi_url="/openapi.json" if docs else None,
    )

    if settings.CORS_ALLOW_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ALLOW_ORIGINS,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    store = PlacesFileStore(settings.PLACES_FILE)
    app.state.places_repo = PlacesRepository.from_store(store)

    app.include_router(places.router, prefix="/places", tags=["places"])

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"status": "ok", "service": "Tourist Places API"}

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "places": app.state.places_repo.count()}

    return app


def __getattr__(name: str):
    # `api.main:app` is built on first access, so importing create_app does not
    # load the default places file
    if name == "app":
        app = create_app()
        globals()["app"] = app
        return app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=default_settings.LOG_LEVEL)
    logger.info("Server running on %s:%s", default_settings.HOST, default_settings.PORT)
    uvicorn.run(create_app(), host=default_settings.HOST, port=default_settings.PORT)
