"""
Places API routes.

Request bodies are decoded by hand instead of through FastAPI body
parameters: a malformed body on create/update/comment/rating falls back to
zero values and the request goes ahead, while the photo endpoint answers
400. Not-found is reported by get, update and photo only; delete, comment
and rating answer 200 either way.
"""
import json
import logging
from typing import Any, List, Optional, Type, TypeVar

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from domain.models import Place
from repositories.places import PlacesRepository

router = APIRouter()
logger = logging.getLogger(__name__)

BodyT = TypeVar("BodyT", bound=BaseModel)


class PlaceSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, strict=True, allow_inf_nan=False)

    id: str = ""
    place_name: str = Field("", alias="placeName")
    rating: float = 0.0
    description: str = ""
    photo_urls: Optional[List[str]] = Field(default_factory=list, alias="photoURLs")
    comments: Optional[List[str]] = Field(default_factory=list)
    longitude: float = 0.0
    latitude: float = 0.0

    def to_place(self) -> Place:
        return Place(
            id=self.id,
            place_name=self.place_name,
            rating=self.rating,
            description=self.description,
            photo_urls=list(self.photo_urls or []),
            comments=list(self.comments or []),
            longitude=self.longitude,
            latitude=self.latitude,
        )

    @classmethod
    def from_place(cls, place: Place) -> "PlaceSchema":
        return cls.model_validate(place.to_dict())


class CommentBody(BaseModel):
    model_config = ConfigDict(strict=True)

    text: str = ""


class RatingBody(BaseModel):
    model_config = ConfigDict(strict=True, allow_inf_nan=False)

    value: float = 0.0


class PhotoBody(BaseModel):
    model_config = ConfigDict(strict=True)

    url: str = ""


async def raw_body(request: Request) -> bytes:
    return await request.body()


def get_places_repo(request: Request) -> PlacesRepository:
    """Repository built at startup by the app factory."""
    return request.app.state.places_repo


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


_decoder = json.JSONDecoder(parse_constant=_reject_constant)


def _first_json_value(body: bytes) -> Any:
    """Parse the first JSON value in `body`; anything after it is ignored."""
    text = body.decode("utf-8").lstrip()
    value, _ = _decoder.raw_decode(text)
    return value


def _decode(model: Type[BodyT], body: bytes) -> BodyT:
    """Decode `body` into `model`. A JSON `null` gives the zero-valued model."""
    value = _first_json_value(body)
    if value is None:
        return model()
    return model.model_validate(value)


def _decode_or_default(model: Type[BodyT], body: bytes) -> BodyT:
    """Decode `body`, or fall back to the model's zero values if it is malformed."""
    try:
        return _decode(model, body)
    except ValidationError as e:
        logger.debug("Ignoring malformed %s body: %s", model.__name__, e.errors())
    except ValueError as e:
        logger.debug("Ignoring malformed %s body: %s", model.__name__, e)
    return model()


def _json_body(model: Type[BaseModel]) -> dict:
    """OpenAPI request body for routes that read the raw body themselves."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema(by_alias=True)}},
        }
    }


@router.get("", response_model=List[PlaceSchema])
def list_places(repo: PlacesRepository = Depends(get_places_repo)):
    """Return every place in storage order."""
    return [PlaceSchema.from_place(p) for p in repo.list_places()]


@router.get("/{place_id}", response_model=PlaceSchema, responses={404: {"description": "Place not found"}})
def get_place(place_id: str, repo: PlacesRepository = Depends(get_places_repo)):
    place = repo.get_place(place_id)
    if place is None:
        return Response(status_code=404)
    return PlaceSchema.from_place(place)


@router.post("", status_code=201, response_model=PlaceSchema, openapi_extra=_json_body(PlaceSchema))
def create_place(body: bytes = Depends(raw_body), repo: PlacesRepository = Depends(get_places_repo)):
    """Add a place. Any `id` in the body is replaced by the next free one."""
    payload = _decode_or_default(PlaceSchema, body)
    place = repo.create_place(payload.to_place())
    logger.info("Created place %s (%s)", place.id, place.place_name)
    return JSONResponse(status_code=201, content=place.to_dict())


@router.put(
    "/{place_id}",
    responses={404: {"description": "Place not found"}},
    openapi_extra=_json_body(PlaceSchema),
)
def update_place(
    place_id: str,
    body: bytes = Depends(raw_body),
    repo: PlacesRepository = Depends(get_places_repo),
):
    """Replace every field of a place except its ID. Fields left out of the body are reset."""
    payload = _decode_or_default(PlaceSchema, body)
    if not repo.replace_place(place_id, payload.to_place()):
        return Response(status_code=404)
    return Response(status_code=200)


@router.delete("/{place_id}")
def delete_place(place_id: str, repo: PlacesRepository = Depends(get_places_repo)):
    """Delete a place. Unknown IDs still get a 200."""
    if not repo.delete_place(place_id):
        logger.info("Delete of unknown place %s ignored", place_id)
    return Response(status_code=200)


@router.post("/{place_id}/comment", openapi_extra=_json_body(CommentBody))
def add_comment(
    place_id: str,
    body: bytes = Depends(raw_body),
    repo: PlacesRepository = Depends(get_places_repo),
):
    """Append a comment. Unknown IDs still get a 200."""
    comment = _decode_or_default(CommentBody, body)
    if not repo.add_comment(place_id, comment.text):
        logger.info("Comment on unknown place %s ignored", place_id)
    return Response(status_code=200)


@router.post("/{place_id}/rating", openapi_extra=_json_body(RatingBody))
def add_rating(
    place_id: str,
    body: bytes = Depends(raw_body),
    repo: PlacesRepository = Depends(get_places_repo),
):
    """Fold a new rating into the place's damped average. Unknown IDs still get a 200."""
    rating = _decode_or_default(RatingBody, body)
    if repo.apply_rating(place_id, rating.value) is None:
        logger.info("Rating for unknown place %s ignored", place_id)
    return Response(status_code=200)


@router.post(
    "/{place_id}/photo",
    responses={400: {"description": "Invalid request body"}, 404: {"description": "Place not found"}},
    openapi_extra=_json_body(PhotoBody),
)
def add_photo(
    place_id: str,
    body: bytes = Depends(raw_body),
    repo: PlacesRepository = Depends(get_places_repo),
):
    """Append a photo URL to a place."""
    try:
        photo = _decode(PhotoBody, body)
    except ValueError:
        return PlainTextResponse("Invalid request body", status_code=400)
    if not repo.add_photo(place_id, photo.url):
        return Response(status_code=404)
    return Response(status_code=200)
