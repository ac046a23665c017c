"""
Aviary Backend: Birds Route Handlers
=====================================

What:  POST /birds (create), GET /birds (list), GET /birds/{bird_id} (show).
How:   FastAPI decodes and validates the JSON body into BirdCreate; handlers
       delegate to BirdService and return BirdResponse models.

Request Flow (POST /birds):
    1. Client sends Content-Type: application/json with {"name": ..., "species": ...}
    2. FastAPI parses the body (malformed JSON → 400, wrong types → 422)
    3. BirdService applies the creation policy and persists the bird
    4. Return 201 Created with the full bird and a Location header
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from aviary.database import get_db_session
from aviary.schemas.bird import BirdCreate, BirdResponse, ErrorResponse
from aviary.services.bird_service import bird_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/birds", tags=["Birds"])


@router.get(
    "",
    response_model=List[BirdResponse],
    responses={
        200: {"description": "Every bird, ordered by id"},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List birds",
)
async def list_birds(
    db: AsyncSession = Depends(get_db_session),
) -> List[BirdResponse]:
    birds = await bird_service.list_birds(db)
    return [BirdResponse.model_validate(bird) for bird in birds]


@router.get(
    "/{bird_id}",
    response_model=BirdResponse,
    responses={
        200: {"description": "Full bird details", "model": BirdResponse},
        404: {"description": "Bird not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single bird by ID",
)
async def show_bird(
    bird_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> BirdResponse:
    """
    Args:
        bird_id: Integer path parameter. A non-integer value is rejected
                 with 422 before the handler runs.
    """
    bird = await bird_service.get_bird(db, bird_id)
    return BirdResponse.model_validate(bird)


@router.post(
    "",
    status_code=201,
    response_model=BirdResponse,
    responses={
        201: {"description": "Bird created", "model": BirdResponse},
        400: {"description": "Malformed JSON body", "model": ErrorResponse},
        422: {"description": "Invalid field types or missing required fields", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a bird",
    description=(
        "Creates a bird from a JSON body with optional `name` and `species` strings. "
        "Absent keys are stored as null; unknown keys are ignored."
    ),
)
async def create_bird(
    payload: BirdCreate,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> BirdResponse:
    """
    Create a bird and return its full representation.

    Error responses (handled by global exception handlers):
        HTTP 400: Body is not valid JSON
        HTTP 422: Wrong field types, or a required field is missing (ValidationError)
        HTTP 422: Storage constraint violated (ConstraintViolationError)
        HTTP 500: Storage failure (PersistenceError)
    """
    bird = await bird_service.create_bird(db, payload)
    response.headers["Location"] = f"{router.prefix}/{bird.id}"
    return BirdResponse.model_validate(bird)
