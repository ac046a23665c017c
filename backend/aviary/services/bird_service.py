"""
Aviary Backend: Bird Service
=============================

What:  Business logic for the birds resource: create, fetch one, list all.
Why:   Keeps the creation policy and the not-found rule independent of HTTP.
How:   Stateless; each call receives the request's AsyncSession and builds a
       BirdRepository around it.
Who:   Called by the /birds route handlers.

Creation Flow (POST /birds):
    BirdCreate ──▶ required-field policy ──▶ BirdRepository.create ──▶ commit ──▶ Bird

    The policy comes from settings.required_bird_fields. With the default
    (no required fields) any combination of present, absent or null
    name/species is stored as given.
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from aviary.config import settings
from aviary.exceptions import NotFoundError, ValidationError
from aviary.models.bird import MAX_BIRD_ID, Bird
from aviary.repositories.bird_repository import BirdRepository
from aviary.schemas.bird import BirdCreate

logger = logging.getLogger(__name__)


class BirdService:
    """
    Responsibilities:
        - create_bird(): apply the creation policy and persist a new bird
        - get_bird():    single bird retrieval with not-found handling
        - list_birds():  every bird, ordered by id

    Not idempotent: every successful create_bird() inserts a new row, even
    for a payload identical to an earlier one.
    """

    def check_required_fields(self, payload: BirdCreate) -> None:
        """
        Raise ValidationError if a configured required field is missing or blank.

        Reports every failing field at once, in declaration order.
        """
        missing = [
            field
            for field in settings.required_bird_fields_list
            if not (getattr(payload, field) or "").strip()
        ]
        if missing:
            raise ValidationError(
                message=f"Missing required field(s): {', '.join(missing)}",
                context={"fields": missing},
            )

    async def create_bird(self, db: AsyncSession, payload: BirdCreate) -> Bird:
        """
        Create and persist a bird from a decoded request payload.

        Raises:
            ValidationError:          a required field is missing (→ 422)
            ConstraintViolationError: the database rejected the row (→ 422)
            PersistenceError:         any other storage failure (→ 500)
        """
        self.check_required_fields(payload)

        repository = BirdRepository(db)
        bird = await repository.create(
            name=payload.name,
            species=payload.species,
        )
        await repository.commit()
        logger.info("Bird created: id=%d name=%r species=%r", bird.id, bird.name, bird.species)
        return bird

    async def get_bird(self, db: AsyncSession, bird_id: int) -> Bird:
        """
        Raises:
            NotFoundError: no bird has this id (→ 404 "Bird not found")
        """
        # Ids outside the column range cannot exist and would make the driver raise
        if not 0 < bird_id <= MAX_BIRD_ID:
            raise NotFoundError(resource="Bird", resource_id=bird_id)
        bird = await BirdRepository(db).find_by_id(bird_id)
        if bird is None:
            raise NotFoundError(resource="Bird", resource_id=bird_id)
        return bird

    async def list_birds(self, db: AsyncSession) -> List[Bird]:
        return await BirdRepository(db).list_all()


# ── Singleton Instance ────────────────────────────────────────────────────
bird_service = BirdService()
