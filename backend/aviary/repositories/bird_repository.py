"""
Aviary Backend: Bird Repository
================================

What:  Persistence gateway for birds over an injected AsyncSession.
Why:   Keeps SQL and the BirdRecord row class out of services and routes;
       callers receive immutable Bird entities.
How:   One repository per session. create() flushes to obtain the id; the
       caller then commits through commit() before answering, so commit
       failures are translated like any other storage error.

Error translation:
    IntegrityError       → ConstraintViolationError (422)
    other SQLAlchemyError → PersistenceError (500)
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from aviary.exceptions import ConstraintViolationError, PersistenceError
from aviary.models.bird import Bird, BirdRecord, utcnow

logger = logging.getLogger(__name__)


class BirdRepository:
    """CRUD access to the birds table (create and read only)."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, name: Optional[str], species: Optional[str]) -> Bird:
        """
        Insert a new bird and return it with its assigned id and timestamps.

        created_at and updated_at receive the same instant.
        The flush makes the database assign the id without committing.
        """
        now = utcnow()
        record = BirdRecord(name=name, species=species, created_at=now, updated_at=now)
        try:
            self.session.add(record)
            await self.session.flush()
        except IntegrityError as e:
            logger.warning("Bird insert rejected by constraint: %s", e.orig)
            raise ConstraintViolationError(context={"constraint_error": str(e.orig)})
        except SQLAlchemyError as e:
            logger.error("Bird insert failed: %s", str(e), exc_info=True)
            raise PersistenceError(
                message="Could not save the bird. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return Bird.from_record(record)

    async def commit(self) -> None:
        """
        Commit the session's transaction. A create is not reported to the
        client until this returns.
        """
        try:
            await self.session.commit()
        except IntegrityError as e:
            logger.warning("Bird commit rejected by constraint: %s", e.orig)
            raise ConstraintViolationError(context={"constraint_error": str(e.orig)})
        except SQLAlchemyError as e:
            logger.error("Bird commit failed: %s", str(e), exc_info=True)
            raise PersistenceError(
                message="Could not save the bird. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def find_by_id(self, bird_id: int) -> Optional[Bird]:
        """Return the bird with this id, or None."""
        try:
            result = await self.session.execute(
                select(BirdRecord).where(BirdRecord.id == bird_id)
            )
            record = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching bird %s: %s", bird_id, str(e))
            raise PersistenceError(
                message="Could not retrieve the bird. Please try again.",
                context={"bird_id": bird_id, "error_type": type(e).__name__},
            )
        return Bird.from_record(record) if record is not None else None

    async def list_all(self) -> List[Bird]:
        """Return every bird, oldest id first."""
        try:
            result = await self.session.execute(
                select(BirdRecord).order_by(BirdRecord.id.asc())
            )
            records = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing birds: %s", str(e), exc_info=True)
            raise PersistenceError(
                message="Could not retrieve birds. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [Bird.from_record(record) for record in records]
