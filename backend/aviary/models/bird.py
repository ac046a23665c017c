"""
Aviary Backend: Bird Model
===========================

What:  The `birds` table mapping and the immutable Bird entity handed to callers.
Why:   The row class is a persistence detail; everything above the repository
       works with a frozen value that cannot silently write back to the database.
How:   BirdRecord inherits from the declarative Base (Alembic reads it for
       migrations). Bird is a frozen dataclass built from a BirdRecord.

Table Design:
    - Integer primary key: sequential, assigned by the database on insert
    - name / species: free text, nullable (no product rule requires them)
    - created_at / updated_at: UTC with timezone; updated_at moves on every UPDATE
    - Index on created_at for time-ordered listing
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from aviary.database import Base


# Largest value of the 32-bit INTEGER primary key column
MAX_BIRD_ID = 2**31 - 1


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BirdRecord(Base):
    """ORM row for a bird. Only BirdRepository touches instances of this class."""

    __tablename__ = "birds"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Common name, e.g. 'Monk Parakeet'",
    )

    species: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Scientific name, e.g. 'Myiopsitta monachus'",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this bird was created (UTC)",
    )

    # onupdate: refreshed by the ORM on every UPDATE of the row
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=utcnow,
        comment="When this bird was last modified (UTC)",
    )

    __table_args__ = (
        Index("idx_birds_created_at", created_at),
    )

    def __repr__(self) -> str:
        return f"<BirdRecord(id={self.id}, name={self.name!r}, species={self.species!r})>"


@dataclass(frozen=True)
class Bird:
    """Immutable bird entity."""

    id: int
    name: Optional[str]
    species: Optional[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: BirdRecord) -> "Bird":
        return cls(
            id=record.id,
            name=record.name,
            species=record.species,
            created_at=_as_utc(record.created_at),
            updated_at=_as_utc(record.updated_at),
        )


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; every stored value is UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
