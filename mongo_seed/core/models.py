"""
Core data models for mongo-seed.

Defines the documents written by the seeder, the bootstrap state machine and
the result reported after each run.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class SeedState(str, Enum):
    """
    Bootstrap state of a target database.

    The only transition is UNSEEDED -> SEEDED, taken once per database
    lifetime when a run writes the bootstrap marker.
    """

    UNSEEDED = "unseeded"
    SEEDED = "seeded"


@dataclass(frozen=True)
class UserRecord:
    """A synthetic user document. Every field is derived from ``id``."""

    id: int
    created_at: datetime

    @property
    def user_id(self) -> int:
        return self.id

    @property
    def name(self) -> str:
        return f"User {self.id}"

    @property
    def email(self) -> str:
        return f"user{self.id}@example.com"

    def to_document(self) -> dict[str, Any]:
        """Convert to the MongoDB document shape (``id`` stored as ``_id``)."""
        return {
            "_id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "email": self.email,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class BootstrapMarker:
    """Sentinel document whose existence means seeding already happened."""

    id: str
    at: datetime

    def to_document(self) -> dict[str, Any]:
        return {"_id": self.id, "at": self.at}


@dataclass
class InsertOutcome:
    """
    Result of one bulk insert.

    Attributes:
        inserted: Number of documents actually written
        duplicates: Number of documents skipped as duplicate-key conflicts
    """

    inserted: int
    duplicates: int = 0


@dataclass
class SeedResult:
    """
    Outcome of a single seeder run.

    Attributes:
        action: "seeded" if records were written, "skipped" if the marker existed
        requested: Number of records the run was asked to write
        inserted: Number of records actually written
        duplicates: Number of records skipped as duplicate-key conflicts
        total: Document count of the users collection after the run
    """

    action: str
    requested: int
    inserted: int
    duplicates: int
    total: int

    SEEDED = "seeded"
    SKIPPED = "skipped"

    @property
    def skipped(self) -> bool:
        return self.action == self.SKIPPED
