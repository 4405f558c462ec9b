"""Base backend interface."""

import logging
from abc import ABC, abstractmethod
from typing import Any

from mongo_seed.core.models import BootstrapMarker, InsertOutcome
from mongo_seed.exceptions import SeedWriteError

logger = logging.getLogger(__name__)

# MongoDB server error code for a unique index violation
DUPLICATE_KEY_ERROR = 11000


class SeedBackend(ABC):
    """
    Storage operations the seeder needs.

    Implementations hold two collections: the users collection that receives
    seed records and the marker collection that holds the bootstrap marker.
    """

    users_collection: str
    marker_collection: str

    @abstractmethod
    def marker_exists(self, marker_id: str) -> bool:
        """Return True if a marker with ``marker_id`` is stored."""
        pass

    @abstractmethod
    def insert_records(
        self,
        documents: list[dict[str, Any]],
        ignore_duplicates: bool = True,
    ) -> InsertOutcome:
        """
        Insert documents in one unordered bulk operation.

        A failing document never stops the rest of the batch.

        Args:
            documents: User documents to insert
            ignore_duplicates: Treat duplicate-key conflicts as skipped
                documents instead of errors

        Returns:
            InsertOutcome with inserted and duplicate counts

        Raises:
            SeedWriteError: If any write error is not a tolerated duplicate
        """
        pass

    @abstractmethod
    def insert_marker(self, marker: BootstrapMarker) -> None:
        """Store the bootstrap marker."""
        pass

    @abstractmethod
    def count_records(self) -> int:
        """Return the number of documents in the users collection."""
        pass


def resolve_write_errors(
    collection: str,
    write_errors: list[dict[str, Any]],
    inserted: int,
    ignore_duplicates: bool,
) -> InsertOutcome:
    """
    Apply the duplicate-key policy to the write errors of an unordered batch.

    Args:
        collection: Collection the batch targeted (for error messages)
        write_errors: Per-document errors, each with at least a ``code``
        inserted: Number of documents the batch did write
        ignore_duplicates: Whether duplicate-key conflicts are tolerated

    Returns:
        InsertOutcome if every error is tolerated

    Raises:
        SeedWriteError: If any error is not a tolerated duplicate
    """
    duplicates = [e for e in write_errors if e.get("code") == DUPLICATE_KEY_ERROR]
    fatal = [e for e in write_errors if e.get("code") != DUPLICATE_KEY_ERROR]

    if fatal or (duplicates and not ignore_duplicates):
        raise SeedWriteError(collection, write_errors, inserted=inserted)

    if duplicates:
        logger.warning(
            f"Ignored {len(duplicates)} duplicate-key conflict(s) in '{collection}'"
        )

    return InsertOutcome(inserted=inserted, duplicates=len(duplicates))
