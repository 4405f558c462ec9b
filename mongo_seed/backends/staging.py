"""Staging backend - in-memory backend for running without a database."""

from typing import Any

from pymongo.errors import DuplicateKeyError

from mongo_seed.backends.base import (
    DUPLICATE_KEY_ERROR,
    SeedBackend,
    resolve_write_errors,
)
from mongo_seed.core.models import BootstrapMarker, InsertOutcome


class StagingBackend(SeedBackend):
    """
    In-memory backend for seeding without a database.

    Simulates MongoDB behavior:
    - Enforces unique ``_id`` per collection
    - Reports duplicate ``_id`` values as code 11000 write errors
    - Keeps inserting the rest of a batch after an error (unordered mode)
    - Raises DuplicateKeyError for a second marker, as pymongo does

    Use case: Fast unit tests, dry runs, offline development.
    """

    def __init__(
        self,
        users_collection: str = "users",
        marker_collection: str = "__bootstrap",
    ):
        """Initialize staging backend with empty collections."""
        self.users_collection = users_collection
        self.marker_collection = marker_collection
        self._data: dict[str, dict[Any, dict[str, Any]]] = {}

    def _collection(self, name: str) -> dict[Any, dict[str, Any]]:
        return self._data.setdefault(name, {})

    def marker_exists(self, marker_id: str) -> bool:
        return marker_id in self._collection(self.marker_collection)

    def insert_records(
        self,
        documents: list[dict[str, Any]],
        ignore_duplicates: bool = True,
    ) -> InsertOutcome:
        if not documents:
            return InsertOutcome(inserted=0)

        collection = self._collection(self.users_collection)
        write_errors = []
        inserted = 0

        for index, doc in enumerate(documents):
            key = doc["_id"]
            if key in collection:
                write_errors.append(
                    {
                        "index": index,
                        "code": DUPLICATE_KEY_ERROR,
                        "errmsg": f"E11000 duplicate key error collection: "
                        f"{self.users_collection} dup key: {{ _id: {key!r} }}",
                    }
                )
                continue
            collection[key] = dict(doc)
            inserted += 1

        if write_errors:
            return resolve_write_errors(
                self.users_collection,
                write_errors,
                inserted=inserted,
                ignore_duplicates=ignore_duplicates,
            )

        return InsertOutcome(inserted=inserted)

    def insert_marker(self, marker: BootstrapMarker) -> None:
        collection = self._collection(self.marker_collection)
        if marker.id in collection:
            raise DuplicateKeyError(
                f"E11000 duplicate key error collection: "
                f"{self.marker_collection} dup key: {{ _id: {marker.id!r} }}",
                code=DUPLICATE_KEY_ERROR,
            )
        collection[marker.id] = marker.to_document()

    def count_records(self) -> int:
        return len(self._collection(self.users_collection))

    def get_data(self, collection: str) -> list[dict[str, Any]]:
        """
        Get in-memory documents for inspection.

        Args:
            collection: Collection name

        Returns:
            List of documents in insertion order
        """
        return list(self._data.get(collection, {}).values())

    def clear(self) -> None:
        """Clear all in-memory collections."""
        self._data.clear()
