"""Direct backend - writes seed documents to MongoDB with pymongo."""

import logging
from typing import Any

from pymongo import InsertOne
from pymongo.database import Database
from pymongo.errors import BulkWriteError

from mongo_seed.backends.base import SeedBackend, resolve_write_errors
from mongo_seed.core.models import BootstrapMarker, InsertOutcome
from mongo_seed.exceptions import SeedWriteError

logger = logging.getLogger(__name__)


class DirectBackend(SeedBackend):
    """
    Execute seeding against a live MongoDB database.

    Collections are looked up on the database handle for every operation.
    No collection handle is cached between calls.
    """

    def __init__(
        self,
        database: Database,
        users_collection: str = "users",
        marker_collection: str = "__bootstrap",
    ):
        """
        Initialize backend.

        Args:
            database: pymongo Database handle (lifecycle owned by the caller)
            users_collection: Collection receiving user records
            marker_collection: Collection holding the bootstrap marker
        """
        self.database = database
        self.users_collection = users_collection
        self.marker_collection = marker_collection

    def marker_exists(self, marker_id: str) -> bool:
        logger.debug(
            f"Looking up marker '{marker_id}' in "
            f"{self.database.name}.{self.marker_collection}"
        )
        found = self.database[self.marker_collection].find_one({"_id": marker_id})
        return found is not None

    def insert_records(
        self,
        documents: list[dict[str, Any]],
        ignore_duplicates: bool = True,
    ) -> InsertOutcome:
        if not documents:
            return InsertOutcome(inserted=0)

        requests = [InsertOne(doc) for doc in documents]

        try:
            result = self.database[self.users_collection].bulk_write(
                requests, ordered=False
            )
        except BulkWriteError as exc:
            details = exc.details or {}
            concern_errors = details.get("writeConcernErrors") or []
            if concern_errors:
                raise SeedWriteError(
                    self.users_collection,
                    concern_errors,
                    inserted=details.get("nInserted", 0),
                ) from exc
            try:
                return resolve_write_errors(
                    self.users_collection,
                    details.get("writeErrors", []),
                    inserted=details.get("nInserted", 0),
                    ignore_duplicates=ignore_duplicates,
                )
            except SeedWriteError as err:
                raise err from exc

        if not result.acknowledged:
            logger.warning(
                f"Unacknowledged write concern on '{self.users_collection}'; "
                f"insert results are not reported by the server"
            )
            return InsertOutcome(inserted=len(documents))

        return InsertOutcome(inserted=result.inserted_count)

    def insert_marker(self, marker: BootstrapMarker) -> None:
        self.database[self.marker_collection].insert_one(marker.to_document())

    def count_records(self) -> int:
        return self.database[self.users_collection].count_documents({})
