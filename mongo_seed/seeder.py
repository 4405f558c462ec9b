"""Idempotent seeding of synthetic user records."""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Optional

from pymongo.database import Database

from mongo_seed.backends import DirectBackend, SeedBackend
from mongo_seed.config import Config
from mongo_seed.core.models import BootstrapMarker, SeedResult, SeedState
from mongo_seed.exceptions import InvalidRecordCountError
from mongo_seed.generator import UserGenerator, utc_now

logger = logging.getLogger(__name__)


class Seeder:
    """
    Populate the users collection once and record that it happened.

    A run checks for the bootstrap marker. If it is absent, the run writes
    ``record_count`` user records in one unordered bulk insert and then the
    marker. If it is present, the run writes nothing. Either way the run
    reports the final document count.

    The check and the marker write are not atomic. Two concurrent runs
    against an unseeded database can both insert; overlapping ids then
    surface as duplicate-key conflicts, which the bulk insert tolerates when
    ``seed.ignore_duplicates`` is enabled.
    """

    def __init__(
        self,
        backend: SeedBackend,
        config: Optional[Config] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize Seeder.

        Args:
            backend: Storage backend (DirectBackend or StagingBackend)
            config: Seeding configuration (defaults to Config())
            clock: Timestamp source for records and the marker
        """
        self.backend = backend
        self.config = config or Config()
        self.clock = clock
        self.generator = UserGenerator(clock=clock)

    @classmethod
    def for_database(
        cls, database: Database, config: Optional[Config] = None
    ) -> "Seeder":
        """Build a Seeder writing to ``database`` through a DirectBackend."""
        config = config or Config()
        backend = DirectBackend(
            database,
            users_collection=config.database.users_collection,
            marker_collection=config.database.marker_collection,
        )
        return cls(backend, config)

    def state(self) -> SeedState:
        """Return the bootstrap state of the target database."""
        if self.backend.marker_exists(self.config.seed.marker_id):
            return SeedState.SEEDED
        return SeedState.UNSEEDED

    def status(self) -> tuple[SeedState, int]:
        """Return the bootstrap state and current record count without writing."""
        return self.state(), self.backend.count_records()

    def run(self, record_count: Optional[int] = None) -> SeedResult:
        """
        Seed the database if it has not been seeded yet.

        Args:
            record_count: Records to insert (defaults to seed.record_count)

        Returns:
            SeedResult describing the action taken and the final count

        Raises:
            InvalidRecordCountError: If record_count is negative
            SeedWriteError: If the bulk insert fails beyond tolerated duplicates
        """
        seed = self.config.seed
        count = seed.record_count if record_count is None else record_count
        if count < 0:
            raise InvalidRecordCountError(count)

        if self.state() is SeedState.SEEDED:
            logger.info("Test data present; skipping")
            total = self.backend.count_records()
            logger.info(f"Count: {total}")
            return SeedResult(
                action=SeedResult.SKIPPED,
                requested=count,
                inserted=0,
                duplicates=0,
                total=total,
            )

        documents = self.generator.generate_batch(count)
        outcome = self.backend.insert_records(
            documents, ignore_duplicates=seed.ignore_duplicates
        )
        self.backend.insert_marker(BootstrapMarker(id=seed.marker_id, at=self.clock()))
        logger.info(
            f"Loaded {count} docs ({outcome.inserted} inserted, "
            f"{outcome.duplicates} duplicates)"
        )

        total = self.backend.count_records()
        logger.info(f"Count: {total}")
        return SeedResult(
            action=SeedResult.SEEDED,
            requested=count,
            inserted=outcome.inserted,
            duplicates=outcome.duplicates,
            total=total,
        )


def run(
    database: Database,
    record_count: Optional[int] = None,
    config: Optional[Config] = None,
) -> SeedResult:
    """
    Seed ``database`` once.

    Shortcut for ``Seeder.for_database(database, config).run(record_count)``.
    """
    return Seeder.for_database(database, config).run(record_count)
