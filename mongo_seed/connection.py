"""Scoped MongoDB connection handling."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from pymongo import MongoClient
from pymongo.database import Database

from mongo_seed.config import DatabaseConfig

logger = logging.getLogger(__name__)


@contextmanager
def connect(config: DatabaseConfig) -> Iterator[Database]:
    """
    Open a client for the duration of the block and yield the target database.

    The client is closed on exit, including when the block raises. Driver
    defaults apply for timeouts; connection errors surface on first use.

    Usage:
        with connect(config.database) as db:
            Seeder.for_database(db, config).run()
    """
    client: MongoClient = MongoClient(config.url)
    logger.debug(f"Opened MongoDB client for database '{config.name}'")
    try:
        yield client[config.name]
    finally:
        client.close()
        logger.debug("Closed MongoDB client")
