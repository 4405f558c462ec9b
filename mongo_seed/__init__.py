"""
mongo-seed - Idempotent seeding of synthetic users into MongoDB.

This package provides tools for:
- Generating deterministic user records (User 0 .. User N-1)
- Inserting them once with an unordered bulk write
- Recording completion with a bootstrap marker so later runs skip
"""

__version__ = "0.1.0"

from mongo_seed.backends import DirectBackend, StagingBackend
from mongo_seed.config import Config
from mongo_seed.connection import connect
from mongo_seed.core.models import BootstrapMarker, SeedResult, SeedState, UserRecord
from mongo_seed.exceptions import InvalidRecordCountError, MongoSeedError, SeedWriteError
from mongo_seed.seeder import Seeder, run

__all__ = [
    "BootstrapMarker",
    "Config",
    "DirectBackend",
    "InvalidRecordCountError",
    "MongoSeedError",
    "SeedResult",
    "SeedState",
    "SeedWriteError",
    "Seeder",
    "StagingBackend",
    "UserRecord",
    "__version__",
    "connect",
    "run",
]
