"""Core functionality for mongo-seed."""

from mongo_seed.core.models import (
    BootstrapMarker,
    InsertOutcome,
    SeedResult,
    SeedState,
    UserRecord,
)

__all__ = [
    "BootstrapMarker",
    "InsertOutcome",
    "SeedResult",
    "SeedState",
    "UserRecord",
]
