"""Backend implementations for seed execution."""

from mongo_seed.backends.base import DUPLICATE_KEY_ERROR, SeedBackend
from mongo_seed.backends.direct import DirectBackend
from mongo_seed.backends.staging import StagingBackend

__all__ = ["DUPLICATE_KEY_ERROR", "DirectBackend", "SeedBackend", "StagingBackend"]
