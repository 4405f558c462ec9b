"""Deterministic user record generation."""

from collections.abc import Callable, Iterator
from datetime import datetime, timezone
from typing import Any

from mongo_seed.core.models import UserRecord
from mongo_seed.exceptions import InvalidRecordCountError


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class UserGenerator:
    """
    Build synthetic user records with sequential ids.

    Ids start at ``start`` (0 by default) and increase by one. ``name`` and
    ``email`` are derived from the id, so the same count always produces the
    same documents apart from ``createdAt``.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now, start: int = 0):
        """
        Initialize generator.

        Args:
            clock: Callable returning the timestamp stamped on each record
            start: First id to generate
        """
        self.clock = clock
        self.start = start

    def iter_records(self, count: int) -> Iterator[UserRecord]:
        """
        Yield ``count`` records.

        Raises:
            InvalidRecordCountError: If count is negative
        """
        if count < 0:
            raise InvalidRecordCountError(count)

        for i in range(self.start, self.start + count):
            yield UserRecord(id=i, created_at=self.clock())

    def generate_batch(self, count: int) -> list[dict[str, Any]]:
        """Generate ``count`` records as MongoDB documents."""
        return [record.to_document() for record in self.iter_records(count)]
