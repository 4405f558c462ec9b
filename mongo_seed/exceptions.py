"""Custom exceptions with helpful error messages."""

from typing import Any


class MongoSeedError(Exception):
    """Base exception for mongo-seed errors."""

    pass


class InvalidRecordCountError(MongoSeedError):
    """Requested record count cannot be seeded."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"Cannot seed {count} records: count must be zero or positive.\n\n"
            f"Suggestions:\n"
            f"1. Pass a non-negative value: mongo-seed run --count 2000\n"
            f"2. Check [seed] record_count in mongo-seed.toml\n"
            f"3. Check the MONGO_SEED_SEED__RECORD_COUNT environment variable"
        )


class SeedWriteError(MongoSeedError):
    """Bulk insert failed with errors that are not tolerated."""

    def __init__(
        self,
        collection: str,
        write_errors: list[dict[str, Any]],
        inserted: int = 0,
    ):
        self.collection = collection
        self.write_errors = write_errors
        self.inserted = inserted

        codes = sorted({err.get("code") for err in write_errors}, key=str)
        first = write_errors[0].get("errmsg", "unknown error") if write_errors else ""
        super().__init__(
            f"Bulk insert into '{collection}' failed: {len(write_errors)} write "
            f"error(s) (codes: {', '.join(str(c) for c in codes)}), "
            f"{inserted} record(s) inserted.\n"
            f"First error: {first}\n\n"
            f"Suggestions:\n"
            f"1. Duplicate keys (code 11000) are ignored only when "
            f"[seed] ignore_duplicates = true\n"
            f"2. Check write permissions for the configured user\n"
            f"3. Check collection validators on '{collection}'"
        )
