"""Tests for Seeder against the in-memory backend."""

import logging

import pytest
from pymongo.errors import DuplicateKeyError

from mongo_seed import (
    BootstrapMarker,
    Config,
    InvalidRecordCountError,
    Seeder,
    SeedState,
    SeedWriteError,
    StagingBackend,
)
from tests.conftest import FIXED_TIME


def test_first_run_seeds_2000_records(seeder: Seeder, backend: StagingBackend):
    """Empty database -> 2000 records, marker present, record 0 derived."""
    result = seeder.run()

    assert result.action == "seeded"
    assert result.requested == 2000
    assert result.inserted == 2000
    assert result.duplicates == 0
    assert result.total == 2000

    users = backend.get_data("users")
    assert [u["_id"] for u in users] == list(range(2000))
    assert users[0]["name"] == "User 0"
    assert users[0]["email"] == "user0@example.com"
    assert users[0]["createdAt"] == FIXED_TIME


def test_first_run_writes_marker(seeder: Seeder, backend: StagingBackend):
    seeder.run()

    assert backend.marker_exists("loaded")
    assert backend.get_data("__bootstrap") == [{"_id": "loaded", "at": FIXED_TIME}]


def test_second_run_is_noop(seeder: Seeder, backend: StagingBackend):
    """Running twice yields the same count as running once."""
    first = seeder.run()
    second = seeder.run()

    assert second.skipped
    assert second.inserted == 0
    assert second.total == first.total == 2000
    assert len(backend.get_data("__bootstrap")) == 1


def test_existing_marker_skips_all_writes(backend: StagingBackend, config: Config):
    """Database already holding the marker: zero inserts, count unchanged."""
    backend.insert_records([{"_id": "pre-existing"}])
    backend.insert_marker(BootstrapMarker(id="loaded", at=FIXED_TIME))

    result = Seeder(backend, config).run()

    assert result.skipped
    assert result.inserted == 0
    assert result.total == 1
    assert backend.get_data("users") == [{"_id": "pre-existing"}]


def test_state_transitions_once(seeder: Seeder):
    assert seeder.state() is SeedState.UNSEEDED

    seeder.run()

    assert seeder.state() is SeedState.SEEDED
    seeder.run()
    assert seeder.state() is SeedState.SEEDED


def test_status_does_not_write(seeder: Seeder, backend: StagingBackend):
    assert seeder.status() == (SeedState.UNSEEDED, 0)
    assert backend.get_data("users") == []
    assert backend.get_data("__bootstrap") == []


def test_record_count_argument_overrides_config(seeder: Seeder):
    result = seeder.run(record_count=10)

    assert result.requested == 10
    assert result.total == 10


def test_record_count_from_config(backend: StagingBackend):
    config = Config(seed={"record_count": 25})

    result = Seeder(backend, config).run()

    assert result.total == 25


def test_negative_count_rejected_before_writes(seeder: Seeder, backend: StagingBackend):
    with pytest.raises(InvalidRecordCountError):
        seeder.run(record_count=-5)

    assert backend.get_data("__bootstrap") == []


def test_crash_recovery_tolerates_duplicates(seeder: Seeder, backend: StagingBackend):
    """Records left by a run that died before the marker are absorbed."""
    backend.insert_records([{"_id": i} for i in range(500)])

    result = seeder.run()

    assert result.action == "seeded"
    assert result.inserted == 1500
    assert result.duplicates == 500
    assert result.total == 2000
    assert backend.marker_exists("loaded")


def test_duplicates_fail_when_policy_disabled(backend: StagingBackend):
    config = Config(seed={"ignore_duplicates": False})
    backend.insert_records([{"_id": 0}])

    with pytest.raises(SeedWriteError) as exc_info:
        Seeder(backend, config).run(record_count=3)

    assert exc_info.value.inserted == 2
    assert not backend.marker_exists("loaded")


def test_custom_collections_and_marker(config: Config):
    config = Config(
        database={"users_collection": "people", "marker_collection": "_meta"},
        seed={"marker_id": "people-v1"},
    )
    backend = StagingBackend(users_collection="people", marker_collection="_meta")

    Seeder(backend, config).run(record_count=3)

    assert len(backend.get_data("people")) == 3
    assert backend.get_data("_meta")[0]["_id"] == "people-v1"


def test_zero_records_still_marks_seeded(seeder: Seeder, backend: StagingBackend):
    result = seeder.run(record_count=0)

    assert result.total == 0
    assert backend.marker_exists("loaded")


def test_both_branches_log_count(seeder: Seeder, caplog):
    with caplog.at_level(logging.INFO, logger="mongo_seed.seeder"):
        seeder.run(record_count=4)
        seeded_messages = [r.getMessage() for r in caplog.records]
        caplog.clear()
        seeder.run(record_count=4)
        skipped_messages = [r.getMessage() for r in caplog.records]

    assert "Count: 4" in seeded_messages
    assert "Test data present; skipping" in skipped_messages
    assert "Count: 4" in skipped_messages


def test_concurrent_marker_write_raises_driver_error(backend: StagingBackend):
    """A marker written between the check and the insert is not swallowed."""
    seeder = Seeder(backend, Config())
    original = backend.insert_marker

    def racing_insert(marker):
        original(BootstrapMarker(id=marker.id, at=FIXED_TIME))
        original(marker)

    backend.insert_marker = racing_insert

    with pytest.raises(DuplicateKeyError):
        seeder.run(record_count=2)
