"""Pytest configuration and shared fixtures."""

import os
from datetime import datetime, timezone

import pytest

from mongo_seed import Config, Seeder, StagingBackend

FIXED_TIME = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep MONGO_SEED_* variables from the shell out of Config()."""
    for key in list(os.environ):
        if key.startswith("MONGO_SEED_") and key != "MONGO_SEED_TEST_URL":
            monkeypatch.delenv(key)


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def backend() -> StagingBackend:
    """Provide an empty in-memory backend."""
    return StagingBackend()


@pytest.fixture
def seeder(backend: StagingBackend, config: Config) -> Seeder:
    """Seeder over the in-memory backend with a fixed clock."""
    return Seeder(backend, config, clock=lambda: FIXED_TIME)


@pytest.fixture
def mongo_db():
    """
    Provide a throwaway database on a real MongoDB server.

    Skipped unless MONGO_SEED_TEST_URL is set. The database is dropped
    after the test.
    """
    url = os.environ.get("MONGO_SEED_TEST_URL")
    if not url:
        pytest.skip("MONGO_SEED_TEST_URL not set")

    from pymongo import MongoClient

    client = MongoClient(url, serverSelectionTimeoutMS=2000)
    name = f"mongo_seed_test_{os.getpid()}"
    client.drop_database(name)

    yield client[name]

    client.drop_database(name)
    client.close()
