"""Shared fixtures: SQLite stores on tmp_path and a store that fails on demand."""

import pytest

from resumeai.contexts.records import SQLiteRecordStore, StoreError


class FlakyRecordStore(SQLiteRecordStore):
    """
    SQLite store that raises StoreError for selected (operation, collection) pairs.

    Operations: "get_profile", "save_profile", "list", "insert", "update", "delete".
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.failures = set()

    def fail(self, operation: str, collection: str = "*") -> None:
        self.failures.add((operation, collection))

    def heal(self) -> None:
        self.failures.clear()

    def _check(self, operation: str, collection: str) -> None:
        if (operation, collection) in self.failures or (operation, "*") in self.failures:
            raise StoreError("simulated outage", collection=collection, operation=operation)

    async def get_profile(self, user_id):
        self._check("get_profile", "profiles")
        return await super().get_profile(user_id)

    async def save_profile(self, profile):
        self._check("save_profile", "profiles")
        return await super().save_profile(profile)

    async def list_records(self, collection, user_id):
        self._check("list", collection)
        return await super().list_records(collection, user_id)

    async def insert_record(self, collection, record):
        self._check("insert", collection)
        return await super().insert_record(collection, record)

    async def update_record(self, collection, record_id, values):
        self._check("update", collection)
        return await super().update_record(collection, record_id, values)

    async def delete_record(self, collection, record_id):
        self._check("delete", collection)
        return await super().delete_record(collection, record_id)


@pytest.fixture
def events_file(tmp_path):
    return tmp_path / "logs" / "record_events.log"


@pytest.fixture
def store(tmp_path, events_file):
    return SQLiteRecordStore(tmp_path / "resumeai.db", events_file=events_file)


@pytest.fixture
def flaky_store(tmp_path, events_file):
    return FlakyRecordStore(tmp_path / "flaky.db", events_file=events_file)
