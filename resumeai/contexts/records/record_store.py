"""
Record store client.

Defines the contract every record store satisfies (scoped CRUD over the profile and
the four per-user collections) and a persistent SQLite implementation of it.

Every operation is a coroutine. The SQLite store runs its blocking sqlite3 calls in
a worker thread and opens one short-lived connection per operation.
"""

import asyncio
import json
import os
import sqlite3
import uuid
from abc import ABC, abstractmethod
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from dotenv import load_dotenv

from resumeai.contexts.records.exceptions import (
    NotAuthenticatedError,
    StoreError,
    UnknownCollectionError,
)
from resumeai.contexts.records.logger import (
    _log_debug,
    log_audit_failure,
    log_mutation,
    log_store_failure,
)
from resumeai.contexts.records.record_data_structures import (
    ORDER_KEYS,
    RECORD_TYPES,
    SYSTEM_FIELDS,
    Profile,
)
from resumeai.utils.event_logging import log_record_event
from resumeai.utils.timestamp import now_exact

load_dotenv()
DB_PATH = Path(os.getenv("RESUMEAI_DB_PATH", "outs/resumeai.db"))

PROFILE_COLLECTION = "profiles"

# Columns stored as JSON text
JSON_COLUMNS = ("technologies",)
# Columns stored as 0/1 integers
BOOL_COLUMNS = ("is_current", "is_featured")


def require_user_id(user_id: Optional[str]) -> str:
    """
    Guard for core operations: refuse to run without an authenticated user.

    Raises:
        NotAuthenticatedError: If user_id is empty or None
    """
    if not user_id:
        raise NotAuthenticatedError("An authenticated user id is required")
    return user_id


def record_type_for(collection: str):
    """Look up the record class for a collection name."""
    try:
        return RECORD_TYPES[collection]
    except KeyError:
        raise UnknownCollectionError(
            f"Unknown collection '{collection}'. Valid collections: {list(RECORD_TYPES)}"
        ) from None


class RecordCollection:
    """Per-collection view of a store: list / insert / update / delete."""

    def __init__(self, store: "RecordStore", name: str):
        record_type_for(name)
        self.store = store
        self.name = name

    async def list(self, user_id: str) -> list:
        return await self.store.list_records(self.name, user_id)

    async def insert(self, record):
        return await self.store.insert_record(self.name, record)

    async def update(self, record_id: str, values: Mapping[str, Any]):
        return await self.store.update_record(self.name, record_id, values)

    async def delete(self, record_id: str) -> None:
        await self.store.delete_record(self.name, record_id)


class RecordStore(ABC):
    """
    Contract for the remote record store.

    Every method may raise StoreError, which callers treat as
    "the operation did not happen".
    """

    def collection(self, name: str) -> RecordCollection:
        return RecordCollection(self, name)

    @abstractmethod
    async def get_profile(self, user_id: str) -> Optional[Profile]:
        """Return the user's profile, or None if it was never saved."""

    @abstractmethod
    async def save_profile(self, profile: Profile) -> Profile:
        """Create the profile on first save, overwrite it afterwards."""

    @abstractmethod
    async def list_records(self, collection: str, user_id: str) -> list:
        """Return the user's records in the collection's designated order."""

    @abstractmethod
    async def insert_record(self, collection: str, record):
        """Insert a record already carrying its owner's user id."""

    @abstractmethod
    async def update_record(self, collection: str, record_id: str, values: Mapping[str, Any]):
        """Overwrite the editable fields of a record and return the stored result."""

    @abstractmethod
    async def delete_record(self, collection: str, record_id: str) -> None:
        """Delete a record by id."""


class SQLiteRecordStore(RecordStore):
    """
    SQLite-backed record store.

    One table per collection plus a profiles table keyed by user id. Ids are UUID4
    strings and timestamps ISO 8601 strings. The schema is created on first use.
    """

    def __init__(self, db_path: Path = DB_PATH, events_file: Path = None):
        """
        Open (or create) a record database.

        Args:
            db_path: Path to SQLite database file
            events_file: Record event log override (defaults to RECORD_EVENTS_FILE)
        """
        self.db_path = Path(db_path)
        self.events_file = events_file

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._create_schema()

    # Schema

    def _create_schema(self) -> None:
        conn = self._connect()
        try:
            conn.execute(self._table_sql(PROFILE_COLLECTION, Profile, primary_key="id"))
            for collection, record_type in RECORD_TYPES.items():
                conn.execute(self._table_sql(collection, record_type, primary_key="id"))
                conn.execute(
                    f"CREATE INDEX IF NOT EXISTS idx_{collection}_user_id ON {collection}(user_id)"
                )
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _table_sql(table: str, record_type, primary_key: str) -> str:
        columns = []
        for f in fields(record_type):
            if f.name == primary_key:
                columns.append(f"{f.name} TEXT PRIMARY KEY")
            elif f.name in ("display_order",) + BOOL_COLUMNS:
                columns.append(f"{f.name} INTEGER NOT NULL DEFAULT 0")
            else:
                columns.append(f"{f.name} TEXT")
        return f"CREATE TABLE IF NOT EXISTS {table} ({', '.join(columns)})"

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    # Row encoding

    @staticmethod
    def _encode(values: Mapping[str, Any]) -> Dict[str, Any]:
        encoded = dict(values)
        for column in JSON_COLUMNS:
            if column in encoded:
                encoded[column] = json.dumps(list(encoded[column] or []))
        for column in BOOL_COLUMNS:
            if column in encoded:
                encoded[column] = int(bool(encoded[column]))
        return encoded

    @staticmethod
    def _decode(record_type, row: sqlite3.Row):
        values = dict(row)
        for column in JSON_COLUMNS:
            if column in values:
                values[column] = json.loads(values[column]) if values[column] else []
        for column in BOOL_COLUMNS:
            if column in values:
                values[column] = bool(values[column])
        return record_type.from_row(values)

    # Blocking implementations (run in a worker thread)

    def _run(self, collection: str, operation: str, func, *args):
        try:
            return func(*args)
        # ValueError covers rows whose JSON columns no longer decode
        except (sqlite3.Error, ValueError) as e:
            log_store_failure(collection, operation, e)
            raise StoreError(
                "Record store operation failed",
                collection=collection,
                operation=operation,
                original_error=e,
            ) from e

    def _select_profile(self, user_id: str) -> Optional[Profile]:
        conn = self._connect()
        try:
            row = conn.execute(
                f"SELECT * FROM {PROFILE_COLLECTION} WHERE id = ?", (user_id,)
            ).fetchone()
        finally:
            conn.close()
        return self._decode(Profile, row) if row else None

    def _upsert_profile(self, profile: Profile) -> Profile:
        timestamp = now_exact()
        values = profile.to_row()
        values["updated_at"] = timestamp

        conn = self._connect()
        try:
            existing = conn.execute(
                f"SELECT created_at FROM {PROFILE_COLLECTION} WHERE id = ?", (profile.id,)
            ).fetchone()
            if existing is None:
                values["created_at"] = timestamp
                columns = list(values)
                conn.execute(
                    f"INSERT INTO {PROFILE_COLLECTION} ({', '.join(columns)}) "
                    f"VALUES ({', '.join('?' * len(columns))})",
                    tuple(values[c] for c in columns),
                )
            else:
                values.pop("created_at", None)
                columns = [c for c in values if c != "id"]
                conn.execute(
                    f"UPDATE {PROFILE_COLLECTION} SET {', '.join(f'{c} = ?' for c in columns)} "
                    f"WHERE id = ?",
                    tuple(values[c] for c in columns) + (profile.id,),
                )
            conn.commit()
            row = conn.execute(
                f"SELECT * FROM {PROFILE_COLLECTION} WHERE id = ?", (profile.id,)
            ).fetchone()
        finally:
            conn.close()
        return self._decode(Profile, row)

    def _select_records(self, collection: str, user_id: str) -> list:
        record_type = record_type_for(collection)
        order_key = ORDER_KEYS[collection]
        conn = self._connect()
        try:
            # rowid keeps insertion order among equal sort keys
            rows = conn.execute(
                f"SELECT * FROM {collection} WHERE user_id = ? ORDER BY {order_key}, rowid",
                (user_id,),
            ).fetchall()
        finally:
            conn.close()
        return [self._decode(record_type, row) for row in rows]

    def _insert_record(self, collection: str, record):
        record_type = record_type_for(collection)
        timestamp = now_exact()
        values = self._encode(record.to_row())
        values["id"] = values.get("id") or str(uuid.uuid4())
        values["created_at"] = timestamp
        values["updated_at"] = timestamp

        columns = list(values)
        conn = self._connect()
        try:
            conn.execute(
                f"INSERT INTO {collection} ({', '.join(columns)}) "
                f"VALUES ({', '.join('?' * len(columns))})",
                tuple(values[c] for c in columns),
            )
            conn.commit()
            row = conn.execute(
                f"SELECT * FROM {collection} WHERE id = ?", (values["id"],)
            ).fetchone()
        finally:
            conn.close()
        return self._decode(record_type, row)

    def _update_record(self, collection: str, record_id: str, values: Mapping[str, Any]):
        record_type = record_type_for(collection)
        known = {f.name for f in fields(record_type)}
        updates = {k: v for k, v in values.items() if k in known and k not in SYSTEM_FIELDS}
        updates = self._encode(updates)
        updates["updated_at"] = now_exact()

        columns = list(updates)
        conn = self._connect()
        try:
            cursor = conn.execute(
                f"UPDATE {collection} SET {', '.join(f'{c} = ?' for c in columns)} WHERE id = ?",
                tuple(updates[c] for c in columns) + (record_id,),
            )
            if cursor.rowcount == 0:
                raise StoreError(
                    f"No record with id '{record_id}'", collection=collection, operation="update"
                )
            conn.commit()
            row = conn.execute(f"SELECT * FROM {collection} WHERE id = ?", (record_id,)).fetchone()
        finally:
            conn.close()
        return self._decode(record_type, row)

    def _delete_record(self, collection: str, record_id: str) -> Optional[str]:
        record_type_for(collection)
        conn = self._connect()
        try:
            row = conn.execute(
                f"SELECT user_id FROM {collection} WHERE id = ?", (record_id,)
            ).fetchone()
            conn.execute(f"DELETE FROM {collection} WHERE id = ?", (record_id,))
            conn.commit()
        finally:
            conn.close()
        return row["user_id"] if row else None

    def _audit(self, event_type: str, user_id: Optional[str], collection: str, record_id: str) -> None:
        """Append to the event log; the mutation is already committed, so a failed write only warns."""
        try:
            log_record_event(event_type, user_id, collection, record_id, events_file=self.events_file)
        except OSError as e:
            log_audit_failure(event_type, collection, record_id, e)

    # Async contract

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        require_user_id(user_id)
        _log_debug(f"Fetching profile for user {user_id}")
        return await asyncio.to_thread(
            self._run, PROFILE_COLLECTION, "get", self._select_profile, user_id
        )

    async def save_profile(self, profile: Profile) -> Profile:
        require_user_id(profile.id)
        saved = await asyncio.to_thread(
            self._run, PROFILE_COLLECTION, "save", self._upsert_profile, profile
        )
        log_mutation(PROFILE_COLLECTION, "save", saved.id, saved.id)
        self._audit("profile_save", saved.id, PROFILE_COLLECTION, saved.id)
        return saved

    async def list_records(self, collection: str, user_id: str) -> list:
        require_user_id(user_id)
        _log_debug(f"Listing {collection} for user {user_id}")
        return await asyncio.to_thread(
            self._run, collection, "list", self._select_records, collection, user_id
        )

    async def insert_record(self, collection: str, record):
        require_user_id(record.user_id)
        saved = await asyncio.to_thread(
            self._run, collection, "insert", self._insert_record, collection, record
        )
        log_mutation(collection, "insert", saved.id, saved.user_id)
        self._audit("insert", saved.user_id, collection, saved.id)
        return saved

    async def update_record(self, collection: str, record_id: str, values: Mapping[str, Any]):
        saved = await asyncio.to_thread(
            self._run, collection, "update", self._update_record, collection, record_id, values
        )
        log_mutation(collection, "update", saved.id, saved.user_id)
        self._audit("update", saved.user_id, collection, saved.id)
        return saved

    async def delete_record(self, collection: str, record_id: str) -> None:
        user_id = await asyncio.to_thread(
            self._run, collection, "delete", self._delete_record, collection, record_id
        )
        log_mutation(collection, "delete", record_id, user_id)
        self._audit("delete", user_id, collection, record_id)
