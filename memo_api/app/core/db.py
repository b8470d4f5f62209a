"""
SQLite backed document store.

This module provides a small keyed document store on top of SQLite.
A ``Database`` owns a single connection and hands out ``Collection``
objects; each collection lives in its own table where documents are
stored as JSON next to the bookkeeping columns the store maintains
for itself (a sequence number, a revision counter and timestamps).

Documents returned by a collection carry that bookkeeping under the
``_seq`` and ``_meta`` keys.  Callers outside the storage layer are
expected to strip them (see ``INTERNAL_FIELDS``).

Mutations are applied to the connection immediately and become
durable when ``Database.save_database`` commits them.
"""

import json
import logging
import os
import re
import sqlite3
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

SEQ_FIELD = "_seq"
META_FIELD = "_meta"
INTERNAL_FIELDS = (SEQ_FIELD, META_FIELD)

_COLLECTION_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

logger = logging.getLogger(__name__)


class CollectionError(Exception):
    """Raised when a document cannot be matched to a stored row."""


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths and the special ``:memory:`` name are used as is.
    Relative paths are resolved against the project root.
    """
    if database_url == ":memory:" or os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


def _now_ms() -> int:
    return int(time.time() * 1000)


class Collection:
    """An unordered set of JSON documents addressed by a unique key."""

    def __init__(self, name: str, conn: sqlite3.Connection, key: str = "id") -> None:
        if not _COLLECTION_NAME.match(name):
            raise ValueError(f"Invalid collection name: {name!r}")
        self.name = name
        self.key = key
        self._conn = conn
        self._conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {name} (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                key TEXT NOT NULL UNIQUE,
                data TEXT NOT NULL,
                revision INTEGER NOT NULL DEFAULT 0,
                created INTEGER NOT NULL,
                updated INTEGER
            )
            """
        )

    def insert(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        """Store a copy of ``doc`` and return it with bookkeeping attached.

        Raises ``sqlite3.IntegrityError`` when the key already exists.
        """
        data = self._payload(doc)
        created = _now_ms()
        cursor = self._conn.execute(
            f"INSERT INTO {self.name} (key, data, revision, created) VALUES (?, ?, 0, ?)",
            (str(data[self.key]), json.dumps(data), created),
        )
        return self._document(
            {
                "seq": cursor.lastrowid,
                "data": json.dumps(data),
                "revision": 0,
                "created": created,
                "updated": None,
            }
        )

    def find(self) -> List[Dict[str, Any]]:
        """Return every document in storage order (no ordering guarantee)."""
        rows = self._conn.execute(f"SELECT * FROM {self.name}").fetchall()
        return [self._document(row) for row in rows]

    def find_one(self, key: Any) -> Optional[Dict[str, Any]]:
        row = self._conn.execute(
            f"SELECT * FROM {self.name} WHERE key = ?",
            (str(key),),
        ).fetchone()
        if row is None:
            return None
        return self._document(row)

    def update(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        """Write back a document previously read from this collection.

        The document's ``_meta`` is refreshed in place and the document
        is returned.
        """
        seq = self._require_seq(doc)
        data = self._payload(doc)
        updated = _now_ms()
        cursor = self._conn.execute(
            f"""
            UPDATE {self.name}
            SET key = ?, data = ?, revision = revision + 1, updated = ?
            WHERE seq = ?
            """,
            (str(data[self.key]), json.dumps(data), updated, seq),
        )
        if cursor.rowcount == 0:
            raise CollectionError(f"Document {seq} is not stored in {self.name}")
        meta = dict(doc.get(META_FIELD) or {})
        meta["revision"] = meta.get("revision", 0) + 1
        meta["updated"] = updated
        doc[META_FIELD] = meta
        return doc

    def remove(self, doc: Dict[str, Any]) -> None:
        seq = self._require_seq(doc)
        cursor = self._conn.execute(f"DELETE FROM {self.name} WHERE seq = ?", (seq,))
        if cursor.rowcount == 0:
            raise CollectionError(f"Document {seq} is not stored in {self.name}")

    def count(self) -> int:
        return self._conn.execute(f"SELECT COUNT(*) FROM {self.name}").fetchone()[0]

    def _payload(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        data = {k: v for k, v in doc.items() if k not in INTERNAL_FIELDS}
        if data.get(self.key) is None:
            raise CollectionError(f"Document has no '{self.key}' key")
        return data

    @staticmethod
    def _require_seq(doc: Dict[str, Any]) -> int:
        seq = doc.get(SEQ_FIELD)
        if seq is None:
            raise CollectionError("Document was not read from this collection")
        return seq

    @staticmethod
    def _document(row: Any) -> Dict[str, Any]:
        doc = json.loads(row["data"])
        doc[SEQ_FIELD] = row["seq"]
        doc[META_FIELD] = {
            "revision": row["revision"],
            "created": row["created"],
            "updated": row["updated"],
        }
        return doc


class Database:
    """Owner of the SQLite connection and its collections."""

    def __init__(self, path: str) -> None:
        self.path = path
        # The connection is shared by the event loop and the threads
        # FastAPI uses for startup; sqlite serialises access itself.
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._collections: Dict[str, Collection] = {}

    def get_collection(self, name: str, key: str = "id") -> Collection:
        """Return the named collection, creating its table on first use."""
        collection = self._collections.get(name)
        if collection is None:
            collection = Collection(name, self._conn, key=key)
            self._collections[name] = collection
            logger.debug("Collection %s ready in %s", name, self.path)
        return collection

    def save_database(self) -> None:
        """Flush pending mutations to disk."""
        self._conn.commit()

    def close(self) -> None:
        self._conn.commit()
        self._conn.close()
        logger.info("Database %s closed", self.path)


def init_db(database_url: str) -> Database:
    """Open the database and make sure the ``memos`` collection exists."""
    db_path = get_database_path(database_url)
    database = Database(db_path)
    database.get_collection("memos")
    database.save_database()
    logger.info("Database initialised at %s", db_path)
    return database
