"""
Repository for memo records.

The repository is the only component that talks to the document
store.  It receives the collection and its database explicitly, so
there is no module level handle to the active store.  Every record
it returns is stripped of the store's bookkeeping keys before it
reaches the service layer.

Listing is a full scan followed by an in‑memory sort on ``regdate``
(newest first) and a slice for the requested page; the data set is
expected to stay small.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from memo_api.app.core.db import INTERNAL_FIELDS, Collection, Database

logger = logging.getLogger(__name__)


def strip_internal_fields(record: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Return a copy of ``record`` without storage bookkeeping keys."""
    if record is None:
        return None
    return {k: v for k, v in record.items() if k not in INTERNAL_FIELDS}


class MemoRepository:
    """Memo persistence over a keyed document collection."""

    def __init__(self, collection: Collection, database: Database) -> None:
        self._collection = collection
        self._database = database

    async def find_all(self, page: int = 1, page_size: int = 10) -> List[Dict[str, Any]]:
        """Return one page of memos ordered by ``regdate`` descending."""
        records = self._collection.find()
        records.sort(key=lambda record: record["regdate"], reverse=True)
        start = (page - 1) * page_size
        paged = records[start:start + page_size]
        logger.debug("Listed %d of %d memos (page=%s, page_size=%s)", len(paged), len(records), page, page_size)
        return [strip_internal_fields(record) for record in paged]

    async def find_by_id(self, memo_id: str) -> Optional[Dict[str, Any]]:
        return strip_internal_fields(self._collection.find_one(memo_id))

    async def create(self, record: Dict[str, Any]) -> Dict[str, Any]:
        inserted = self._collection.insert(record)
        self._database.save_database()
        logger.info("Created memo %s", record.get("id"))
        return strip_internal_fields(inserted)

    async def update(self, memo_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Merge ``fields`` into the stored memo.

        Keys whose value is ``None`` are ignored and keep the stored
        value.  Returns ``None`` if the memo does not exist.
        """
        record = self._collection.find_one(memo_id)
        if record is None:
            return None
        for key, value in fields.items():
            if value is not None:
                record[key] = value
        self._collection.update(record)
        self._database.save_database()
        logger.info("Updated memo %s", memo_id)
        return strip_internal_fields(record)

    async def delete(self, memo_id: str) -> bool:
        record = self._collection.find_one(memo_id)
        if record is None:
            return False
        self._collection.remove(record)
        self._database.save_database()
        logger.info("Deleted memo %s", memo_id)
        return True

    async def count(self) -> int:
        return self._collection.count()
