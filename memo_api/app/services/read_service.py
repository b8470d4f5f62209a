"""
Read side of the memo service.

Records coming from the repository are rebuilt into ``Memo`` values
so that the derived fields (word count, modifiability, expiry) are
computed by the entity itself rather than stored.
"""

import logging
from typing import Any, Dict, List, Optional

from memo_api.app.core.exceptions import StorageError, ValidationError, wrap_error
from memo_api.app.domain.memo import Memo, current_millis
from memo_api.app.repositories.memo_repository import MemoRepository

logger = logging.getLogger(__name__)

# Upper bound for the scan behind ``get_expired_memos``.
EXPIRED_SCAN_LIMIT = 1000


def memo_from_storage(record: Dict[str, Any]) -> Memo:
    """Rebuild a stored record into a ``Memo``.

    A record that breaks the memo rules raises ``StorageError``.
    """
    try:
        return Memo.from_record(record)
    except ValidationError as exc:
        logger.error("Stored memo %s is invalid: %s", record.get("id"), exc)
        raise StorageError(f"stored memo {record.get('id')} is invalid: {exc}", errors=exc.errors) from exc


class MemoReadService:
    """Query operations returning decorated memo records."""

    def __init__(self, repository: MemoRepository) -> None:
        self._repository = repository

    async def get_all_memos(self, page: int = 1, page_size: int = 10) -> List[Dict[str, Any]]:
        try:
            records = await self._repository.find_all(page, page_size)
            now = current_millis()
            return [memo_from_storage(record).to_read_record(now) for record in records]
        except Exception as exc:
            raise wrap_error("memo list retrieval failed", exc) from exc

    async def get_memo_by_id(self, memo_id: Optional[str]) -> Optional[Dict[str, Any]]:
        """Return the decorated memo or ``None`` when it does not exist."""
        try:
            if not memo_id:
                raise ValidationError("Memo ID is required.")
            record = await self._repository.find_by_id(memo_id)
            if record is None:
                return None
            return memo_from_storage(record).to_read_record()
        except Exception as exc:
            raise wrap_error("memo lookup failed", exc) from exc

    async def get_memo_exists(self, memo_id: Optional[str]) -> bool:
        try:
            return await self.get_memo_by_id(memo_id) is not None
        except Exception as exc:
            logger.debug("Existence check for memo %r failed: %s", memo_id, exc)
            return False

    async def get_expired_memos(self) -> List[Dict[str, Any]]:
        """Plain records of every expired memo among the newest stored ones."""
        try:
            records = await self._repository.find_all(1, EXPIRED_SCAN_LIMIT)
            now = current_millis()
            memos = (memo_from_storage(record) for record in records)
            return [memo.to_record() for memo in memos if memo.is_expired(now)]
        except Exception as exc:
            raise wrap_error("expired memo retrieval failed", exc) from exc

    async def count_memos(self) -> int:
        try:
            return await self._repository.count()
        except Exception as exc:
            raise wrap_error("memo count failed", exc) from exc
