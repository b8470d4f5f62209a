"""
Write side of the memo service.

Every mutation rebuilds the stored memo into a ``Memo`` value and
lets the entity decide whether the operation is allowed before the
repository is touched:

* updates are accepted during the first 24 hours only;
* deletions are accepted during the first 24 hours and again once
  the memo has expired (after 30 days), but not in between.

Failures of any kind are re‑raised with an operation prefix such as
``"memo creation failed: ..."``.  A missing memo is not a failure:
``update_memo`` returns ``None`` and ``delete_memo`` returns
``False``.
"""

import logging
from typing import Any, Dict, Optional

from memo_api.app.core.exceptions import LifecycleError, ValidationError, wrap_error
from memo_api.app.domain.memo import Memo
from memo_api.app.repositories.memo_repository import MemoRepository
from memo_api.app.services.read_service import memo_from_storage

logger = logging.getLogger(__name__)


class MemoWriteService:
    """Create, update and delete memos under the lifecycle rules."""

    def __init__(self, repository: MemoRepository) -> None:
        self._repository = repository

    async def create_memo(self, title: Any, content: Any) -> Dict[str, Any]:
        try:
            memo = Memo.new(title, content)
            return await self._repository.create(memo.to_record())
        except Exception as exc:
            raise wrap_error("memo creation failed", exc) from exc

    async def update_memo(
        self,
        memo_id: Optional[str],
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        try:
            if not memo_id:
                raise ValidationError("Memo ID is required.")

            record = await self._repository.find_by_id(memo_id)
            if record is None:
                return None

            memo = memo_from_storage(record)
            try:
                updated = memo.update_content(title, content)
            except LifecycleError:
                logger.warning("Rejected update of memo %s outside the modify window", memo_id)
                raise

            # Only the fields the caller supplied are written back.
            fields: Dict[str, Any] = {}
            if title is not None:
                fields["title"] = updated.title
            if content is not None:
                fields["content"] = updated.content
            return await self._repository.update(memo_id, fields)
        except Exception as exc:
            raise wrap_error("memo update failed", exc) from exc

    async def delete_memo(self, memo_id: Optional[str]) -> bool:
        try:
            if not memo_id:
                raise ValidationError("Memo ID is required.")

            record = await self._repository.find_by_id(memo_id)
            if record is None:
                return False

            memo = memo_from_storage(record)
            # TODO: confirm with product whether the 24h-30d gray zone
            # should really block deletion.
            if not memo.can_be_deleted():
                logger.warning("Rejected deletion of memo %s between modify window and expiry", memo_id)
                raise LifecycleError(
                    "Memos older than 24 hours cannot be deleted until they expire after 30 days."
                )
            return await self._repository.delete(memo_id)
        except Exception as exc:
            raise wrap_error("memo deletion failed", exc) from exc
