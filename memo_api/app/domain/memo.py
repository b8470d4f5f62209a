"""
Memo entity and its business rules.

A ``Memo`` is an immutable value.  It is rebuilt from the stored
record on every read or mutation, so the checks performed by
``Memo.create`` apply both to new input and to data coming back from
storage.

Time based rules:

* a memo can be modified while it is younger than 24 hours;
* a memo is expired once it is older than 30 days.

Both windows are exclusive on the "still valid" side: a memo exactly
24 hours old can no longer be modified and a memo exactly 30 days
old is not yet expired.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from memo_api.app.core.exceptions import LifecycleError, ValidationError

TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 5000

HOUR_MS = 60 * 60 * 1000
DAY_MS = 24 * HOUR_MS
MODIFY_WINDOW_MS = 24 * HOUR_MS
EXPIRY_WINDOW_MS = 30 * DAY_MS


def current_millis() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def _field_errors(value: Any, label: str, max_length: int) -> List[str]:
    if value is None or value == "":
        return [f"{label} is required."]
    if not isinstance(value, str):
        return [f"{label} must be a string."]
    trimmed = value.strip()
    if not trimmed:
        return [f"{label} must not be blank."]
    if len(trimmed) > max_length:
        return [f"{label} cannot exceed {max_length} characters."]
    return []


@dataclass(frozen=True)
class Memo:
    id: str
    title: str
    content: str
    regdate: int

    @classmethod
    def create(
        cls,
        title: Any,
        content: Any,
        id: Optional[str] = None,
        regdate: Optional[int] = None,
        *,
        now: Optional[int] = None,
    ) -> "Memo":
        """Validate input and build a memo.

        ``id`` defaults to a fresh UUID4 and ``regdate`` to ``now``
        (the current time when not given).  Title and content are
        stored trimmed.  Every violated rule is reported in the
        raised ``ValidationError``.
        """
        errors = _field_errors(title, "Title", TITLE_MAX_LENGTH)
        errors += _field_errors(content, "Content", CONTENT_MAX_LENGTH)
        if errors:
            raise ValidationError(" ".join(errors), errors=errors)
        return cls(
            id=id or str(uuid.uuid4()),
            title=title.strip(),
            content=content.strip(),
            regdate=regdate if regdate is not None else (now if now is not None else current_millis()),
        )

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Memo":
        return cls.create(
            record.get("title"),
            record.get("content"),
            record.get("id"),
            record.get("regdate"),
        )

    @classmethod
    def new(cls, title: Any, content: Any) -> "Memo":
        return cls.create(title, content)

    @property
    def word_count(self) -> int:
        return len(self.content.split())

    def age(self, now: Optional[int] = None) -> int:
        """Milliseconds elapsed since ``regdate``."""
        return (now if now is not None else current_millis()) - self.regdate

    def can_be_modified(self, now: Optional[int] = None) -> bool:
        return self.age(now) < MODIFY_WINDOW_MS

    def is_expired(self, now: Optional[int] = None) -> bool:
        return self.age(now) > EXPIRY_WINDOW_MS

    def can_be_deleted(self, now: Optional[int] = None) -> bool:
        """Deletion is refused between the end of the modify window and expiry."""
        now = now if now is not None else current_millis()
        return self.is_expired(now) or self.can_be_modified(now)

    def is_title_valid(self) -> bool:
        return 0 < len(self.title) <= TITLE_MAX_LENGTH

    def is_content_valid(self) -> bool:
        return 0 < len(self.content) <= CONTENT_MAX_LENGTH

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "regdate": self.regdate,
        }

    def to_read_record(self, now: Optional[int] = None) -> Dict[str, Any]:
        """Plain record decorated with the derived fields."""
        now = now if now is not None else current_millis()
        record = self.to_record()
        record["word_count"] = self.word_count
        record["can_be_modified"] = self.can_be_modified(now)
        record["is_expired"] = self.is_expired(now)
        return record

    def update_content(
        self,
        new_title: Optional[str] = None,
        new_content: Optional[str] = None,
        *,
        now: Optional[int] = None,
    ) -> "Memo":
        """Return a copy with replaced title and/or content.

        ``None`` keeps the current value.  ``id`` and ``regdate`` are
        carried over unchanged.
        """
        if not self.can_be_modified(now):
            raise LifecycleError("Memos older than 24 hours cannot be modified.")
        return Memo.create(
            self.title if new_title is None else new_title,
            self.content if new_content is None else new_content,
            self.id,
            self.regdate,
        )
