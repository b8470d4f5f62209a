"""
Pre‑flight validation for memo requests.

The checks mirror the rules enforced by ``Memo.create`` so that the
API layer can reject bad input with a list of messages before any
repository call is made.  None of the methods raise; each returns a
result object describing what went wrong.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional

from memo_api.app.core.exceptions import ValidationError
from memo_api.app.domain.memo import CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH, Memo

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass
class PaginationResult(ValidationResult):
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE


def parse_int(value: Any) -> Optional[int]:
    """Parse the leading integer of ``value``.

    ``"12abc"`` gives ``12``; ``"abc"``, ``None`` and empty strings
    give ``None``.  Floats are truncated toward zero.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def _check_update_field(value: Any, label: str, max_length: int) -> List[str]:
    if not isinstance(value, str) or not value.strip():
        return [f"{label} must not be empty when provided."]
    if len(value.strip()) > max_length:
        return [f"{label} cannot exceed {max_length} characters."]
    return []


class MemoValidationService:
    """Stateless validator for memo input."""

    def validate_create_memo(self, title: Any, content: Any) -> ValidationResult:
        try:
            memo = Memo.create(title, content)
        except ValidationError as exc:
            return ValidationResult(is_valid=False, errors=list(exc.errors))

        errors: List[str] = []
        if not memo.is_title_valid():
            errors.append("Title is not valid.")
        if not memo.is_content_valid():
            errors.append("Content is not valid.")
        return ValidationResult(is_valid=not errors, errors=errors)

    def validate_update_memo(self, title: Any = None, content: Any = None) -> ValidationResult:
        """Validate a partial update; ``None`` means the field is absent."""
        errors: List[str] = []
        if title is None and content is None:
            errors.append("At least one of title or content must be provided.")
        if title is not None:
            errors += _check_update_field(title, "Title", TITLE_MAX_LENGTH)
        if content is not None:
            errors += _check_update_field(content, "Content", CONTENT_MAX_LENGTH)
        return ValidationResult(is_valid=not errors, errors=errors)

    def validate_pagination(self, page: Any = None, page_size: Any = None) -> PaginationResult:
        # A parsed 0 counts as absent and falls back to the default.
        parsed_page = parse_int(page) or DEFAULT_PAGE
        parsed_page_size = parse_int(page_size) or DEFAULT_PAGE_SIZE

        errors: List[str] = []
        if parsed_page < 1:
            errors.append("Page must be 1 or greater.")
        if parsed_page_size < 1 or parsed_page_size > MAX_PAGE_SIZE:
            errors.append(f"Page size must be between 1 and {MAX_PAGE_SIZE}.")
        return PaginationResult(
            is_valid=not errors,
            errors=errors,
            page=parsed_page,
            page_size=parsed_page_size,
        )

    def validate_memo_id(self, memo_id: Any) -> ValidationResult:
        errors: List[str] = []
        if memo_id is None or memo_id == "":
            errors.append("Memo ID is required.")
        elif not isinstance(memo_id, str):
            errors.append("Memo ID must be a string.")
        elif not memo_id.strip():
            errors.append("Memo ID must not be blank.")
        return ValidationResult(is_valid=not errors, errors=errors)
