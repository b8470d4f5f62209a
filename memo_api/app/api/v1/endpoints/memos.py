"""
Memo endpoints for API v1.

CRUD routes over the memo resource.  Input is checked with
``MemoValidationService`` first so that clients receive every
problem at once; lifecycle rules (24 hour modify window, 30 day
expiry) are enforced by the write service.  Error responses are
rendered by the exception handlers registered in ``main``.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from memo_api.app.api.deps import get_read_service, get_validation_service, get_write_service
from memo_api.app.core.exceptions import ValidationError
from memo_api.app.schemas.memo import (
    ErrorResponse,
    MemoCreate,
    MemoDeleteResponse,
    MemoRead,
    MemoRecord,
    MemoResponse,
    MemoUpdate,
)
from memo_api.app.services.read_service import MemoReadService
from memo_api.app.services.validation_service import MemoValidationService
from memo_api.app.services.write_service import MemoWriteService

# Total number of stored memos, sent alongside every list page.
TOTAL_COUNT_HEADER = "X-Total-Count"

router = APIRouter(
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    }
)


def _require_valid_id(validator: MemoValidationService, memo_id: str) -> None:
    result = validator.validate_memo_id(memo_id)
    if not result.is_valid:
        raise ValidationError("Invalid memo ID.", errors=result.errors)


@router.get("", response_model=List[MemoRead])
async def list_memos(
    response: Response,
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    page_size: Optional[str] = Query(None, alias="pageSize", description="Memos per page (1-100)"),
    validator: MemoValidationService = Depends(get_validation_service),
    read_service: MemoReadService = Depends(get_read_service),
) -> List[dict]:
    """Return a page of memos, newest first.

    Each memo carries its word count and whether it can still be
    modified or has expired.  The total number of memos is returned
    in the ``X-Total-Count`` header.
    """
    pagination = validator.validate_pagination(page, page_size)
    if not pagination.is_valid:
        raise ValidationError("Invalid pagination parameters.", errors=pagination.errors)
    memos = await read_service.get_all_memos(pagination.page, pagination.page_size)
    response.headers[TOTAL_COUNT_HEADER] = str(await read_service.count_memos())
    return memos


@router.post("", response_model=MemoResponse[MemoRecord], status_code=status.HTTP_201_CREATED)
async def create_memo(
    memo_in: MemoCreate,
    validator: MemoValidationService = Depends(get_validation_service),
    write_service: MemoWriteService = Depends(get_write_service),
) -> MemoResponse[MemoRecord]:
    validation = validator.validate_create_memo(memo_in.title, memo_in.content)
    if not validation.is_valid:
        raise ValidationError("Invalid memo input.", errors=validation.errors)
    memo = await write_service.create_memo(memo_in.title, memo_in.content)
    return MemoResponse[MemoRecord](message="Memo created.", item=MemoRecord(**memo))


@router.get(
    "/{memo_id}",
    response_model=MemoRead,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_memo(
    memo_id: str,
    validator: MemoValidationService = Depends(get_validation_service),
    read_service: MemoReadService = Depends(get_read_service),
) -> dict:
    _require_valid_id(validator, memo_id)
    memo = await read_service.get_memo_by_id(memo_id)
    if memo is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Memo not found.")
    return memo


@router.put(
    "/{memo_id}",
    response_model=MemoResponse[MemoRecord],
    responses={
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)
async def update_memo(
    memo_id: str,
    memo_in: MemoUpdate,
    validator: MemoValidationService = Depends(get_validation_service),
    write_service: MemoWriteService = Depends(get_write_service),
) -> MemoResponse[MemoRecord]:
    """Update title and/or content (first 24 hours only)."""
    _require_valid_id(validator, memo_id)
    validation = validator.validate_update_memo(memo_in.title, memo_in.content)
    if not validation.is_valid:
        raise ValidationError("Invalid memo input.", errors=validation.errors)
    memo = await write_service.update_memo(memo_id, memo_in.title, memo_in.content)
    if memo is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Memo not found.")
    return MemoResponse[MemoRecord](message="Memo updated.", item=MemoRecord(**memo))


@router.delete(
    "/{memo_id}",
    response_model=MemoDeleteResponse,
    responses={
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)
async def delete_memo(
    memo_id: str,
    validator: MemoValidationService = Depends(get_validation_service),
    write_service: MemoWriteService = Depends(get_write_service),
) -> MemoDeleteResponse:
    """Delete a memo.

    Allowed during the first 24 hours and once the memo has expired;
    refused with 409 in between.
    """
    _require_valid_id(validator, memo_id)
    deleted = await write_service.delete_memo(memo_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Memo not found.")
    return MemoDeleteResponse(message="Memo deleted.")
