"""Tests for MemoReadService."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import hours_ago, make_record
from memo_api.app.core.exceptions import StorageError, ValidationError
from memo_api.app.repositories.memo_repository import MemoRepository
from memo_api.app.services.read_service import MemoReadService


def failing_repository() -> MagicMock:
    repo = MagicMock(spec=MemoRepository)
    repo.find_all = AsyncMock(side_effect=RuntimeError("disk unavailable"))
    repo.find_by_id = AsyncMock(side_effect=RuntimeError("disk unavailable"))
    repo.count = AsyncMock(side_effect=RuntimeError("disk unavailable"))
    return repo


class TestGetAllMemos:
    @pytest.mark.asyncio
    async def test_decorates_records(self, repository: MemoRepository, read_service: MemoReadService):
        await repository.create(make_record("fresh", hours_ago(1), content="two words"))
        await repository.create(make_record("old", hours_ago(24 * 31)))
        memos = await read_service.get_all_memos()
        assert [m["id"] for m in memos] == ["fresh", "old"]
        fresh, old = memos
        assert fresh["word_count"] == 2
        assert fresh["can_be_modified"] is True
        assert fresh["is_expired"] is False
        assert old["can_be_modified"] is False
        assert old["is_expired"] is True

    @pytest.mark.asyncio
    async def test_passes_pagination(self, repository: MemoRepository, read_service: MemoReadService):
        for i in range(7):
            await repository.create(make_record(f"m{i}", hours_ago(i)))
        memos = await read_service.get_all_memos(page=2, page_size=3)
        assert [m["id"] for m in memos] == ["m3", "m4", "m5"]

    @pytest.mark.asyncio
    async def test_wraps_failures(self):
        service = MemoReadService(failing_repository())
        with pytest.raises(StorageError, match="memo list retrieval failed: disk unavailable"):
            await service.get_all_memos()

    @pytest.mark.asyncio
    async def test_invalid_stored_record_is_storage_error(
        self, repository: MemoRepository, read_service: MemoReadService
    ):
        await repository.create(make_record("bad", hours_ago(1), title="x" * 250))
        with pytest.raises(StorageError, match="memo list retrieval failed: stored memo bad is invalid"):
            await read_service.get_all_memos()


class TestGetMemoById:
    @pytest.mark.asyncio
    async def test_found(self, repository: MemoRepository, read_service: MemoReadService):
        await repository.create(make_record("a", hours_ago(2), title="Hello"))
        memo = await read_service.get_memo_by_id("a")
        assert memo["title"] == "Hello"
        assert memo["can_be_modified"] is True
        assert "_seq" not in memo

    @pytest.mark.asyncio
    async def test_missing(self, read_service: MemoReadService):
        assert await read_service.get_memo_by_id("nope") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("memo_id", [None, ""])
    async def test_requires_id(self, read_service: MemoReadService, memo_id):
        with pytest.raises(ValidationError, match="memo lookup failed: Memo ID is required"):
            await read_service.get_memo_by_id(memo_id)

    @pytest.mark.asyncio
    async def test_wraps_failures(self):
        service = MemoReadService(failing_repository())
        with pytest.raises(StorageError, match="memo lookup failed"):
            await service.get_memo_by_id("a")


class TestGetMemoExists:
    @pytest.mark.asyncio
    async def test_true_when_present(self, repository: MemoRepository, read_service: MemoReadService):
        await repository.create(make_record("a", hours_ago(1)))
        assert await read_service.get_memo_exists("a") is True

    @pytest.mark.asyncio
    async def test_false_when_missing(self, read_service: MemoReadService):
        assert await read_service.get_memo_exists("nope") is False

    @pytest.mark.asyncio
    async def test_never_raises(self):
        service = MemoReadService(failing_repository())
        assert await service.get_memo_exists("a") is False
        assert await service.get_memo_exists(None) is False


class TestGetExpiredMemos:
    @pytest.mark.asyncio
    async def test_only_expired(self, repository: MemoRepository, read_service: MemoReadService):
        await repository.create(make_record("fresh", hours_ago(1)))
        await repository.create(make_record("gray", hours_ago(24 * 10)))
        await repository.create(make_record("old", hours_ago(24 * 40)))
        expired = await read_service.get_expired_memos()
        assert [m["id"] for m in expired] == ["old"]
        assert set(expired[0]) == {"id", "title", "content", "regdate"}

    @pytest.mark.asyncio
    async def test_wraps_failures(self):
        service = MemoReadService(failing_repository())
        with pytest.raises(StorageError, match="expired memo retrieval failed"):
            await service.get_expired_memos()


class TestCountMemos:
    @pytest.mark.asyncio
    async def test_count(self, repository: MemoRepository, read_service: MemoReadService):
        await repository.create(make_record("a", hours_ago(1)))
        assert await read_service.count_memos() == 1
