"""Tests for MemoRepository over the SQLite document store."""

from __future__ import annotations

import pytest

from conftest import make_record
from memo_api.app.core.db import INTERNAL_FIELDS, Collection, Database
from memo_api.app.repositories.memo_repository import MemoRepository, strip_internal_fields


def assert_stripped(record: dict) -> None:
    for key in INTERNAL_FIELDS:
        assert key not in record


class TestFindAll:
    @pytest.mark.asyncio
    async def test_sorted_by_regdate_descending(self, repository: MemoRepository):
        for memo_id, regdate in (("a", 1000), ("b", 3000), ("c", 2000)):
            await repository.create(make_record(memo_id, regdate))
        records = await repository.find_all()
        assert [r["regdate"] for r in records] == [3000, 2000, 1000]

    @pytest.mark.asyncio
    async def test_pagination(self, repository: MemoRepository):
        for i in range(1, 16):
            await repository.create(make_record(f"m{i}", 100_000 - i))
        records = await repository.find_all(page=2, page_size=5)
        assert [r["id"] for r in records] == ["m6", "m7", "m8", "m9", "m10"]

    @pytest.mark.asyncio
    async def test_default_page_size(self, repository: MemoRepository):
        for i in range(12):
            await repository.create(make_record(f"m{i}", i))
        assert len(await repository.find_all()) == 10

    @pytest.mark.asyncio
    async def test_page_past_end_is_empty(self, repository: MemoRepository):
        await repository.create(make_record("a", 1))
        assert await repository.find_all(page=3, page_size=10) == []

    @pytest.mark.asyncio
    async def test_records_are_stripped(self, repository: MemoRepository):
        await repository.create(make_record("a", 1))
        for record in await repository.find_all():
            assert_stripped(record)


class TestFindById:
    @pytest.mark.asyncio
    async def test_found(self, repository: MemoRepository):
        await repository.create(make_record("a", 1, title="Hello"))
        record = await repository.find_by_id("a")
        assert record == make_record("a", 1, title="Hello")
        assert_stripped(record)

    @pytest.mark.asyncio
    async def test_missing(self, repository: MemoRepository):
        assert await repository.find_by_id("nope") is None


class TestCreate:
    @pytest.mark.asyncio
    async def test_returns_stored_record(self, repository: MemoRepository):
        record = await repository.create(make_record("a", 1))
        assert record == make_record("a", 1)
        assert_stripped(record)

    @pytest.mark.asyncio
    async def test_is_flushed_to_disk(self, repository: MemoRepository, database: Database):
        await repository.create(make_record("a", 1))
        reopened = Database(database.path)
        try:
            assert reopened.get_collection("memos").find_one("a") is not None
        finally:
            reopened.close()


class TestUpdate:
    @pytest.mark.asyncio
    async def test_merges_fields(self, repository: MemoRepository):
        await repository.create(make_record("a", 1, title="Old", content="Body"))
        record = await repository.update("a", {"title": "X", "content": None})
        assert record["title"] == "X"
        assert record["content"] == "Body"
        assert_stripped(record)
        stored = await repository.find_by_id("a")
        assert stored["title"] == "X"
        assert stored["content"] == "Body"

    @pytest.mark.asyncio
    async def test_missing(self, repository: MemoRepository):
        assert await repository.update("nope", {"title": "X"}) is None

    @pytest.mark.asyncio
    async def test_bumps_revision(self, repository: MemoRepository, collection: Collection):
        await repository.create(make_record("a", 1))
        await repository.update("a", {"title": "X"})
        assert collection.find_one("a")["_meta"]["revision"] == 1


class TestDelete:
    @pytest.mark.asyncio
    async def test_existing(self, repository: MemoRepository):
        await repository.create(make_record("a", 1))
        assert await repository.delete("a") is True
        assert await repository.find_by_id("a") is None

    @pytest.mark.asyncio
    async def test_missing(self, repository: MemoRepository):
        assert await repository.delete("nope") is False


class TestCount:
    @pytest.mark.asyncio
    async def test_counts_records(self, repository: MemoRepository):
        assert await repository.count() == 0
        await repository.create(make_record("a", 1))
        await repository.create(make_record("b", 2))
        assert await repository.count() == 2


def test_strip_internal_fields():
    record = {"id": "a", "_seq": 3, "_meta": {"revision": 0}}
    assert strip_internal_fields(record) == {"id": "a"}
    assert strip_internal_fields(None) is None
