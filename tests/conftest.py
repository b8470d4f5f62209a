"""Shared fixtures: a fresh SQLite store per test and the services on top."""

from __future__ import annotations

from pathlib import Path

import pytest

from memo_api.app.core.db import Collection, Database
from memo_api.app.domain.memo import HOUR_MS, current_millis
from memo_api.app.repositories.memo_repository import MemoRepository
from memo_api.app.services.read_service import MemoReadService
from memo_api.app.services.validation_service import MemoValidationService
from memo_api.app.services.write_service import MemoWriteService


def make_record(memo_id: str, regdate: int, title: str = "Title", content: str = "Some content") -> dict:
    return {"id": memo_id, "title": title, "content": content, "regdate": regdate}


def hours_ago(hours: float) -> int:
    return current_millis() - int(hours * HOUR_MS)


@pytest.fixture
def database(tmp_path: Path):
    db = Database(str(tmp_path / "memos.db"))
    yield db
    db.close()


@pytest.fixture
def collection(database: Database) -> Collection:
    return database.get_collection("memos")


@pytest.fixture
def repository(collection: Collection, database: Database) -> MemoRepository:
    return MemoRepository(collection, database)


@pytest.fixture
def read_service(repository: MemoRepository) -> MemoReadService:
    return MemoReadService(repository)


@pytest.fixture
def write_service(repository: MemoRepository) -> MemoWriteService:
    return MemoWriteService(repository)


@pytest.fixture
def validator() -> MemoValidationService:
    return MemoValidationService()
