"""Shared pytest fixtures for the spouse showcase tests."""

import io
from pathlib import Path
from typing import Generator, List

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from main import create_app
from models.spouse_record import SpouseRecord
from utils.errors import StorageError
from utils.settings import AppSettings


class InMemorySpouseStore:
    """Substitute store that keeps records in a list and numbers them from 1."""

    def __init__(self) -> None:
        self.records: List[SpouseRecord] = []

    async def list_spouses(self) -> List[SpouseRecord]:
        return list(self.records)

    async def create_spouse(self, record: SpouseRecord) -> SpouseRecord:
        stored = SpouseRecord(
            id=len(self.records) + 1,
            user_name=record.user_name,
            spouse_name=record.spouse_name,
            image_data=record.image_data,
        )
        self.records.append(stored)
        return stored


class FailingSpouseStore:
    """Store that behaves like an unreachable database."""

    async def list_spouses(self) -> List[SpouseRecord]:
        raise StorageError("Failed to fetch spouses from database")

    async def create_spouse(self, record: SpouseRecord) -> SpouseRecord:
        raise StorageError("Failed to create spouse in database")


@pytest.fixture
def dev_settings(tmp_path: Path) -> AppSettings:
    """Development settings backed by a temporary SQLite file."""
    return AppSettings(database_url=f"sqlite:///{tmp_path / 'spouses.db'}", public_dir=tmp_path / "public")


@pytest.fixture
def prod_settings(dev_settings: AppSettings) -> AppSettings:
    return AppSettings(
        database_url=dev_settings.database_url,
        mode="production",
        public_dir=dev_settings.public_dir,
    )


@pytest.fixture
def memory_store() -> InMemorySpouseStore:
    return InMemorySpouseStore()


@pytest.fixture
def failing_store() -> FailingSpouseStore:
    return FailingSpouseStore()


@pytest.fixture
def test_client(dev_settings: AppSettings, memory_store: InMemorySpouseStore) -> Generator[TestClient, None, None]:
    """TestClient wired to the in-memory store."""
    with TestClient(create_app(dev_settings, store=memory_store)) as client:
        yield client


@pytest.fixture
def sqlite_client(dev_settings: AppSettings) -> Generator[TestClient, None, None]:
    """TestClient wired to the real SQLite-backed data access layer."""
    with TestClient(create_app(dev_settings)) as client:
        yield client


@pytest.fixture
def png_bytes() -> bytes:
    """A tiny valid PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), (200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()
