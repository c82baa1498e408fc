# tests/conftest.py
"""Shared fixtures. Environment is seeded before any app module reads settings."""

import os

os.environ.setdefault("APP_ENV", "prod")
os.environ.setdefault("ALLOWED_ORIGIN", "http://localhost:3000")
os.environ.setdefault("STORAGE_BACKEND", "memory")

import pytest

from repository.entry_repository import EntryRepository
from repository.memory_substrate import MemorySubstrate
from service.fs_service import FileSystemService


@pytest.fixture
def substrate() -> MemorySubstrate:
    return MemorySubstrate()


@pytest.fixture
def entries(substrate) -> EntryRepository:
    return EntryRepository(substrate)


@pytest.fixture
def service(entries) -> FileSystemService:
    return FileSystemService(entries, max_file_bytes=1024)
