from __future__ import annotations

import os
from pathlib import Path
from typing import List

import pytest

from record_store.filesystem import BaseFileSystem
from record_store.store import RecordStore


class ExplodingFileSystem(BaseFileSystem):
    """Fails the test if the store reaches the filesystem."""

    async def read_text(self, path: Path) -> str:
        raise AssertionError(f"unexpected read of {path}")

    async def write_bytes(self, path: Path, data: bytes) -> None:
        raise AssertionError(f"unexpected write of {path}")

    async def stat(self, path: Path) -> os.stat_result:
        raise AssertionError(f"unexpected stat of {path}")

    async def listdir(self, directory: Path) -> List[str]:
        raise AssertionError(f"unexpected listing of {directory}")

    async def remove_tree(self, path: Path) -> None:
        raise AssertionError(f"unexpected removal of {path}")


@pytest.fixture(autouse=True)
def _isolated_root(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RECORD_STORE_ROOT", raising=False)


@pytest.fixture
def store(tmp_path: Path) -> RecordStore:
    return RecordStore(tmp_path / "records")


@pytest.fixture
def exploding_store(tmp_path: Path) -> RecordStore:
    return RecordStore(tmp_path, filesystem=ExplodingFileSystem())
