"""Asynchronous filesystem primitives used by the record store."""
from __future__ import annotations

import asyncio
import contextlib
import fnmatch
import os
import shutil
import stat
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

import aiofiles
import aiofiles.os


class BaseFileSystem(ABC):
    """Operations the store needs from a filesystem.

    Implementations raise plain ``OSError`` subclasses; ``FileNotFoundError``
    is the not-found signal the store relies on.
    """

    @abstractmethod
    async def read_text(self, path: Path) -> str:  # pragma: no cover - interface
        ...

    @abstractmethod
    async def write_bytes(self, path: Path, data: bytes) -> None:  # pragma: no cover - interface
        ...

    @abstractmethod
    async def stat(self, path: Path) -> os.stat_result:  # pragma: no cover - interface
        ...

    @abstractmethod
    async def listdir(self, directory: Path) -> List[str]:  # pragma: no cover - interface
        ...

    @abstractmethod
    async def remove_tree(self, path: Path) -> None:  # pragma: no cover - interface
        ...

    async def remove_matching(self, directory: Path, pattern: str) -> List[str]:
        """Recursively delete entries of ``directory`` whose names match ``pattern``.

        A missing directory matches nothing. Returns the removed names.
        """

        try:
            names = await self.listdir(directory)
        except FileNotFoundError:
            return []
        matched = [name for name in names if fnmatch.fnmatchcase(name, pattern)]
        await asyncio.gather(*(self.remove_tree(directory / name) for name in matched))
        return matched


class LocalFileSystem(BaseFileSystem):
    """Local disk access through aiofiles and worker threads."""

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    async def read_text(self, path: Path) -> str:
        async with aiofiles.open(path, "r", encoding=self.encoding) as handle:
            return await handle.read()

    async def write_bytes(self, path: Path, data: bytes) -> None:
        """Replace ``path`` with ``data``; a failed write leaves the old file intact."""
        await aiofiles.os.makedirs(path.parent, exist_ok=True)
        staging = path.with_name(f".{uuid.uuid4().hex}.tmp")
        try:
            async with aiofiles.open(staging, "wb") as handle:
                await handle.write(data)
            await aiofiles.os.replace(staging, path)
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                await aiofiles.os.remove(staging)
            raise

    async def stat(self, path: Path) -> os.stat_result:
        return await aiofiles.os.stat(path)

    async def listdir(self, directory: Path) -> List[str]:
        return await aiofiles.os.listdir(directory)

    async def remove_tree(self, path: Path) -> None:
        """Delete ``path`` and anything below it; a missing path is ignored."""
        try:
            info = await aiofiles.os.stat(path, follow_symlinks=False)
        except FileNotFoundError:
            return
        try:
            if stat.S_ISDIR(info.st_mode):
                await asyncio.to_thread(shutil.rmtree, path)
            else:
                await aiofiles.os.remove(path)
        except FileNotFoundError:
            pass


__all__ = ["BaseFileSystem", "LocalFileSystem"]
