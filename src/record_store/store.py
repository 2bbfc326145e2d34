"""Asynchronous JSON record store backed by one file per key."""
from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import structlog

from .config import AppConfig
from .errors import CorruptRecord, InvalidArgument, SerializationError, StoreIOError
from .filesystem import BaseFileSystem, LocalFileSystem
from .resolver import RECORD_SUFFIX, PathResolver, key_for_file_name, validate_key

logger = structlog.get_logger(__name__)


class RecordStore:
    """Get, set and enumerate JSON records stored as ``<root>/<key>.json``.

    Nothing is cached: every call goes to the filesystem, so the store always
    reflects what is on disk. Concurrent writers to the same key race and the
    last write wins.
    """

    def __init__(
        self,
        root: Path | str | PathResolver,
        *,
        filesystem: Optional[BaseFileSystem] = None,
        indent: Optional[int] = None,
        ensure_ascii: bool = False,
    ) -> None:
        self._resolver = root if isinstance(root, PathResolver) else PathResolver(root)
        self._fs = filesystem or LocalFileSystem()
        self._indent = indent
        self._ensure_ascii = ensure_ascii

    @classmethod
    def from_config(cls, config: AppConfig, filesystem: Optional[BaseFileSystem] = None) -> "RecordStore":
        storage = config.storage
        return cls(
            storage.resolved_root(),
            filesystem=filesystem,
            indent=storage.indent,
            ensure_ascii=storage.ensure_ascii,
        )

    def __repr__(self) -> str:
        return f"RecordStore(root={str(self.get_root_directory())!r})"

    @property
    def resolver(self) -> PathResolver:
        return self._resolver

    @property
    def filesystem(self) -> BaseFileSystem:
        return self._fs

    def get_root_directory(self) -> Path:
        return self._resolver.get_root_directory()

    def set_root_directory(self, directory: Path | str, replace: bool = False) -> None:
        self._resolver.set_root_directory(directory, replace)

    def with_root_directory(self, directory: Path | str, replace: bool = False) -> "RecordStore":
        """Return a store rooted elsewhere, leaving this one untouched."""
        return RecordStore(
            self._resolver.with_root_directory(directory, replace),
            filesystem=self._fs,
            indent=self._indent,
            ensure_ascii=self._ensure_ascii,
        )

    async def set(self, key: str, value: Any) -> None:
        path = self._resolver.resolve_record_path(key)
        try:
            text = json.dumps(value, allow_nan=False, indent=self._indent, ensure_ascii=self._ensure_ascii)
            data = text.encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"Cannot serialize value for key {key!r}: {exc}") from exc
        try:
            await self._fs.write_bytes(path, data)
        except OSError as exc:
            raise self._io_error(exc, path, "write") from exc
        logger.debug("store.set", path=path)

    async def get(self, key: str) -> Any:
        """Return the stored value, or an empty dict when the key has no file.

        Raises ``CorruptRecord`` if the file holds invalid JSON.
        """

        path = self._resolver.resolve_record_path(key)
        try:
            text = await self._fs.read_text(path)
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise self._io_error(exc, path, "read") from exc
        except UnicodeDecodeError as exc:
            raise self._corrupt(exc, path) from exc
        try:
            return json.loads(text)
        except ValueError as exc:
            raise self._corrupt(exc, path) from exc

    async def has(self, key: str) -> bool:
        path = self._resolver.resolve_record_path(key)
        try:
            await self._fs.stat(path)
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise self._io_error(exc, path, "stat") from exc
        return True

    async def remove(self, key: str) -> None:
        path = self._resolver.resolve_record_path(key)
        try:
            await self._fs.remove_tree(path)
        except OSError as exc:
            raise self._io_error(exc, path, "remove") from exc
        logger.debug("store.remove", path=path)

    async def clear(self) -> None:
        """Delete every ``*.json`` entry in the root; other files stay."""
        root = self.get_root_directory()
        try:
            removed = await self._fs.remove_matching(root, f"*{RECORD_SUFFIX}")
        except OSError as exc:
            raise self._io_error(exc, root, "clear") from exc
        logger.debug("store.clear", root=root, removed=len(removed))

    async def keys(self) -> List[str]:
        root = self.get_root_directory()
        try:
            names = await self._fs.listdir(root)
        except OSError as exc:
            raise self._io_error(exc, root, "list") from exc
        keys: List[str] = []
        for name in names:
            key = key_for_file_name(name)
            if key is not None:
                keys.append(key)
        return keys

    async def get_many(self, keys: Iterable[str], *, return_exceptions: bool = False) -> Dict[str, Any]:
        """Fetch several keys concurrently.

        Every key is validated before any read starts. By default the first
        failing read propagates; with ``return_exceptions`` each failing key
        maps to its exception instead.
        """

        if isinstance(keys, str):
            raise InvalidArgument("get_many expects an iterable of keys, not a single string")
        unique = list(dict.fromkeys(validate_key(key) for key in keys))
        results = await asyncio.gather(
            *(self.get(key) for key in unique),
            return_exceptions=return_exceptions,
        )
        return dict(zip(unique, results))

    def _io_error(self, exc: OSError, path: Path, operation: str) -> StoreIOError:
        logger.warning("store.io_error", path=path, operation=operation, error=str(exc))
        return StoreIOError.wrap(exc, path=path, operation=operation)

    def _corrupt(self, exc: ValueError, path: Path) -> CorruptRecord:
        logger.warning("store.corrupt_record", path=path, error=str(exc))
        return CorruptRecord(f"Record {path} does not contain valid JSON: {exc}", path=path, operation="read")


__all__ = ["RecordStore"]
