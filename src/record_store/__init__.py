"""Per-key JSON file storage with an asyncio API."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .config import DEFAULT_CONFIG, AppConfig, load_config
from .errors import (
    CorruptRecord,
    InvalidArgument,
    InvalidKey,
    MissingKey,
    RecordStoreError,
    SerializationError,
    StoreIOError,
)
from .logging import configure_logging
from .resolver import PathResolver
from .store import RecordStore
from .version import __version__

_DEFAULT_STORE: Optional[RecordStore] = None


def open_store(config_path: Optional[Path] = None) -> RecordStore:
    """Load configuration, set up logging and return a ready store."""
    config: AppConfig = load_config(config_path)
    configure_logging(config.logging.normalized_level())
    return RecordStore.from_config(config)


def default_store() -> RecordStore:
    """Return the shared store used by the module-level helpers."""
    global _DEFAULT_STORE
    if _DEFAULT_STORE is None:
        _DEFAULT_STORE = RecordStore.from_config(DEFAULT_CONFIG)
    return _DEFAULT_STORE


def get_root_directory() -> Path:
    return default_store().get_root_directory()


def set_root_directory(directory: Path | str, replace: bool = False) -> None:
    default_store().set_root_directory(directory, replace)


async def get(key: str) -> Any:
    return await default_store().get(key)


async def set(key: str, value: Any) -> None:
    await default_store().set(key, value)


async def has(key: str) -> bool:
    return await default_store().has(key)


async def remove(key: str) -> None:
    await default_store().remove(key)


async def clear() -> None:
    await default_store().clear()


async def keys() -> List[str]:
    return await default_store().keys()


async def get_many(keys: Iterable[str], *, return_exceptions: bool = False) -> Dict[str, Any]:
    return await default_store().get_many(keys, return_exceptions=return_exceptions)


__all__ = [
    "AppConfig",
    "CorruptRecord",
    "InvalidArgument",
    "InvalidKey",
    "MissingKey",
    "PathResolver",
    "RecordStore",
    "RecordStoreError",
    "SerializationError",
    "StoreIOError",
    "__version__",
    "clear",
    "configure_logging",
    "default_store",
    "get",
    "get_many",
    "get_root_directory",
    "has",
    "keys",
    "open_store",
    "remove",
    "set",
    "set_root_directory",
]
