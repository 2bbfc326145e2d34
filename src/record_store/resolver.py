"""Map record keys to JSON files under a root directory."""
from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any
from urllib.parse import quote, unquote

import structlog

from .errors import InvalidArgument, InvalidKey, MissingKey

RECORD_SUFFIX = ".json"

# Same unreserved set as JavaScript's encodeURIComponent.
_SAFE_CHARS = "!~*'()"
_SEPARATOR_CHARS = "".join(sep for sep in (os.sep, os.altsep) if sep)
_SEPARATORS = re.compile(f"[{re.escape(_SEPARATOR_CHARS)}]")

logger = structlog.get_logger(__name__)


def _as_directory(directory: Any) -> str:
    if isinstance(directory, os.PathLike):
        directory = os.fspath(directory)
    if not isinstance(directory, str):
        raise InvalidArgument(f"Directory must be a string or path, got {type(directory).__name__}")
    return directory


def validate_key(key: Any) -> str:
    """Return ``key`` if it is usable, raising before any filesystem access."""
    if not key:
        raise MissingKey("Missing key")
    if not isinstance(key, str) or not key.strip():
        raise InvalidKey(f"Invalid key: {key!r}")
    return key


def record_file_name(key: str) -> str:
    """Return the encoded file name for ``key``.

    Only the final path segment of the key is used, split on this platform's
    separators, so a backslash is an ordinary character on POSIX. A trailing
    ``.json`` is dropped before the suffix is appended so ``foo`` and
    ``foo.json`` share a file, while ``foo.data`` becomes ``foo.data.json``.
    """

    name = _SEPARATORS.split(validate_key(key).rstrip(_SEPARATOR_CHARS))[-1]
    # ".json" itself strips to an empty stem and maps to ".json"
    if name.endswith(RECORD_SUFFIX):
        name = name[: -len(RECORD_SUFFIX)]
    try:
        return quote(name + RECORD_SUFFIX, safe=_SAFE_CHARS)
    except UnicodeEncodeError as exc:
        raise InvalidKey(f"Invalid key: {key!r}") from exc


def key_for_file_name(name: str) -> str | None:
    if not name.endswith(RECORD_SUFFIX):
        return None
    return unquote(name[: -len(RECORD_SUFFIX)])


class PathResolver:
    """Own a root directory and compute record file paths beneath it."""

    def __init__(self, root: Path | str) -> None:
        self._root = Path(os.path.normpath(_as_directory(root))).absolute()

    def __repr__(self) -> str:
        return f"PathResolver(root={str(self._root)!r})"

    def get_root_directory(self) -> Path:
        return self._root

    def set_root_directory(self, directory: Path | str, replace: bool = False) -> None:
        """Point the resolver at a new root.

        With ``replace`` the root becomes ``directory``; otherwise ``directory``
        is appended to the current root. No I/O happens here.
        """

        self._root = self._derive_root(directory, replace)
        logger.debug("store.root.changed", root=self._root, replace=replace)

    def with_root_directory(self, directory: Path | str, replace: bool = False) -> "PathResolver":
        return PathResolver(self._derive_root(directory, replace))

    def resolve_record_path(self, key: str) -> Path:
        return self._root / record_file_name(key)

    def _derive_root(self, directory: Path | str, replace: bool) -> Path:
        value = _as_directory(directory)
        if replace:
            return Path(os.path.normpath(value)).absolute()
        # joined as a sub-path even when ``directory`` is absolute
        return Path(os.path.normpath(os.path.join(self._root, value.lstrip(_SEPARATOR_CHARS))))


__all__ = [
    "PathResolver",
    "RECORD_SUFFIX",
    "key_for_file_name",
    "record_file_name",
    "validate_key",
]
