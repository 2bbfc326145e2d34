"""Default root directory providers for the record store."""
from __future__ import annotations

import sys
from pathlib import Path

from platformdirs import PlatformDirs

_APP_NAME = "Record Store"
_LINUX_APP_NAME = "record-store"

LOCATIONS = ("user", "install")


def _platform_dirs() -> PlatformDirs:
    if sys.platform == "win32":
        return PlatformDirs(appname=_APP_NAME, appauthor=None, roaming=True)
    if sys.platform == "darwin":
        return PlatformDirs(appname=_APP_NAME, appauthor=None, roaming=True)
    return PlatformDirs(appname=_LINUX_APP_NAME, appauthor=None, roaming=False)


def user_data_dir() -> Path:
    """Return the per-user application data directory."""
    return Path(_platform_dirs().user_data_path)


def user_config_dir() -> Path:
    """Return the per-user configuration directory."""
    return Path(_platform_dirs().user_config_path)


def install_data_dir() -> Path:
    """Return the ``data`` directory beside the installed project."""
    return Path(__file__).resolve().parents[2] / "data"


def default_root_directory(location: str = "user") -> Path:
    """Return the default record directory for ``location``.

    ``user`` selects the per-user data directory a desktop application would
    use, ``install`` a directory next to the installed code.
    """

    name = location.lower()
    if name == "user":
        return user_data_dir()
    if name == "install":
        return install_data_dir()
    raise ValueError(f"Unknown storage location '{location}', expected one of {', '.join(LOCATIONS)}")


__all__ = [
    "LOCATIONS",
    "default_root_directory",
    "install_data_dir",
    "user_config_dir",
    "user_data_dir",
]
