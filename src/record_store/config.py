"""Configuration loading utilities for the record store."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .paths import LOCATIONS, default_root_directory, user_config_dir

ROOT_ENV = "RECORD_STORE_ROOT"


class StorageConfig(BaseModel):
    root: Optional[Path] = Field(default=None, description="Directory holding the record files")
    location: str = Field(default="user", description="Default root when unset: user|install")
    subdirectory: Optional[str] = Field(default=None, description="Appended to the root directory")
    indent: Optional[int] = Field(default=None, ge=0, le=16, description="JSON indentation")
    ensure_ascii: bool = Field(default=False)

    def normalized_location(self) -> str:
        return self.location.lower()

    @field_validator("location")
    @classmethod
    def _validate_location(cls, value: str) -> str:
        if value.lower() not in LOCATIONS:
            raise ValueError(f"location must be one of {', '.join(LOCATIONS)}")
        return value

    def resolved_root(self) -> Path:
        override = os.getenv(ROOT_ENV)
        if override:
            root = Path(override).expanduser()
        elif self.root is not None:
            root = self.root.expanduser()
        else:
            root = default_root_directory(self.normalized_location())
        if self.subdirectory:
            root = root / self.subdirectory
        return root.absolute()


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Logging verbosity level")

    def normalized_level(self) -> str:
        return self.level.upper()


class AppConfig(BaseModel):
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


DEFAULT_CONFIG = AppConfig()


def config_search_paths(explicit: Optional[Path] = None) -> Iterable[Path]:
    if explicit:
        yield explicit
    yield Path.cwd() / ".record_store" / "config.yaml"
    yield user_config_dir() / "config.yaml"


def load_config(path: Optional[Path] = None) -> AppConfig:
    for candidate in config_search_paths(path):
        if candidate.is_file():
            with candidate.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
            try:
                return AppConfig.model_validate(data)
            except ValidationError as exc:
                raise ValueError(f"Invalid configuration in {candidate}: {exc}") from exc
    return DEFAULT_CONFIG.model_copy(deep=True)


def dump_default_config(target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(DEFAULT_CONFIG.model_dump(mode="json"), handle, sort_keys=False)


__all__ = [
    "AppConfig",
    "DEFAULT_CONFIG",
    "LoggingConfig",
    "ROOT_ENV",
    "StorageConfig",
    "config_search_paths",
    "dump_default_config",
    "load_config",
]
