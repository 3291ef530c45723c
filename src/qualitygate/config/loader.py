# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Layered configuration loading (defaults, pyproject, TOML file, overrides)."""

from __future__ import annotations

import json
import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final, Protocol

from pydantic import ValidationError

from ..core.errors import ConfigError
from .models import FileTypeConfig, GateConfig

PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "qualitygate"
PROJECT_CONFIG_NAME: Final[str] = ".qualitygate.toml"


class ConfigSource(Protocol):
    """A named provider of raw configuration fragments."""

    name: str

    def load(self) -> Mapping[str, Any]: ...


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file {path}: {exc}") from exc


class TomlConfigSource:
    """Load configuration data from a standalone TOML document."""

    def __init__(self, path: Path, *, required: bool = False) -> None:
        self._path = path
        self._required = required
        self.name = str(path)

    def load(self) -> Mapping[str, Any]:
        if not self._path.exists():
            if self._required:
                raise ConfigError(f"Configuration file {self._path} does not exist")
            return {}
        return _read_toml(self._path)


class PyProjectConfigSource:
    """Read configuration from ``[tool.qualitygate]`` within ``pyproject.toml``."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self.name = f"{path} [tool.{PYPROJECT_SECTION_KEY}]"

    def load(self) -> Mapping[str, Any]:
        if not self._path.exists():
            return {}
        tool_section = _read_toml(self._path).get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, Mapping):
            return {}
        return dict(section)


class MappingConfigSource:
    """Wrap an in-memory mapping, typically CLI overrides."""

    def __init__(self, data: Mapping[str, Any], *, name: str = "overrides") -> None:
        self._data = data
        self.name = name

    def load(self) -> Mapping[str, Any]:
        return {key: value for key, value in self._data.items() if value is not None}


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` updated recursively with ``override``."""

    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """Apply layered configuration sources with predictable precedence."""

    def __init__(self, sources: Sequence[ConfigSource]) -> None:
        if not sources:
            raise ValueError("at least one configuration source is required")
        self._sources = list(sources)

    @classmethod
    def for_root(
        cls,
        project_root: Path,
        *,
        config_file: Path | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> ConfigLoader:
        """Build a loader that respects pyproject, project file and override sources.

        Args:
            project_root: Repository root used to discover configuration files.
            config_file: Explicit configuration file replacing ``.qualitygate.toml``.
            overrides: Highest precedence values, usually from CLI flags.

        Returns:
            ConfigLoader: Loader configured with default precedence ordering.
        """

        root = project_root.resolve()
        sources: list[ConfigSource] = [PyProjectConfigSource(root / "pyproject.toml")]
        if config_file is not None:
            sources.append(TomlConfigSource(config_file, required=True))
        else:
            sources.append(TomlConfigSource(root / PROJECT_CONFIG_NAME))
        if overrides:
            sources.append(MappingConfigSource(overrides))
        return cls(sources)

    def load(self) -> GateConfig:
        """Merge every source and validate the result.

        Raises:
            ConfigError: If a source cannot be read or the merged data is invalid.
        """

        merged: dict[str, Any] = {}
        for source in self._sources:
            fragment = source.load()
            if fragment:
                merged = deep_merge(merged, fragment)
        try:
            return GateConfig.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(_format_validation_error(exc)) from exc


def parse_file_types_json(text: str) -> list[FileTypeConfig]:
    """Parse the JSON file-type list accepted by the GitHub Action ``fileTypes`` input.

    Raises:
        ConfigError: If ``text`` is not a JSON array of valid file type objects.
    """

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"file types must be valid JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise ConfigError("file types must be a JSON array of objects")
    try:
        return [FileTypeConfig.model_validate(entry) for entry in payload]
    except ValidationError as exc:
        raise ConfigError(_format_validation_error(exc)) from exc


def load_config(
    project_root: Path,
    *,
    config_file: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> GateConfig:
    """Load configuration for ``project_root`` using the default tiered sources."""

    return ConfigLoader.for_root(project_root, config_file=config_file, overrides=overrides).load()


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        problems.append(f"{location}: {error['msg']}")
    return "invalid configuration: " + "; ".join(problems)


__all__ = [
    "ConfigLoader",
    "ConfigSource",
    "MappingConfigSource",
    "PyProjectConfigSource",
    "TomlConfigSource",
    "deep_merge",
    "load_config",
    "parse_file_types_json",
]
