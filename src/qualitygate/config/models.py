# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the quality gate."""

from __future__ import annotations

from pathlib import Path
from typing import Final, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_WORKSPACE_PREFIXES: Final[tuple[str, ...]] = (
    "/home/runner/work/",
    "/github/workspace/",
    "/workspace/",
    "/app/",
    "/src/",
)
DEFAULT_ANALYZER_TIMEOUT: Final[float] = 900.0
DEFAULT_OUTPUT_DIR: Final[Path] = Path("code-quality-reports")

OutputFormat = Literal["json", "text", "html", "sarif", "github"]

# Accept both the snake_case keys used in TOML and the camelCase keys of the
# GitHub Action inputs (``sourcePath``, ``fileExtensions``...).
_MODEL_CONFIG: Final[ConfigDict] = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    extra="forbid",
)


class FileTypeConfig(BaseModel):
    """A group of source files routed to one analyzer."""

    model_config = _MODEL_CONFIG

    name: str = Field(min_length=1)
    analyzer: str = Field(min_length=1)
    source_path: str = ""
    file_extensions: tuple[str, ...] = Field(min_length=1)
    rules_paths: tuple[str, ...] = ()

    @field_validator("analyzer")
    @classmethod
    def _normalise_analyzer(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("file_extensions", "rules_paths", mode="before")
    @classmethod
    def _coerce_string(cls, value: object) -> object:
        """Allow a single comma separated string where a list is expected."""

        if isinstance(value, str):
            return tuple(part.strip() for part in value.split(",") if part.strip())
        return value

    @property
    def name_key(self) -> str:
        """Return a filesystem friendly identifier derived from :attr:`name`."""

        return "_".join(self.name.lower().split())


class ThresholdConfig(BaseModel):
    """Limits applied to the final violation set."""

    model_config = _MODEL_CONFIG

    max_critical_violations: int = Field(default=0, ge=0)
    max_medium_violations: int = Field(default=10, ge=0)
    strict_new_files: bool = False
    max_violations_for_modified_files: int = Field(default=10, ge=0)
    max_critical_violations_for_modified_files: int = Field(default=0, ge=0)
    fail_on_quality_issues: bool = False


class GateConfig(BaseModel):
    """Fully resolved configuration for a quality gate run."""

    model_config = _MODEL_CONFIG

    source_path: str = ""
    file_types: tuple[FileTypeConfig, ...] = ()
    thresholds: ThresholdConfig = Field(default_factory=ThresholdConfig)
    scan_changed_files_only: bool = False
    enable_scan_cache: bool = False
    previous_violations_file: Path | None = None
    base_ref: str | None = None
    output_formats: tuple[OutputFormat, ...] = ("json", "text")
    output_dir: Path = DEFAULT_OUTPUT_DIR
    analyzer_timeout: float = Field(default=DEFAULT_ANALYZER_TIMEOUT, ge=0)
    workspace_prefixes: tuple[str, ...] = DEFAULT_WORKSPACE_PREFIXES

    @field_validator("output_formats", mode="before")
    @classmethod
    def _split_formats(cls, value: object) -> object:
        if isinstance(value, str):
            return tuple(part.strip().lower() for part in value.split(",") if part.strip())
        return value

    @property
    def timeout_seconds(self) -> float | None:
        """Return the analyzer timeout, ``None`` when disabled by a zero value."""

        return self.analyzer_timeout or None


__all__ = [
    "DEFAULT_ANALYZER_TIMEOUT",
    "DEFAULT_OUTPUT_DIR",
    "DEFAULT_WORKSPACE_PREFIXES",
    "FileTypeConfig",
    "GateConfig",
    "OutputFormat",
    "ThresholdConfig",
]
