# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer option declarations and CLI input models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import typer

from ..config.loader import parse_file_types_json

ROOT_OPTION = Annotated[
    Path,
    typer.Option("--root", "-r", help="Repository root."),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Configuration file replacing .qualitygate.toml."),
]
SOURCE_PATH_OPTION = Annotated[
    str | None,
    typer.Option("--source-path", help="Source path pattern (prefix, prefix* or prefix**)."),
]
FILE_TYPES_OPTION = Annotated[
    str | None,
    typer.Option("--file-types", help="JSON array of file type definitions."),
]
CHANGED_ONLY_OPTION = Annotated[
    bool | None,
    typer.Option("--changed-only/--all-files", help="Scan only files changed against the base ref."),
]
BASE_REF_OPTION = Annotated[
    str | None,
    typer.Option("--base-ref", help="Branch or commit changed files are compared against."),
]
CHANGES_FILE_OPTION = Annotated[
    Path | None,
    typer.Option("--changes-file", help="JSON list of {filename, status} objects to classify."),
]
BASELINE_OPTION = Annotated[
    Path | None,
    typer.Option("--baseline", help="Previous violations file used to suppress known findings."),
]
CACHE_OPTION = Annotated[
    bool | None,
    typer.Option("--cache/--no-cache", help="Enable analyzer caches."),
]
FORMAT_OPTION = Annotated[
    list[str] | None,
    typer.Option("--format", "-f", help="Report format (json, text, html, sarif, github). Repeatable."),
]
OUTPUT_DIR_OPTION = Annotated[
    Path | None,
    typer.Option("--output-dir", "-o", help="Directory receiving report files."),
]
FAIL_OPTION = Annotated[
    bool | None,
    typer.Option("--fail/--no-fail", help="Exit non-zero when thresholds are exceeded."),
]
TIMEOUT_OPTION = Annotated[
    float | None,
    typer.Option("--timeout", min=0, help="Per-analyzer timeout in seconds (0 disables)."),
]
GITHUB_OUTPUT_OPTION = Annotated[
    Path | None,
    typer.Option("--github-output", envvar="GITHUB_OUTPUT", help="File receiving GitHub step outputs."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]


@dataclass(slots=True)
class ScanCLIOptions:
    """Options shared by the ``scan`` and ``baseline`` commands."""

    root: Path
    config_file: Path | None = None
    source_path: str | None = None
    file_types: str | None = None
    changed_only: bool | None = None
    base_ref: str | None = None
    changes_file: Path | None = None
    baseline: Path | None = None
    cache: bool | None = None
    formats: list[str] | None = None
    output_dir: Path | None = None
    fail: bool | None = None
    timeout: float | None = None
    emoji: bool = True

    def overrides(self) -> dict[str, Any]:
        """Return configuration overrides for the flags the user supplied.

        Raises:
            ConfigError: If ``--file-types`` is not a valid JSON definition list.
        """

        overrides: dict[str, Any] = {
            "source_path": self.source_path,
            "scan_changed_files_only": self.changed_only,
            "base_ref": self.base_ref,
            "previous_violations_file": str(self.baseline) if self.baseline is not None else None,
            "enable_scan_cache": self.cache,
            "output_formats": tuple(self.formats) if self.formats else None,
            "output_dir": str(self.output_dir) if self.output_dir is not None else None,
            "analyzer_timeout": self.timeout,
        }
        if self.file_types is not None:
            overrides["file_types"] = [
                file_type.model_dump() for file_type in parse_file_types_json(self.file_types)
            ]
        if self.fail is not None:
            overrides["thresholds"] = {"fail_on_quality_issues": self.fail}
        return overrides


__all__ = [
    "BASELINE_OPTION",
    "BASE_REF_OPTION",
    "CACHE_OPTION",
    "CHANGED_ONLY_OPTION",
    "CHANGES_FILE_OPTION",
    "CONFIG_OPTION",
    "EMOJI_OPTION",
    "FAIL_OPTION",
    "FILE_TYPES_OPTION",
    "FORMAT_OPTION",
    "GITHUB_OUTPUT_OPTION",
    "OUTPUT_DIR_OPTION",
    "ROOT_OPTION",
    "SOURCE_PATH_OPTION",
    "TIMEOUT_OPTION",
    "ScanCLIOptions",
]
