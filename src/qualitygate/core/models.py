# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the qualitygate package."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .severity import Severity


class ViolationKey(NamedTuple):
    """Identity used to match a violation against a baseline."""

    file: str
    line: int
    rule: str


class Violation(BaseModel):
    """Normalised finding produced by an analyzer.

    Serialised with the ``endline``/``endcolumn``/``doc_url`` keys so baselines
    written by earlier releases of the gate load unchanged.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    engine: str
    rule: str
    ruleset: str | None = None
    severity: Severity
    message: str = ""
    file: str
    line: int = Field(default=1, ge=1)
    column: int = Field(default=1, ge=1)
    end_line: int = Field(default=1, ge=1, alias="endline")
    end_column: int = Field(default=1, ge=1, alias="endcolumn")
    doc_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _default_end_position(cls, data: object) -> object:
        """Default the end position to the start position when omitted."""

        if not isinstance(data, dict):
            return data
        payload = dict(data)
        if payload.get("endline") is None and payload.get("end_line") is None:
            payload["end_line"] = payload.get("line", 1)
        if payload.get("endcolumn") is None and payload.get("end_column") is None:
            payload["end_column"] = payload.get("column", 1)
        return payload

    @property
    def key(self) -> ViolationKey:
        """Return the ``(file, line, rule)`` identity of the violation."""

        return ViolationKey(self.file, self.line, self.rule)


@dataclass(frozen=True, slots=True)
class ClassifiedFileSet:
    """Files selected for scanning split by change status.

    ``filtered_files`` always equals ``new_files`` followed by
    ``modified_files`` and the two groups never share an entry.
    """

    total_count: int
    new_files: tuple[str, ...] = ()
    modified_files: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        overlap = set(self.new_files) & set(self.modified_files)
        if overlap:
            raise ValueError(f"files cannot be both new and modified: {sorted(overlap)}")

    @property
    def filtered_files(self) -> tuple[str, ...]:
        """Return new files followed by modified files."""

        return (*self.new_files, *self.modified_files)


class Verdict(BaseModel):
    """Outcome of evaluating violations against configured thresholds."""

    model_config = ConfigDict(frozen=True)

    total_violations: int
    critical_count: int
    medium_count: int
    low_count: int
    new_file_violation_count: int
    new_file_critical_count: int
    modified_file_violation_count: int
    modified_file_critical_count: int
    should_fail: bool
    failure_reasons: tuple[str, ...] = ()


@dataclass(slots=True)
class FileTypeSummary:
    """Per-file-type record of what the orchestrator did."""

    name: str
    analyzer: str
    status: str
    files_scanned: int = 0
    violation_count: int = 0
    message: str | None = None


@dataclass(slots=True)
class AnalysisResult:
    """Aggregate result of running every configured analyzer."""

    violations: list[Violation] = field(default_factory=list)
    summaries: list[FileTypeSummary] = field(default_factory=list)
    severity_counts: dict[Severity, int] = field(default_factory=dict)


__all__ = [
    "AnalysisResult",
    "ClassifiedFileSet",
    "FileTypeSummary",
    "Verdict",
    "Violation",
    "ViolationKey",
]
