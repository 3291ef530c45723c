# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Classify candidate files as new or modified and filter them per file type."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Final

from ..config.models import FileTypeConfig
from ..core.models import ClassifiedFileSet
from .patterns import SourcePathPattern

ADDED_STATUS: Final[str] = "added"


@dataclass(frozen=True, slots=True)
class ChangedFile:
    """A file reported by a change list together with its change status.

    Status values follow the GitHub pull request files API: ``added``,
    ``modified``, ``removed``, ``renamed``, ``copied``, ``changed``.
    """

    filename: str
    status: str

    @property
    def is_new(self) -> bool:
        return self.status == ADDED_STATUS


def classify_changes(changes: Sequence[ChangedFile], source_path: str) -> ClassifiedFileSet:
    """Split a change list into new and modified files under ``source_path``.

    A file is new only when its status is ``added``; every other status counts
    as modified. Files outside ``source_path`` are dropped. When a file name is
    reported more than once its first classification wins.

    Args:
        changes: Change list reported by version control.
        source_path: Source path pattern (plain prefix, ``*`` or ``**`` suffix).

    Returns:
        ClassifiedFileSet: Classified files; ``total_count`` is the raw change count.
    """

    pattern = SourcePathPattern.parse(source_path)
    new_files: list[str] = []
    modified_files: list[str] = []
    seen: set[str] = set()
    for change in changes:
        if change.filename in seen or not pattern.matches(change.filename):
            continue
        seen.add(change.filename)
        if change.is_new:
            new_files.append(change.filename)
        else:
            modified_files.append(change.filename)
    return ClassifiedFileSet(
        total_count=len(changes),
        new_files=tuple(new_files),
        modified_files=tuple(modified_files),
    )


def classify_repository(files: Sequence[str], source_path: str) -> ClassifiedFileSet:
    """Classify a full repository listing.

    Without diff context novelty cannot be proven, so every matched file is
    reported as modified and ``new_files`` is empty.
    """

    pattern = SourcePathPattern.parse(source_path)
    matched = tuple(dict.fromkeys(path for path in files if pattern.matches(path)))
    return ClassifiedFileSet(total_count=len(files), new_files=(), modified_files=matched)


def filter_by_file_type(file_type: FileTypeConfig, candidates: Iterable[str]) -> list[str]:
    """Return ``candidates`` under the file type's source path with a configured extension.

    The source path is compared as a plain prefix, independent of the wildcard
    handling used by :func:`classify_changes`.
    """

    extensions = tuple(file_type.file_extensions)
    return [
        path
        for path in candidates
        if path.startswith(file_type.source_path) and path.endswith(extensions)
    ]


__all__ = [
    "ADDED_STATUS",
    "ChangedFile",
    "classify_changes",
    "classify_repository",
    "filter_by_file_type",
]
