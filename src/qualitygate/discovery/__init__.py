# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""File discovery and classification."""

from __future__ import annotations

from .classifier import ChangedFile, classify_changes, classify_repository, filter_by_file_type
from .git import GitChangeSource, GitCommandError, load_changes_file, parse_name_status
from .patterns import MatchMode, SourcePathPattern

__all__ = [
    "ChangedFile",
    "GitChangeSource",
    "GitCommandError",
    "MatchMode",
    "SourcePathPattern",
    "classify_changes",
    "classify_repository",
    "filter_by_file_type",
    "load_changes_file",
    "parse_name_status",
]
