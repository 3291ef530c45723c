# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Rewrite analyzer-reported paths into repository relative paths."""

from __future__ import annotations

import posixpath
from collections.abc import Sequence
from dataclasses import dataclass, replace
from pathlib import Path

from ..config.models import DEFAULT_WORKSPACE_PREFIXES

_REPOSITORY_NAME_MARKERS = (".", "-", "_")


@dataclass(frozen=True, slots=True)
class PathNormalizationContext:
    """Inputs that drive path normalisation for one file type.

    Attributes:
        source_path: Source path prefix configured for the file type.
        project_root: Absolute repository root; paths under it are relativised directly.
        workspace_prefixes: CI workspace roots stripped from absolute paths.
    """

    source_path: str = ""
    project_root: str | None = None
    workspace_prefixes: Sequence[str] = DEFAULT_WORKSPACE_PREFIXES

    @classmethod
    def for_root(
        cls,
        root: Path | None,
        *,
        source_path: str = "",
        workspace_prefixes: Sequence[str] = DEFAULT_WORKSPACE_PREFIXES,
    ) -> PathNormalizationContext:
        """Build a context anchored at ``root``."""

        project_root = root.resolve().as_posix() if root is not None else None
        return cls(source_path=source_path, project_root=project_root, workspace_prefixes=tuple(workspace_prefixes))

    def with_source_path(self, source_path: str) -> PathNormalizationContext:
        return replace(self, source_path=source_path)


def normalize_violation_path(path: str, context: PathNormalizationContext) -> str:
    """Return ``path`` rewritten relative to the repository.

    The rewrite runs in a fixed order:

    1. strip the project root, or else the first CI workspace prefix found;
    2. drop a leading segment that looks like a repository name (contains
       ``.``, ``-`` or ``_``), unless the project root was stripped;
    3. reconcile against the source path: trim text before it, or splice it
       back on at the last source segment, or prepend it.

    Step 3 searches for the last source path segment anywhere in the path, so
    a directory elsewhere in the path with the same name is treated as the
    source root.

    Args:
        path: Path reported by an analyzer (absolute or runner relative).
        context: Normalisation inputs for the file type being processed.

    Returns:
        str: Repository relative path, or ``path`` unchanged when empty.
    """

    if not path:
        return path
    normalized = path.replace("\\", "/")
    relative_to_root = _strip_project_root(normalized, context.project_root)
    if relative_to_root is not None:
        normalized = relative_to_root
    else:
        normalized = _strip_workspace_prefix(normalized, context.workspace_prefixes)
        normalized = _strip_repository_name(normalized)
    if context.source_path:
        normalized = _reconcile_source_path(normalized, context.source_path)
    return normalized


def _strip_project_root(path: str, project_root: str | None) -> str | None:
    if not project_root:
        return None
    root = project_root.rstrip("/") + "/"
    if path.startswith(root):
        return path[len(root) :]
    return None


def _strip_workspace_prefix(path: str, prefixes: Sequence[str]) -> str:
    for prefix in prefixes:
        if prefix in path:
            return path.partition(prefix)[2]
    return path


def _strip_repository_name(path: str) -> str:
    parts = path.split("/")
    if len(parts) > 1 and any(marker in parts[0] for marker in _REPOSITORY_NAME_MARKERS):
        return "/".join(parts[1:])
    return path


def _reconcile_source_path(path: str, source_path: str) -> str:
    if source_path in path:
        return path[path.index(source_path) :]
    segments = [segment for segment in source_path.split("/") if segment]
    if segments:
        marker = f"{segments[-1]}/"
        if marker in path:
            tail = path[path.index(marker) + len(marker) :]
            return _join_under(source_path, tail)
    return _join_under(source_path, path)


def _join_under(source_path: str, path: str) -> str:
    # An absolute remainder must not replace the source path.
    return posixpath.normpath(posixpath.join(source_path, path.lstrip("/")))


__all__ = ["PathNormalizationContext", "normalize_violation_path"]
