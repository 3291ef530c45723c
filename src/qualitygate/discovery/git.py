# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Git-backed change lists and repository listings."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Final

from ..core.errors import ConfigError, QualityGateError
from ..core.runtime.process import CommandOptions, SubprocessExecutionError, run_command
from ..core.serialization import coerce_optional_str
from .classifier import ChangedFile

GitRunner = Callable[[Sequence[str], Path], list[str]]

_STATUS_LETTERS: Final[dict[str, str]] = {
    "A": "added",
    "M": "modified",
    "D": "removed",
    "R": "renamed",
    "C": "copied",
}
_FALLBACK_STATUS: Final[str] = "changed"


class GitCommandError(QualityGateError):
    """Raised when a git command required for change discovery fails."""


def parse_name_status(lines: Iterable[str]) -> list[ChangedFile]:
    """Convert ``git diff --name-status`` output into :class:`ChangedFile` entries.

    Renames and copies report the destination path.
    """

    changes: list[ChangedFile] = []
    for raw in lines:
        stripped = raw.strip()
        if not stripped:
            continue
        parts = stripped.split("\t")
        if len(parts) < 2:
            continue
        letter = parts[0][:1].upper()
        changes.append(
            ChangedFile(
                filename=parts[-1],
                status=_STATUS_LETTERS.get(letter, _FALLBACK_STATUS),
            ),
        )
    return changes


def load_changes_file(path: Path) -> list[ChangedFile]:
    """Read a JSON change list such as the pull request files API payload.

    The document must be an array of objects carrying ``filename`` and
    ``status``; entries without a filename are skipped.

    Raises:
        ConfigError: If the file cannot be read or is not a JSON array.
    """

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Unable to read change list {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Change list {path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise ConfigError(f"Change list {path} must contain a JSON array")
    changes: list[ChangedFile] = []
    for entry in payload:
        if not isinstance(entry, dict):
            continue
        filename = coerce_optional_str(entry.get("filename"))
        if not filename:
            continue
        status = coerce_optional_str(entry.get("status")) or _FALLBACK_STATUS
        changes.append(ChangedFile(filename=filename, status=status))
    return changes


class GitChangeSource:
    """Collect change lists and tracked files by invoking git."""

    def __init__(self, *, runner: GitRunner | None = None) -> None:
        """Create a git change source.

        Args:
            runner: Optional command runner returning stdout lines; defaults
                to :func:`run_command` and raises on non-zero exits.
        """

        self._runner = runner or self._default_runner

    def changed_files(self, root: Path, base_ref: str) -> list[ChangedFile]:
        """Return files changed between the merge base with ``base_ref`` and ``HEAD``.

        Args:
            root: Repository root directory.
            base_ref: Branch or commit the change set is compared against.

        Returns:
            list[ChangedFile]: Change entries with GitHub style statuses.
        """

        diff_ref = self._resolve_diff_ref(root, base_ref)
        output = self._runner(["git", "diff", "--name-status", "-M", diff_ref, "HEAD", "--"], root)
        return parse_name_status(output)

    def tracked_files(self, root: Path) -> list[str]:
        """Return repository relative paths reported by ``git ls-files``."""

        return [line.strip() for line in self._runner(["git", "ls-files"], root) if line.strip()]

    def _resolve_diff_ref(self, root: Path, base_ref: str) -> str:
        try:
            output = self._runner(["git", "merge-base", "HEAD", base_ref], root)
        except GitCommandError:
            return base_ref
        if output and output[0].strip():
            return output[0].strip()
        return base_ref

    @staticmethod
    def _default_runner(cmd: Sequence[str], root: Path) -> list[str]:
        """Execute ``cmd`` in ``root`` returning stdout lines.

        Raises:
            GitCommandError: If git is unavailable or exits with a non-zero status.
        """

        try:
            completed = run_command(cmd, options=CommandOptions(cwd=root, check=True))
        except FileNotFoundError as exc:
            raise GitCommandError(str(exc)) from exc
        except SubprocessExecutionError as exc:
            detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            raise GitCommandError(f"{' '.join(cmd)} failed: {detail}") from exc
        return (completed.stdout or "").splitlines()


__all__ = [
    "GitChangeSource",
    "GitCommandError",
    "GitRunner",
    "load_changes_file",
    "parse_name_status",
]
