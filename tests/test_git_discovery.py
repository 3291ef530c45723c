# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

import json
import subprocess
from collections.abc import Sequence
from pathlib import Path

import pytest

from qualitygate.core.errors import ConfigError
from qualitygate.core.runtime import process
from qualitygate.discovery import ChangedFile, GitChangeSource, GitCommandError, load_changes_file, parse_name_status


def test_parse_name_status_maps_letters_to_pull_request_statuses() -> None:
    lines = [
        "A\tsrc/new.js",
        "M\tsrc/edited.js",
        "R087\tsrc/old.js\tsrc/renamed.js",
        "C100\tsrc/base.js\tsrc/copy.js",
        "D\tsrc/gone.js",
        "T\tsrc/typechange.js",
        "",
        "garbage",
    ]

    assert parse_name_status(lines) == [
        ChangedFile("src/new.js", "added"),
        ChangedFile("src/edited.js", "modified"),
        ChangedFile("src/renamed.js", "renamed"),
        ChangedFile("src/copy.js", "copied"),
        ChangedFile("src/gone.js", "removed"),
        ChangedFile("src/typechange.js", "changed"),
    ]


def test_changed_files_diffs_against_merge_base(tmp_path: Path) -> None:
    calls: list[list[str]] = []

    def runner(cmd: Sequence[str], root: Path) -> list[str]:
        calls.append(list(cmd))
        assert root == tmp_path
        if cmd[1] == "merge-base":
            return ["abc123\n"]
        return ["A\tsrc/a.js", "M\tsrc/b.js"]

    changes = GitChangeSource(runner=runner).changed_files(tmp_path, "origin/main")

    assert calls[0] == ["git", "merge-base", "HEAD", "origin/main"]
    assert calls[1] == ["git", "diff", "--name-status", "-M", "abc123", "HEAD", "--"]
    assert [change.is_new for change in changes] == [True, False]


def test_changed_files_falls_back_to_base_ref_without_merge_base(tmp_path: Path) -> None:
    calls: list[list[str]] = []

    def runner(cmd: Sequence[str], root: Path) -> list[str]:
        calls.append(list(cmd))
        if cmd[1] == "merge-base":
            raise GitCommandError("no merge base")
        return []

    assert GitChangeSource(runner=runner).changed_files(tmp_path, "develop") == []
    assert calls[-1][4] == "develop"


def test_tracked_files_skips_blank_lines(tmp_path: Path) -> None:
    source = GitChangeSource(runner=lambda cmd, root: ["src/a.js", "", "  src/b.js  "])

    assert source.tracked_files(tmp_path) == ["src/a.js", "src/b.js"]


def test_default_runner_reports_git_failures(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def fake_run(args: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(args=args, returncode=128, stdout="", stderr="fatal: not a git repository\n")

    monkeypatch.setattr(process.shutil, "which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr(process.subprocess, "run", fake_run)

    with pytest.raises(GitCommandError, match="git ls-files failed: fatal: not a git repository"):
        GitChangeSource().tracked_files(tmp_path)


def test_default_runner_returns_stdout_lines(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def fake_run(args: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(args=args, returncode=0, stdout="src/a.js\nsrc/b.js\n", stderr="")

    monkeypatch.setattr(process.shutil, "which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr(process.subprocess, "run", fake_run)

    assert GitChangeSource().tracked_files(tmp_path) == ["src/a.js", "src/b.js"]


def test_load_changes_file_reads_pull_request_payload(tmp_path: Path) -> None:
    path = tmp_path / "changes.json"
    path.write_text(
        json.dumps(
            [
                {"filename": "src/a.js", "status": "added", "additions": 4},
                {"filename": "src/b.js"},
                {"status": "modified"},
                "not-an-object",
            ],
        ),
        encoding="utf-8",
    )

    assert load_changes_file(path) == [
        ChangedFile("src/a.js", "added"),
        ChangedFile("src/b.js", "changed"),
    ]


@pytest.mark.parametrize("content", ["{not json", '{"filename": "a.js"}'])
def test_load_changes_file_rejects_invalid_documents(tmp_path: Path, content: str) -> None:
    path = tmp_path / "changes.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_changes_file(path)


def test_load_changes_file_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Unable to read change list"):
        load_changes_file(tmp_path / "absent.json")
