# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared analyzer adapter types and subprocess plumbing."""

from __future__ import annotations

import json
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from subprocess import CompletedProcess
from typing import ClassVar, Final, Protocol, runtime_checkable

from ..config.models import FileTypeConfig
from ..core.errors import AnalyzerInvocationError
from ..core.models import Violation
from ..core.runtime.process import TIMEOUT_RETURNCODE, CommandOptions, CommandRunner, run_command
from ..core.serialization import JsonValue, load_json_text
from ..filesystem.paths import PathNormalizationContext

CACHE_ROOT: Final[Path] = Path(tempfile.gettempdir())


class AnalyzerKind(str, Enum):
    """Analyzers the gate knows how to drive."""

    ESLINT = "eslint"
    PMD = "pmd"


@dataclass(frozen=True, slots=True)
class AnalyzerRequest:
    """Everything an adapter needs to analyse one file type.

    Attributes:
        file_type: File type configuration driving the invocation.
        files: Repository relative files to analyse.
        cache_enabled: Whether the analyzer's incremental cache should be used.
        root: Directory the analyzer is launched from.
        timeout: Seconds before the analyzer is abandoned, ``None`` for no limit.
    """

    file_type: FileTypeConfig
    files: tuple[str, ...]
    cache_enabled: bool = False
    root: Path = field(default_factory=Path.cwd)
    timeout: float | None = None


@dataclass(frozen=True, slots=True)
class UnsupportedAnalyzer:
    """Registry lookup result for an analyzer name with no adapter."""

    name: str

    @property
    def message(self) -> str:
        return f"Unsupported analyzer '{self.name}'"


@runtime_checkable
class AnalyzerAdapter(Protocol):
    """Run one analyzer and translate its output into violations."""

    kind: AnalyzerKind

    def invoke(self, request: AnalyzerRequest) -> JsonValue:
        """Run the analyzer and return its decoded JSON payload."""
        ...

    def normalize(self, payload: JsonValue, context: PathNormalizationContext) -> list[Violation]:
        """Translate ``payload`` into violations."""
        ...


class CommandAdapter(ABC):
    """Base class for adapters that shell out to an analyzer executable.

    Subclasses build the command line in :meth:`build_command` and read the
    payload back in :meth:`read_payload`; this class owns the scratch
    directory, the timeout and error translation.
    """

    kind: ClassVar[AnalyzerKind]

    def __init__(self, *, runner: CommandRunner | None = None) -> None:
        self._runner: CommandRunner = runner or run_command

    def invoke(self, request: AnalyzerRequest) -> JsonValue:
        """Run the analyzer for ``request`` and return its decoded payload.

        Raises:
            AnalyzerInvocationError: If the executable is missing, the run
                times out or the output is not valid JSON.
        """

        with tempfile.TemporaryDirectory(prefix=f"qualitygate-{self.kind.value}-") as scratch:
            workdir = Path(scratch)
            command = self.build_command(request, workdir)
            completed = self._execute(command, request)
            return self.read_payload(request, workdir, completed)

    @abstractmethod
    def build_command(self, request: AnalyzerRequest, workdir: Path) -> list[str]:
        """Return the analyzer command line, writing any scratch inputs into ``workdir``."""

    @abstractmethod
    def read_payload(
        self,
        request: AnalyzerRequest,
        workdir: Path,
        completed: CompletedProcess[str],
    ) -> JsonValue:
        """Return the decoded payload once the analyzer has exited."""

    @abstractmethod
    def normalize(self, payload: JsonValue, context: PathNormalizationContext) -> list[Violation]:
        """Translate ``payload`` into violations."""

    def cache_location(self, request: AnalyzerRequest, suffix: str) -> Path:
        """Return the persistent cache path for ``request``'s file type."""

        cache_dir = CACHE_ROOT / f".{self.kind.value}-cache"
        cache_dir.mkdir(parents=True, exist_ok=True)
        return cache_dir / f"{request.file_type.name_key}-{suffix}"

    def error(self, request: AnalyzerRequest, message: str) -> AnalyzerInvocationError:
        return AnalyzerInvocationError(message, analyzer=self.kind.value, file_type=request.file_type.name)

    def decode(self, request: AnalyzerRequest, text: str, origin: str) -> JsonValue:
        """Decode analyzer JSON, treating blank output as an empty payload."""

        try:
            return load_json_text(text)
        except json.JSONDecodeError as exc:
            raise self.error(request, f"{self.kind.value} produced invalid JSON in {origin}: {exc}") from exc

    def _execute(self, command: Sequence[str], request: AnalyzerRequest) -> CompletedProcess[str]:
        options = CommandOptions(cwd=request.root, timeout=request.timeout)
        try:
            completed = self._runner(command, options=options)
        except FileNotFoundError as exc:
            raise self.error(request, str(exc)) from exc
        if completed.returncode == TIMEOUT_RETURNCODE:
            raise self.error(request, f"{self.kind.value} timed out after {request.timeout}s")
        return completed


def read_result_file(path: Path) -> str | None:
    """Return the contents of ``path`` or ``None`` when the analyzer wrote nothing."""

    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8")


__all__ = [
    "CACHE_ROOT",
    "AnalyzerAdapter",
    "AnalyzerKind",
    "AnalyzerRequest",
    "CommandAdapter",
    "UnsupportedAnalyzer",
    "read_result_file",
]
