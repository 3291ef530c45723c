# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field

import pytest

from qualitygate.analyzers.base import AnalyzerKind, AnalyzerRequest
from qualitygate.analyzers.registry import AnalyzerRegistry
from qualitygate.core.models import Violation
from qualitygate.core.serialization import JsonValue
from qualitygate.core.severity import Severity
from qualitygate.filesystem.paths import PathNormalizationContext


@dataclass(slots=True)
class RecordingLogger:
    """Logger capturing ``(level, message)`` pairs instead of printing."""

    records: list[tuple[str, str]] = field(default_factory=list)

    def section(self, title: str) -> None:
        self.records.append(("section", title))

    def subsection(self, title: str) -> None:
        self.records.append(("subsection", title))

    def info(self, message: str) -> None:
        self.records.append(("info", message))

    def ok(self, message: str) -> None:
        self.records.append(("ok", message))

    def warn(self, message: str) -> None:
        self.records.append(("warn", message))

    def fail(self, message: str) -> None:
        self.records.append(("fail", message))

    def echo(self, message: str) -> None:
        self.records.append(("echo", message))

    def messages(self, level: str) -> list[str]:
        return [message for recorded, message in self.records if recorded == level]


class FakeAdapter:
    """Adapter returning canned violations for the requested files."""

    def __init__(
        self,
        kind: AnalyzerKind,
        violations: Mapping[str, Sequence[Violation]] | None = None,
        *,
        error: Exception | None = None,
    ) -> None:
        self.kind = kind
        self._violations = dict(violations or {})
        self._error = error
        self.requests: list[AnalyzerRequest] = []
        self.contexts: list[PathNormalizationContext] = []

    def invoke(self, request: AnalyzerRequest) -> JsonValue:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        return list(request.files)

    def normalize(self, payload: JsonValue, context: PathNormalizationContext) -> list[Violation]:
        self.contexts.append(context)
        assert isinstance(payload, list)
        found: list[Violation] = []
        for path in payload:
            found.extend(self._violations.get(str(path), ()))
        return found


ViolationFactory = Callable[..., Violation]


@pytest.fixture
def make_violation() -> ViolationFactory:
    """Return a factory building violations with sensible defaults."""

    def _factory(
        file: str = "src/a.js",
        line: int = 1,
        rule: str = "no-console",
        severity: Severity = Severity.MEDIUM,
        **extra: object,
    ) -> Violation:
        payload: dict[str, object] = {
            "engine": "eslint",
            "rule": rule,
            "severity": severity,
            "message": f"{rule} at line {line}",
            "file": file,
            "line": line,
        }
        payload.update(extra)
        return Violation.model_validate(payload)

    return _factory


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def fake_registry() -> Callable[..., AnalyzerRegistry]:
    """Return a builder registering the supplied fake adapters."""

    def _build(*adapters: FakeAdapter) -> AnalyzerRegistry:
        registry = AnalyzerRegistry()
        for adapter in adapters:
            registry.register(adapter)
        return registry

    return _build


@pytest.fixture(autouse=True)
def _no_github_output(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
