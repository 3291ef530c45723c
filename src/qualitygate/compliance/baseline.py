# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Suppress violations already recorded in a baseline snapshot."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ..core.errors import BaselineError
from ..core.logging import GateLogger, build_logger
from ..core.models import Violation, ViolationKey
from ..core.serialization import JsonValue, coerce_optional_int, coerce_optional_str, dump_json


class BaselineStatus(str, Enum):
    """Outcome of attempting to load a baseline file."""

    LOADED = "loaded"
    MISSING = "missing"
    UNREADABLE = "unreadable"
    INVALID_JSON = "invalid_json"
    NOT_A_LIST = "not_a_list"


class _BaselineReadError(BaselineError):
    def __init__(self, status: BaselineStatus, message: str) -> None:
        super().__init__(message)
        self.status = status


@dataclass(frozen=True, slots=True)
class BaselineLoad:
    """Baseline entries plus the status explaining how they were obtained."""

    status: BaselineStatus
    entries: tuple[JsonValue, ...] = ()
    reason: str = ""

    @property
    def loaded(self) -> bool:
        return self.status is BaselineStatus.LOADED


@dataclass(frozen=True, slots=True)
class BaselineComparison:
    """Result of filtering current violations against a baseline."""

    load: BaselineLoad
    violations: list[Violation] = field(default_factory=list)
    suppressed_count: int = 0


def read_baseline(path: Path) -> list[JsonValue]:
    """Read the JSON array stored at ``path``.

    Raises:
        BaselineError: If the file is missing, unreadable, not JSON or not an
            array. The error's ``status`` attribute names the failure.
    """

    if not path.is_file():
        raise _BaselineReadError(
            BaselineStatus.MISSING,
            f"Baseline file not found at {path}. All violations will be reported.",
        )
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise _BaselineReadError(
            BaselineStatus.UNREADABLE,
            f"Unable to read baseline file {path}: {exc}. All violations will be reported.",
        ) from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise _BaselineReadError(
            BaselineStatus.INVALID_JSON,
            f"Failed to parse baseline file: {exc}. All violations will be reported.",
        ) from exc
    if not isinstance(payload, list):
        raise _BaselineReadError(
            BaselineStatus.NOT_A_LIST,
            "Baseline file does not contain an array of violations. All violations will be reported.",
        )
    return payload


def load_baseline(path: Path) -> BaselineLoad:
    """Load ``path`` without raising, describing any failure in the result."""

    try:
        entries = read_baseline(path)
    except _BaselineReadError as exc:
        return BaselineLoad(status=exc.status, reason=str(exc))
    return BaselineLoad(
        status=BaselineStatus.LOADED,
        entries=tuple(entries),
        reason=f"Loaded {len(entries)} violations from baseline",
    )


def baseline_keys(entries: Iterable[JsonValue]) -> set[ViolationKey]:
    """Return the ``(file, line, rule)`` keys of object entries in ``entries``."""

    keys: set[ViolationKey] = set()
    for entry in entries:
        if not isinstance(entry, Mapping):
            continue
        line = coerce_optional_int(entry.get("line"))
        keys.add(
            ViolationKey(
                file=coerce_optional_str(entry.get("file")) or "",
                line=line if line is not None else -1,
                rule=coerce_optional_str(entry.get("rule")) or "",
            ),
        )
    return keys


def diff_against_baseline(current: Sequence[Violation], baseline: Iterable[JsonValue]) -> list[Violation]:
    """Return the violations in ``current`` whose key is absent from ``baseline``.

    Order of ``current`` is preserved; non-object baseline entries are ignored.
    """

    known = baseline_keys(baseline)
    return [violation for violation in current if violation.key not in known]


def write_baseline(violations: Sequence[Violation], path: Path) -> None:
    """Persist ``violations`` as a baseline JSON array readable by :func:`load_baseline`."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_json(list(violations)), encoding="utf-8")


class BaselineDiffer:
    """Compare current violations with a baseline file and log the outcome."""

    def __init__(self, *, logger: GateLogger | None = None) -> None:
        self._logger = logger or build_logger()

    def compare(self, current: Sequence[Violation], path: Path) -> BaselineComparison:
        """Filter ``current`` against the baseline at ``path``.

        Any load failure degrades to returning ``current`` unchanged.
        """

        load = load_baseline(path)
        if not load.loaded:
            self._logger.warn(load.reason)
            return BaselineComparison(load=load, violations=list(current))
        self._logger.info(load.reason)
        remaining = diff_against_baseline(current, load.entries)
        self._logger.info(f"Found {len(remaining)} new violations not in the baseline")
        return BaselineComparison(
            load=load,
            violations=remaining,
            suppressed_count=len(current) - len(remaining),
        )


__all__ = [
    "BaselineComparison",
    "BaselineDiffer",
    "BaselineLoad",
    "BaselineStatus",
    "baseline_keys",
    "diff_against_baseline",
    "load_baseline",
    "read_baseline",
    "write_baseline",
]
