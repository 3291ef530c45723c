# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .models import Violation


class Severity(str, Enum):
    """Severity levels normalising different analyzer vocabularies."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


SEVERITY_ORDER: Final[tuple[Severity, ...]] = (
    Severity.CRITICAL,
    Severity.HIGH,
    Severity.MEDIUM,
    Severity.LOW,
    Severity.INFO,
)

# Critical and high share one bucket for every threshold comparison.
BLOCKING_SEVERITIES: Final[frozenset[Severity]] = frozenset({Severity.CRITICAL, Severity.HIGH})

_ESLINT_LEVELS: Final[Mapping[int, Severity]] = {
    2: Severity.HIGH,
    1: Severity.MEDIUM,
}

_PMD_PRIORITIES: Final[Mapping[int, Severity]] = {
    1: Severity.CRITICAL,
    2: Severity.HIGH,
    3: Severity.MEDIUM,
    4: Severity.LOW,
}

_SEVERITY_TO_SARIF_LEVEL: Final[dict[Severity, str]] = {
    Severity.CRITICAL: "error",
    Severity.HIGH: "error",
    Severity.MEDIUM: "warning",
    Severity.LOW: "warning",
    Severity.INFO: "note",
}


def severity_from_eslint(level: int | None) -> Severity:
    """Map an ESLint message severity (``2`` error, ``1`` warning) to :class:`Severity`.

    Args:
        level: Numeric severity reported by ESLint.

    Returns:
        Severity: ``HIGH`` for errors, ``MEDIUM`` for warnings and ``INFO`` otherwise.
    """

    if level is None:
        return Severity.INFO
    return _ESLINT_LEVELS.get(level, Severity.INFO)


def severity_from_pmd(priority: int | None) -> Severity:
    """Map a PMD rule priority (1 highest to 5 lowest) to :class:`Severity`.

    Args:
        priority: Numeric priority reported by PMD.

    Returns:
        Severity: Mapped severity, ``INFO`` for anything outside ``1..4``.
    """

    if priority is None:
        return Severity.INFO
    return _PMD_PRIORITIES.get(priority, Severity.INFO)


def is_blocking(severity: Severity) -> bool:
    """Return ``True`` when ``severity`` belongs to the critical/high bucket."""

    return severity in BLOCKING_SEVERITIES


def count_by_severity(violations: Iterable[Violation]) -> dict[Severity, int]:
    """Return per-severity counts for ``violations`` including zero buckets.

    Args:
        violations: Normalised violations to tally.

    Returns:
        dict[Severity, int]: Counts keyed in :data:`SEVERITY_ORDER` order.
    """

    counts = dict.fromkeys(SEVERITY_ORDER, 0)
    for violation in violations:
        counts[violation.severity] += 1
    return counts


def severity_to_sarif(severity: Severity) -> str:
    """Map :class:`Severity` to a SARIF reporting level."""

    return _SEVERITY_TO_SARIF_LEVEL.get(severity, "warning")


__all__ = [
    "BLOCKING_SEVERITIES",
    "SEVERITY_ORDER",
    "Severity",
    "count_by_severity",
    "is_blocking",
    "severity_from_eslint",
    "severity_from_pmd",
    "severity_to_sarif",
]
