# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Analyzer orchestration."""

from __future__ import annotations

from .orchestrator import (
    STATUS_FAILED,
    STATUS_SCANNED,
    STATUS_SKIPPED,
    STATUS_UNSUPPORTED,
    AnalysisOrchestrator,
)

__all__ = [
    "STATUS_FAILED",
    "STATUS_SCANNED",
    "STATUS_SKIPPED",
    "STATUS_UNSUPPORTED",
    "AnalysisOrchestrator",
]
