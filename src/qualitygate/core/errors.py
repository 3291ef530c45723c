# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the quality gate pipeline."""

from __future__ import annotations


class QualityGateError(RuntimeError):
    """Base class for errors raised by qualitygate components."""


class ConfigError(QualityGateError):
    """Raised when configuration input is missing or invalid."""


class AnalyzerInvocationError(QualityGateError):
    """Raised when an analyzer fails to run or produces unreadable output."""

    def __init__(self, message: str, *, analyzer: str, file_type: str) -> None:
        """Initialise the error with the analyzer and file type that failed.

        Args:
            message: Human-readable description of the failure.
            analyzer: Analyzer identifier (for example ``eslint``).
            file_type: Name of the configured file type being analysed.
        """

        super().__init__(message)
        self.analyzer = analyzer
        self.file_type = file_type


class BaselineError(QualityGateError):
    """Raised when a baseline snapshot cannot be read or decoded."""


__all__ = [
    "AnalyzerInvocationError",
    "BaselineError",
    "ConfigError",
    "QualityGateError",
]
