# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console logging helpers and the logger handed to pipeline components."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .console import detect_tty
from .public import fail, info, ok, plain, section, subsection, warn


@runtime_checkable
class GateLogger(Protocol):
    """Logging surface consumed by the orchestrator, baseline differ and pipeline."""

    def section(self, title: str) -> None: ...

    def subsection(self, title: str) -> None: ...

    def info(self, message: str) -> None: ...

    def ok(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def fail(self, message: str) -> None: ...

    def echo(self, message: str) -> None: ...


@dataclass(slots=True)
class ConsoleLogger:
    """Adapter around the console helpers respecting emoji and colour settings."""

    use_emoji: bool = True
    use_color: bool | None = None

    def _color_enabled(self) -> bool:
        return detect_tty() if self.use_color is None else self.use_color

    def section(self, title: str) -> None:
        section(title, use_color=self._color_enabled())

    def subsection(self, title: str) -> None:
        subsection(title, use_color=self._color_enabled())

    def info(self, message: str) -> None:
        info(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, message: str) -> None:
        ok(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        warn(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def fail(self, message: str) -> None:
        fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def echo(self, message: str) -> None:
        plain(message, use_color=self.use_color)


def build_logger(*, emoji: bool = True, color: bool | None = None) -> ConsoleLogger:
    """Return a :class:`ConsoleLogger` configured for the given presentation flags."""

    return ConsoleLogger(use_emoji=emoji, use_color=color)


__all__ = [
    "ConsoleLogger",
    "GateLogger",
    "build_logger",
    "fail",
    "info",
    "ok",
    "section",
    "subsection",
    "warn",
]
