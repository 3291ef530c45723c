# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Registry mapping analyzer names onto adapters."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from ..core.runtime.process import CommandRunner
from .base import AnalyzerAdapter, UnsupportedAnalyzer
from .eslint import EslintAdapter
from .pmd import PmdAdapter


class AnalyzerRegistry(Mapping[str, AnalyzerAdapter]):
    """Read-only mapping of analyzer name to adapter.

    Lookups are case-insensitive; :meth:`resolve` returns an
    :class:`UnsupportedAnalyzer` instead of raising for unknown names.
    """

    def __init__(self) -> None:
        self._adapters: dict[str, AnalyzerAdapter] = {}

    def register(self, adapter: AnalyzerAdapter) -> None:
        """Register ``adapter`` under its analyzer kind.

        Raises:
            ValueError: If an adapter for the same kind is already registered.
        """

        name = adapter.kind.value
        if name in self._adapters:
            raise ValueError(f"Analyzer '{name}' already registered")
        self._adapters[name] = adapter

    def resolve(self, name: str) -> AnalyzerAdapter | UnsupportedAnalyzer:
        """Return the adapter for ``name`` or an :class:`UnsupportedAnalyzer` marker."""

        adapter = self._adapters.get(name.strip().lower())
        if adapter is None:
            return UnsupportedAnalyzer(name=name)
        return adapter

    def __getitem__(self, name: str) -> AnalyzerAdapter:
        return self._adapters[name.strip().lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._adapters)

    def __len__(self) -> int:
        return len(self._adapters)


def default_registry(*, runner: CommandRunner | None = None) -> AnalyzerRegistry:
    """Return a registry holding the ESLint and PMD adapters.

    Args:
        runner: Optional command runner shared by every adapter.
    """

    registry = AnalyzerRegistry()
    registry.register(EslintAdapter(runner=runner))
    registry.register(PmdAdapter(runner=runner))
    return registry


__all__ = ["AnalyzerRegistry", "default_registry"]
