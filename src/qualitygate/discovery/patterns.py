# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Source path patterns used to select files for scanning."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

_RECURSIVE_SUFFIX: Final[str] = "**"
_DIRECT_CHILD_SUFFIX: Final[str] = "*"


class MatchMode(str, Enum):
    """How a :class:`SourcePathPattern` compares candidate paths."""

    PREFIX = "prefix"
    DIRECT_CHILD = "direct-child"
    RECURSIVE = "recursive"


@dataclass(frozen=True, slots=True)
class SourcePathPattern:
    """A path prefix with one of three matching modes.

    ``force-app/main/default/`` matches by plain prefix,
    ``force-app/main/default/*`` only matches direct children and
    ``force-app/main/default/**`` matches any descendant.
    """

    base: str
    mode: MatchMode

    @classmethod
    def parse(cls, text: str) -> SourcePathPattern:
        """Build a pattern from its textual form."""

        if text.endswith(_RECURSIVE_SUFFIX):
            return cls(text[: -len(_RECURSIVE_SUFFIX)], MatchMode.RECURSIVE)
        if text.endswith(_DIRECT_CHILD_SUFFIX):
            return cls(text[: -len(_DIRECT_CHILD_SUFFIX)], MatchMode.DIRECT_CHILD)
        return cls(text, MatchMode.PREFIX)

    def matches(self, path: str) -> bool:
        """Return ``True`` when ``path`` is selected by this pattern."""

        if not path.startswith(self.base):
            return False
        if self.mode is MatchMode.DIRECT_CHILD:
            remainder = path[len(self.base) :]
            return bool(remainder) and "/" not in remainder
        return True

    def __str__(self) -> str:
        if self.mode is MatchMode.RECURSIVE:
            return f"{self.base}{_RECURSIVE_SUFFIX}"
        if self.mode is MatchMode.DIRECT_CHILD:
            return f"{self.base}{_DIRECT_CHILD_SUFFIX}"
        return self.base


__all__ = ["MatchMode", "SourcePathPattern"]
