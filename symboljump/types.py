"""Shared value types for symbol navigation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, order=True)
class Point:
    """Zero-based buffer position."""

    row: int = 0
    column: int = 0


@dataclass(frozen=True)
class Range:
    """Buffer range between two points, ``end`` exclusive."""

    start: Point = Point()
    end: Point = Point()

    @classmethod
    def at(cls, row: int, column: int, length: int = 0) -> Range:
        """Build a single-line range starting at ``(row, column)``."""
        return cls(Point(row, column), Point(row, column + max(0, length)))

    def is_empty(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class Symbol:
    """Named definition supplied by the symbol index.

    ``case_tipe`` names the union type declaring a constructor; it is ``None``
    for top-level values, types, aliases and ports.
    """

    full_name: str
    source_path: Path
    case_tipe: str | None = None

    @property
    def identifier(self) -> str:
        """Last dotted segment of ``full_name``, the name written at the definition."""
        return self.full_name.split(".")[-1]


@dataclass(frozen=True)
class GoToSymbolCommand:
    """Request published by the symbol index to open the picker."""

    default_symbol_name: str | None
    active_file_path: Path | None
    symbols: tuple[Symbol, ...] = field(default_factory=tuple)
