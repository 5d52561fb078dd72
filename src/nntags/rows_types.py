"""Shapes of the host-provided row feed."""

from __future__ import annotations

from typing import TypedDict

from typing_extensions import ReadOnly


class CellResponse(TypedDict, total=False):
    """Readonly formatted cell of one row."""
    columnName: ReadOnly[str]
    formattedValue: ReadOnly[str]


class RowResponse(TypedDict, total=False):
    """Readonly row of the candidate record view."""
    id: ReadOnly[str]
    cells: ReadOnly[list[CellResponse]]


class ColumnResponse(TypedDict, total=False):
    """Readonly view column; negative ``order`` means hidden."""
    name: ReadOnly[str]
    displayName: ReadOnly[str]
    order: ReadOnly[int]


__all__ = ["CellResponse", "ColumnResponse", "RowResponse"]
