"""
Grid value objects shared by the layout writer and grid collaborators.
All coordinates are 0-based (row, column).
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass(frozen=True)
class Selection:
    """Anchor of the user's selected range"""
    row_index: int
    column_index: int
    row_count: int
    column_count: int
    values: List[List[Any]] = field(default_factory=list, compare=False)
    address: str = ""

    @property
    def is_single_cell(self) -> bool:
        return self.row_count == 1 and self.column_count == 1

    @property
    def next_column(self) -> int:
        """First column to the right of the selection"""
        return self.column_index + self.column_count


@dataclass(frozen=True)
class CellFormat:
    """Formatting attributes of one cell write"""
    bold: bool = False
    fill_color: Optional[str] = None
    font_color: Optional[str] = None
    font_size: Optional[float] = None
    horizontal_alignment: Optional[str] = None
    vertical_alignment: Optional[str] = None
    number_format: Optional[str] = None
    wrap_text: bool = False

    @property
    def is_empty(self) -> bool:
        return self == CellFormat()


@dataclass(frozen=True)
class GridWrite:
    """One value-or-formula write at a target coordinate"""
    row: int
    column: int
    value: Any = None
    formula: Optional[str] = None
    format: CellFormat = field(default_factory=CellFormat)

    @property
    def is_formula(self) -> bool:
        return self.formula is not None


@dataclass(frozen=True)
class FormulaFill:
    """Replicate the formula at (source_row, column) down a block of rows"""
    source_row: int
    column: int
    first_row: int
    row_count: int

    @property
    def last_row(self) -> int:
        return self.first_row + self.row_count - 1
