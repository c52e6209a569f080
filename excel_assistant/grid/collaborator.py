"""
Grid collaborator interface
The layout writer only talks to the spreadsheet through these calls
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from .models import CellFormat, Selection


class GridCollaborator(ABC):
    """Spreadsheet-side operations; coordinates are 0-based"""

    @abstractmethod
    def get_selection(self) -> Selection:
        """Anchor coordinates, row/column counts and values of the selection"""

    @abstractmethod
    def has_sheet(self, name: str) -> bool:
        pass

    @abstractmethod
    def get_or_create_sheet(self, name: str, activate: bool = True) -> str:
        """Make the named sheet the write target, creating it when missing"""

    @abstractmethod
    def write_value(self, row: int, column: int, value: Any) -> None:
        """Write a literal value (never interpreted as a formula)"""

    @abstractmethod
    def write_formula(self, row: int, column: int, formula: str) -> None:
        pass

    @abstractmethod
    def apply_format(
        self,
        row: int,
        column: int,
        cell_format: CellFormat,
        end_row: Optional[int] = None,
        end_column: Optional[int] = None,
    ) -> None:
        """Format one cell, or the rectangle up to (end_row, end_column)"""

    @abstractmethod
    def replicate_formula(
        self, source_row: int, column: int, first_row: int, row_count: int
    ) -> None:
        """Copy the source cell's formula down, adjusting relative references"""

    @abstractmethod
    def set_column_width(self, column: int, width: float) -> None:
        pass

    @abstractmethod
    def commit(self) -> None:
        """Flush pending writes"""
