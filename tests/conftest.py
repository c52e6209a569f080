"""
Shared fixtures: a recording grid collaborator, sample replies and workbooks
"""

from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock, MagicMock

import openpyxl
import pytest

from excel_assistant.core.exceptions import WriteFailure
from excel_assistant.grid.collaborator import GridCollaborator
from excel_assistant.grid.models import CellFormat, Selection
from excel_assistant.services.claude_service import ClaudeService


class RecordingGrid(GridCollaborator):
    """In-memory grid that records every call; optionally rejects writes at one row"""

    def __init__(self, selection: Optional[Selection] = None, fail_at_row: Optional[int] = None):
        self.selection = selection or Selection(0, 0, 5, 3, values=[["a", 1, 2]] * 5, address="Sheet1!A1:C5")
        self.fail_at_row = fail_at_row
        self.sheets: List[str] = ["Sheet1"]
        self.current_sheet = "Sheet1"
        self.values: Dict[Tuple[str, int, int], Any] = {}
        self.formulas: Dict[Tuple[str, int, int], str] = {}
        self.formats: Dict[Tuple[str, int, int], CellFormat] = {}
        self.fills: List[Tuple[int, int, int, int]] = []
        self.widths: Dict[int, float] = {}
        self.commits = 0
        self.committed_values: Dict[Tuple[str, int, int], Any] = {}

    def _check(self, row: int) -> None:
        if self.fail_at_row is not None and row == self.fail_at_row:
            raise WriteFailure(f"rejected write at row {row}")

    def get_selection(self) -> Selection:
        return self.selection

    def has_sheet(self, name: str) -> bool:
        return name in self.sheets

    def get_or_create_sheet(self, name: str, activate: bool = True) -> str:
        if name not in self.sheets:
            self.sheets.append(name)
        self.current_sheet = name
        return name

    def write_value(self, row: int, column: int, value: Any) -> None:
        self._check(row)
        self.values[(self.current_sheet, row, column)] = value

    def write_formula(self, row: int, column: int, formula: str) -> None:
        self._check(row)
        self.formulas[(self.current_sheet, row, column)] = formula

    def apply_format(self, row, column, cell_format, end_row=None, end_column=None) -> None:
        self.formats[(self.current_sheet, row, column)] = cell_format

    def replicate_formula(self, source_row: int, column: int, first_row: int, row_count: int) -> None:
        self.fills.append((source_row, column, first_row, row_count))

    def set_column_width(self, column: int, width: float) -> None:
        self.widths[column] = width

    def commit(self) -> None:
        self.commits += 1
        self.committed_values = dict(self.values)

    def value_at(self, row: int, column: int, sheet: Optional[str] = None) -> Any:
        return self.values.get((sheet or self.current_sheet, row, column))


@pytest.fixture
def grid_factory():
    return RecordingGrid


@pytest.fixture
def recording_grid():
    return RecordingGrid()


@pytest.fixture
def model_caller():
    """Model caller stub; set model_caller.call.return_value per test"""
    caller = MagicMock(spec=ClaudeService)
    caller.call = AsyncMock(return_value="")
    return caller


@pytest.fixture
def suggestion_reply():
    return "\n".join([
        "Here are three useful columns:",
        "",
        "COLUMN: Total",
        "FORMULA: =B2+C2",
        "EXPLANATION: Sum of both quantities",
        "",
        "COLUMN: Ratio",
        "FORMULA: =B2/C2",
        "EXPLANATION: Relative size",
        "",
        "COLUMN: Flag",
        "FORMULA: =IF(B2>C2,\"High\",\"Low\")",
        "EXPLANATION: Quick comparison",
    ])


@pytest.fixture
def table_reply():
    return "\n".join([
        "Here is the financial model you asked for.",
        "",
        "1. Revenue Model:",
        "```",
        "Year   Revenue   Growth",
        "-----------------------",
        "2023   1,000     -",
        "2024   1,500     50%",
        "```",
        "",
        "Some commentary that must never reach the sheet.",
        "",
        "2. Cost Summary:",
        "```",
        "Item       Amount",
        "Salaries   $12,000",
        "Rent       800",
        "```",
        "Let me know if you need anything else.",
    ])


@pytest.fixture
def workbook_path(tmp_path):
    """Sheet1 with a header row and four data rows in A1:C5"""
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = "Sheet1"
    sheet.append(["Product", "Units", "Price"])
    sheet.append(["Apples", 10, 2.5])
    sheet.append(["Pears", 4, 3.0])
    sheet.append(["Plums", 7, 1.25])
    sheet.append(["Figs", 2, 6.0])
    path = tmp_path / "data.xlsx"
    workbook.save(path)
    return str(path)
