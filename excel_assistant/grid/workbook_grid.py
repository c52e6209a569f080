"""
openpyxl-backed grid collaborator
워크북 파일을 열어 선택 영역을 읽고, 값/수식/서식을 쓰고, 저장(commit)한다
"""

from copy import copy
from typing import Any, Optional
import logging

import openpyxl
from openpyxl.formula.translate import Translator
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.workbook.workbook import Workbook

from ..core.exceptions import SelectionError, WorkbookLoadError, WriteFailure
from ..core.excel_utils import ExcelUtils
from .collaborator import GridCollaborator
from .models import CellFormat, Selection

logger = logging.getLogger(__name__)


class WorkbookGrid(GridCollaborator):
    """Grid collaborator over an in-memory openpyxl workbook"""

    def __init__(
        self,
        workbook: Workbook,
        output_path: Optional[str] = None,
        sheet_name: Optional[str] = None,
        selection: Optional[str] = None,
    ):
        self.workbook = workbook
        self.output_path = output_path
        self._selection_ref = selection

        if selection:
            ExcelUtils.parse_range(selection)

        if sheet_name:
            if sheet_name not in workbook.sheetnames:
                raise SelectionError(f"Worksheet not found: {sheet_name}", details={"sheet": sheet_name})
            self.worksheet = workbook[sheet_name]
        else:
            self.worksheet = workbook.active

    @classmethod
    def open(
        cls,
        file_path: str,
        output_path: Optional[str] = None,
        sheet_name: Optional[str] = None,
        selection: Optional[str] = None,
    ) -> "WorkbookGrid":
        """Load a workbook file; commits go to output_path (defaults to the source file)"""
        try:
            workbook = openpyxl.load_workbook(file_path)
        except (OSError, InvalidFileException, KeyError, ValueError) as e:
            raise WorkbookLoadError(
                f"Failed to load workbook: {e}", details={"file_path": file_path}
            ) from e

        logger.info(f"Workbook loaded: {file_path}")
        return cls(workbook, output_path or file_path, sheet_name, selection)

    @property
    def sheet_name(self) -> str:
        return self.worksheet.title

    def _cell(self, row: int, column: int):
        if row < 0 or column < 0:
            raise WriteFailure(f"Invalid cell coordinate: ({row}, {column})")
        return self.worksheet.cell(row=row + 1, column=column + 1)

    def _selection_reference(self) -> str:
        if self._selection_ref:
            return self._selection_ref

        selections = self.worksheet.sheet_view.selection
        if selections and selections[0].sqref:
            # multi-area selections keep only the first area
            return str(selections[0].sqref).split()[0]
        return "A1"

    def get_selection(self) -> Selection:
        reference = self._selection_reference()
        row_index, column_index, row_count, column_count = ExcelUtils.parse_range(reference)

        values = [
            list(row)
            for row in self.worksheet.iter_rows(
                min_row=row_index + 1,
                max_row=row_index + row_count,
                min_col=column_index + 1,
                max_col=column_index + column_count,
                values_only=True,
            )
        ]

        return Selection(
            row_index=row_index,
            column_index=column_index,
            row_count=row_count,
            column_count=column_count,
            values=values,
            address=f"{self.worksheet.title}!{ExcelUtils.strip_sheet_name(reference)}",
        )

    def has_sheet(self, name: str) -> bool:
        return name in self.workbook.sheetnames

    def get_or_create_sheet(self, name: str, activate: bool = True) -> str:
        if name in self.workbook.sheetnames:
            worksheet = self.workbook[name]
        else:
            worksheet = self.workbook.create_sheet(title=name)
            logger.info(f"Worksheet created: {worksheet.title}")

        self.worksheet = worksheet

        if activate:
            for sheet in self.workbook.worksheets:
                sheet.sheet_view.tabSelected = sheet is worksheet
            self.workbook.active = worksheet

        return worksheet.title

    def write_value(self, row: int, column: int, value: Any) -> None:
        cell = self._cell(row, column)
        try:
            cell.value = value
        except (ValueError, TypeError) as e:
            raise WriteFailure(
                f"Cannot write value at {cell.coordinate}: {e}",
                details={"cell": cell.coordinate},
            ) from e

        # text that happens to start with '=' stays text
        if isinstance(value, str) and value.startswith("="):
            cell.data_type = "s"

    def write_formula(self, row: int, column: int, formula: str) -> None:
        if not formula.startswith("="):
            raise WriteFailure(f"Not a formula: {formula}", details={"formula": formula})

        cell = self._cell(row, column)
        try:
            cell.value = formula
        except (ValueError, TypeError) as e:
            raise WriteFailure(
                f"Cannot write formula at {cell.coordinate}: {e}",
                details={"cell": cell.coordinate, "formula": formula},
            ) from e

    def apply_format(
        self,
        row: int,
        column: int,
        cell_format: CellFormat,
        end_row: Optional[int] = None,
        end_column: Optional[int] = None,
    ) -> None:
        if cell_format.is_empty:
            return

        last_row = row if end_row is None else end_row
        last_column = column if end_column is None else end_column

        for row_index in range(row, last_row + 1):
            for column_index in range(column, last_column + 1):
                self._apply_cell_format(self._cell(row_index, column_index), cell_format)

    def _apply_cell_format(self, cell, cell_format: CellFormat) -> None:
        """셀 스타일 적용"""
        if cell_format.bold or cell_format.font_color or cell_format.font_size:
            font = copy(cell.font) if cell.font else Font()
            if cell_format.bold:
                font.bold = True
            if cell_format.font_color:
                font.color = cell_format.font_color
            if cell_format.font_size:
                font.size = cell_format.font_size
            cell.font = font

        if cell_format.fill_color:
            cell.fill = PatternFill(
                start_color=cell_format.fill_color,
                end_color=cell_format.fill_color,
                fill_type="solid",
            )

        if (
            cell_format.horizontal_alignment
            or cell_format.vertical_alignment
            or cell_format.wrap_text
        ):
            alignment = copy(cell.alignment) if cell.alignment else Alignment()
            if cell_format.horizontal_alignment:
                alignment.horizontal = cell_format.horizontal_alignment
            if cell_format.vertical_alignment:
                alignment.vertical = cell_format.vertical_alignment
            if cell_format.wrap_text:
                alignment.wrap_text = True
            cell.alignment = alignment

        if cell_format.number_format:
            cell.number_format = cell_format.number_format

    def replicate_formula(
        self, source_row: int, column: int, first_row: int, row_count: int
    ) -> None:
        source = self._cell(source_row, column)
        formula = source.value
        if not isinstance(formula, str) or not formula.startswith("="):
            raise WriteFailure(
                f"No formula to replicate at {source.coordinate}",
                details={"cell": source.coordinate},
            )

        translator = Translator(formula, origin=source.coordinate)
        for row_index in range(first_row, first_row + row_count):
            target = self._cell(row_index, column)
            target.value = translator.translate_formula(target.coordinate)

    def set_column_width(self, column: int, width: float) -> None:
        self.worksheet.column_dimensions[get_column_letter(column + 1)].width = width

    def commit(self) -> None:
        if not self.output_path:
            raise WriteFailure("No output path configured for workbook commit")

        try:
            self.workbook.save(self.output_path)
        except OSError as e:
            raise WriteFailure(
                f"Failed to save workbook: {e}", details={"output_path": self.output_path}
            ) from e

        logger.debug(f"Workbook committed: {self.output_path}")
