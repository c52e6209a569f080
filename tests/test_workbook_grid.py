"""
openpyxl 그리드 테스트
실제 워크북 파일에 대해 선택 영역 읽기, 쓰기, 채우기, 저장을 검증
"""

import openpyxl
import pytest

from excel_assistant.core.excel_utils import ExcelUtils
from excel_assistant.core.exceptions import SelectionError, WorkbookLoadError, WriteFailure
from excel_assistant.grid.models import CellFormat
from excel_assistant.grid.workbook_grid import WorkbookGrid
from excel_assistant.parsing.suggestion_parser import Suggestion
from excel_assistant.parsing.table_extractor import extract_tables
from excel_assistant.services.layout_writer import LayoutWriter


class TestExcelUtils:
    """A1 참조 변환 테스트"""

    @pytest.mark.parametrize("column, index", [("A", 0), ("Z", 25), ("AA", 26), ("AZ", 51)])
    def test_column_round_trip(self, column, index):
        assert ExcelUtils.column_to_index(column) == index
        assert ExcelUtils.index_to_column(index) == column

    @pytest.mark.parametrize(
        "reference, expected",
        [
            ("B2:D6", (1, 1, 5, 3)),
            ("$B$2:$D$6", (1, 1, 5, 3)),
            ("D6:B2", (1, 1, 5, 3)),
            ("C3", (2, 2, 1, 1)),
            ("'My Sheet'!A1:B2", (0, 0, 2, 2)),
        ],
    )
    def test_parse_range(self, reference, expected):
        assert ExcelUtils.parse_range(reference) == expected

    def test_invalid_reference(self):
        with pytest.raises(SelectionError):
            ExcelUtils.parse_range("not a range")

    def test_to_a1(self):
        assert ExcelUtils.to_a1(0, 0) == "A1"
        assert ExcelUtils.to_a1(9, 27) == "AB10"


class TestWorkbookGrid:
    """워크북 그리드 테스트"""

    def test_explicit_selection(self, workbook_path):
        grid = WorkbookGrid.open(workbook_path, selection="A1:C5")
        selection = grid.get_selection()

        assert (selection.row_index, selection.column_index) == (0, 0)
        assert (selection.row_count, selection.column_count) == (5, 3)
        assert selection.values[0] == ["Product", "Units", "Price"]
        assert selection.values[1] == ["Apples", 10, 2.5]
        assert selection.address == "Sheet1!A1:C5"
        assert selection.next_column == 3

    def test_selection_from_sheet_view(self, tmp_path):
        workbook = openpyxl.Workbook()
        sheet = workbook.active
        sheet["B2"] = 1
        sheet.sheet_view.selection[0].sqref = "B2:C4"
        path = tmp_path / "view.xlsx"
        workbook.save(path)

        selection = WorkbookGrid.open(str(path)).get_selection()
        assert (selection.row_index, selection.column_index) == (1, 1)
        assert (selection.row_count, selection.column_count) == (3, 2)

    def test_missing_file(self, tmp_path):
        with pytest.raises(WorkbookLoadError):
            WorkbookGrid.open(str(tmp_path / "missing.xlsx"))

    def test_missing_sheet(self, workbook_path):
        with pytest.raises(SelectionError):
            WorkbookGrid.open(workbook_path, sheet_name="Nope")

    def test_text_starting_with_equals_stays_text(self):
        grid = WorkbookGrid(openpyxl.Workbook())
        grid.write_value(0, 0, "=not a formula")
        cell = grid.worksheet["A1"]
        assert cell.value == "=not a formula"
        assert cell.data_type == "s"

    def test_write_formula_requires_equals(self):
        grid = WorkbookGrid(openpyxl.Workbook())
        with pytest.raises(WriteFailure):
            grid.write_formula(0, 0, "SUM(A1:A3)")

    def test_replicate_formula_shifts_references(self):
        grid = WorkbookGrid(openpyxl.Workbook())
        grid.write_formula(1, 3, "=B2*C2")
        grid.replicate_formula(1, 3, 2, 3)

        sheet = grid.worksheet
        assert sheet["D3"].value == "=B3*C3"
        assert sheet["D5"].value == "=B5*C5"
        assert sheet["D6"].value is None

    def test_apply_format(self):
        grid = WorkbookGrid(openpyxl.Workbook())
        grid.write_value(0, 0, 1234.0)
        grid.apply_format(
            0, 0,
            CellFormat(bold=True, fill_color="4472C4", font_color="FFFFFF",
                       horizontal_alignment="right", number_format="#,##0"),
        )
        cell = grid.worksheet["A1"]
        assert cell.font.bold
        assert cell.fill.fill_type == "solid"
        assert cell.fill.start_color.rgb.endswith("4472C4")
        assert cell.font.color.rgb.endswith("FFFFFF")
        assert cell.alignment.horizontal == "right"
        assert cell.number_format == "#,##0"

    def test_new_sheet_is_activated(self, workbook_path):
        grid = WorkbookGrid.open(workbook_path)
        assert not grid.has_sheet("Claude_Results")

        name = grid.get_or_create_sheet("Claude_Results")

        assert name == "Claude_Results"
        assert grid.has_sheet(name)
        assert grid.workbook.active.title == name
        assert grid.sheet_name == name

    def test_commit_to_unwritable_path(self, tmp_path):
        grid = WorkbookGrid(openpyxl.Workbook(), output_path=str(tmp_path / "no" / "such" / "dir.xlsx"))
        with pytest.raises(WriteFailure):
            grid.commit()

    def test_commit_without_output_path(self):
        with pytest.raises(WriteFailure):
            WorkbookGrid(openpyxl.Workbook()).commit()


class TestWorkbookLayout:
    """LayoutWriter + WorkbookGrid 통합 테스트"""

    def test_side_append_fills_selection(self, workbook_path, tmp_path):
        output = str(tmp_path / "out.xlsx")
        grid = WorkbookGrid.open(workbook_path, output_path=output, selection="A1:C5")
        selection = grid.get_selection()

        LayoutWriter().write_side_append(
            grid, selection,
            [Suggestion(header="Revenue", formula="=B2*C2"), Suggestion(header="Note")],
        )

        sheet = openpyxl.load_workbook(output)["Sheet1"]
        assert sheet["D1"].value == "Revenue"
        assert sheet["D1"].font.bold
        assert sheet["D2"].value == "=B2*C2"
        assert sheet["D3"].value == "=B3*C3"
        assert sheet["D5"].value == "=B5*C5"
        assert sheet["D6"].value is None
        assert sheet["E1"].value == "Note"
        assert sheet["E2"].value is None

    def test_tables_on_new_sheet(self, workbook_path, tmp_path, table_reply):
        output = str(tmp_path / "tables.xlsx")
        grid = WorkbookGrid.open(workbook_path, output_path=output)
        grid.get_or_create_sheet("Claude_Test")

        LayoutWriter().write_tables(grid, extract_tables(table_reply))

        workbook = openpyxl.load_workbook(output)
        sheet = workbook["Claude_Test"]
        assert workbook["Sheet1"]["A1"].value == "Product"

        assert sheet["A1"].value == "Revenue Model"
        assert sheet["A1"].fill.start_color.rgb.endswith("4472C4")
        assert sheet["B3"].value == 1000
        assert sheet["B3"].number_format == "#,##0"
        assert sheet["C4"].value == pytest.approx(0.5)
        assert sheet["C4"].number_format == "0%"
        assert sheet["C3"].value == "—"
        assert sheet["A5"].value is None
        assert sheet["A7"].value == "Cost Summary"
        assert sheet["B9"].value == 12000
        assert sheet.column_dimensions["A"].width > sheet.column_dimensions["B"].width
