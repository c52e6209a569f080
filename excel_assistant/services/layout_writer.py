"""
Layout writer
파싱 결과를 그리드 좌표로 배치하고 서식과 함께 기록한다

Two modes:
- side-append: suggestion columns written right of the user's selection
- table-block: extracted tables stacked top-down on a worksheet
- summary: label/value rows of a quick analysis sheet
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence
import logging

from ..core.config import settings
from ..core.exceptions import WriteFailure
from ..grid.collaborator import GridCollaborator
from ..grid.models import CellFormat, FormulaFill, GridWrite, Selection
from ..grid.style_manager import StyleManager
from ..parsing.suggestion_parser import Suggestion
from ..parsing.table_extractor import Table

logger = logging.getLogger(__name__)


@dataclass
class SideAppendPlan:
    """Header/formula writes plus fill-down replications for suggestion columns"""
    writes: List[GridWrite] = field(default_factory=list)
    fills: List[FormulaFill] = field(default_factory=list)

    @property
    def header_count(self) -> int:
        return sum(1 for write in self.writes if not write.is_formula)

    @property
    def formula_count(self) -> int:
        return sum(1 for write in self.writes if write.is_formula)


@dataclass
class TablePlan:
    """Writes of one table; end_row is the first row after its content"""
    title: str
    start_row: int
    end_row: int
    writes: List[GridWrite] = field(default_factory=list)


class LayoutWriter:
    """Computes grid coordinates and formatting, then writes through a grid collaborator"""

    TABLE_SPACING = 2
    DATA_COLUMNS = 5  # B:F get the data column width

    def __init__(
        self,
        style_manager: Optional[StyleManager] = None,
        max_suggestions: Optional[int] = None,
    ):
        self.styles = style_manager or StyleManager()
        self.max_suggestions = (
            settings.MAX_SUGGESTIONS if max_suggestions is None else max_suggestions
        )

    # ------------------------------------------------------------------
    # Side-append mode
    # ------------------------------------------------------------------

    def plan_side_append(
        self, anchor: Selection, suggestions: Sequence[Suggestion]
    ) -> SideAppendPlan:
        plan = SideAppendPlan()
        header_format = self.styles.suggestion_header()

        for offset, suggestion in enumerate(suggestions[: self.max_suggestions]):
            column = anchor.next_column + offset

            plan.writes.append(
                GridWrite(
                    row=anchor.row_index,
                    column=column,
                    value=suggestion.header,
                    format=header_format,
                )
            )

            if not suggestion.is_applicable:
                continue

            first_data_row = anchor.row_index + 1
            plan.writes.append(
                GridWrite(row=first_data_row, column=column, formula=suggestion.formula)
            )

            # one definition, broadcast down the rest of the selection
            if anchor.row_count > 2:
                plan.fills.append(
                    FormulaFill(
                        source_row=first_data_row,
                        column=column,
                        first_row=anchor.row_index + 2,
                        row_count=anchor.row_count - 2,
                    )
                )

        return plan

    def write_side_append(
        self,
        grid: GridCollaborator,
        anchor: Selection,
        suggestions: Sequence[Suggestion],
    ) -> SideAppendPlan:
        plan = self.plan_side_append(anchor, suggestions)

        try:
            self.apply_writes(grid, plan.writes)
            for fill in plan.fills:
                grid.replicate_formula(fill.source_row, fill.column, fill.first_row, fill.row_count)
            grid.commit()
        except WriteFailure:
            raise
        except Exception as e:
            raise WriteFailure(f"Failed to write suggestion columns: {e}") from e

        logger.info(
            f"Side-append: {plan.header_count} headers, {plan.formula_count} formulas, "
            f"{len(plan.fills)} fill-downs at column {anchor.next_column}"
        )
        return plan

    # ------------------------------------------------------------------
    # Table-block mode
    # ------------------------------------------------------------------

    def plan_table(self, table: Table, start_row: int) -> TablePlan:
        writes: List[GridWrite] = []
        current_row = start_row

        if table.has_title:
            writes.append(
                GridWrite(
                    row=current_row,
                    column=0,
                    value=table.title,
                    format=self.styles.table_title(),
                )
            )
            current_row += 1

        for row_index, row in enumerate(table.rows):
            for column_index, token in enumerate(row):
                writes.append(
                    GridWrite(
                        row=current_row,
                        column=column_index,
                        value=token.payload,
                        format=self.styles.table_cell(token, row_index, column_index),
                    )
                )
            current_row += 1

        return TablePlan(
            title=table.title, start_row=start_row, end_row=current_row, writes=writes
        )

    def plan_tables(self, tables: Sequence[Table]) -> List[TablePlan]:
        plans = []
        current_row = 0
        for table in tables:
            plan = self.plan_table(table, current_row)
            plans.append(plan)
            current_row = plan.end_row + self.TABLE_SPACING
        return plans

    def write_tables(
        self, grid: GridCollaborator, tables: Sequence[Table]
    ) -> List[TablePlan]:
        """Write every table; each table is committed on its own so a later
        failure leaves earlier tables intact."""
        plans = self.plan_tables(tables)

        for written, plan in enumerate(plans):
            try:
                self.apply_writes(grid, plan.writes)
                grid.commit()
            except Exception as e:
                logger.error(
                    f"Writing table {written + 1}/{len(plans)} "
                    f"({plan.title or 'untitled'}) failed: {e}"
                )
                message = e.message if isinstance(e, WriteFailure) else str(e)
                raise WriteFailure(
                    f"Failed to write table '{plan.title or 'Table'}': {message}",
                    tables_written=written,
                    details={"start_row": plan.start_row},
                ) from e

        try:
            self.format_table_columns(grid)
            grid.commit()
        except Exception as e:
            message = e.message if isinstance(e, WriteFailure) else str(e)
            raise WriteFailure(
                f"Failed to format table columns: {message}", tables_written=len(plans)
            ) from e

        logger.info(f"Table-block: {len(plans)} tables written")
        return plans

    def format_table_columns(self, grid: GridCollaborator) -> None:
        grid.set_column_width(0, settings.TITLE_COLUMN_WIDTH)
        for column in range(1, self.DATA_COLUMNS + 1):
            grid.set_column_width(column, settings.DATA_COLUMN_WIDTH)

    # ------------------------------------------------------------------
    # Summary block
    # ------------------------------------------------------------------

    def plan_summary(self, rows: Sequence[Sequence[Any]]) -> List[GridWrite]:
        """Label/value rows from A1 down; blank cells are left unwritten"""
        writes: List[GridWrite] = []
        for row_index, row in enumerate(rows):
            for column_index, value in enumerate(row):
                if value is None or value == "":
                    continue
                is_heading = row_index == 0 and column_index == 0
                writes.append(
                    GridWrite(
                        row=row_index,
                        column=column_index,
                        value=value,
                        format=self.styles.summary_heading() if is_heading else CellFormat(),
                    )
                )
        return writes

    def write_summary(self, grid: GridCollaborator, rows: Sequence[Sequence[Any]]) -> List[GridWrite]:
        writes = self.plan_summary(rows)
        try:
            self.apply_writes(grid, writes)
            grid.set_column_width(0, settings.SUMMARY_LABEL_COLUMN_WIDTH)
            grid.set_column_width(1, settings.SUMMARY_VALUE_COLUMN_WIDTH)
            grid.commit()
        except WriteFailure:
            raise
        except Exception as e:
            raise WriteFailure(f"Failed to write summary: {e}") from e

        logger.info(f"Summary: {len(rows)} rows, {len(writes)} cells")
        return writes

    # ------------------------------------------------------------------

    @staticmethod
    def apply_writes(grid: GridCollaborator, writes: Sequence[GridWrite]) -> None:
        for write in writes:
            if write.is_formula:
                grid.write_formula(write.row, write.column, write.formula)
            else:
                grid.write_value(write.row, write.column, write.value)

            if not write.format.is_empty:
                grid.apply_format(write.row, write.column, write.format)
