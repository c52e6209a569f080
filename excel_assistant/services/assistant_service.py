"""
Assistant action service
사용자 동작 하나당 하나의 try/finally 경계: 모델 호출 -> 파싱 -> 그리드 기록 -> 상태 표시
"""

from dataclasses import dataclass
from datetime import datetime, timezone
import time
from typing import Awaitable, Callable, Optional
import logging

from ..core.config import settings
from ..core.exceptions import AssistantError, WriteFailure
from ..core.logging_config import log_action_metrics
from ..grid.collaborator import GridCollaborator
from ..grid.models import Selection
from ..parsing.suggestion_parser import parse_formula_response, parse_suggestions
from ..parsing.table_extractor import extract_tables
from .claude_service import ClaudeService
from .layout_writer import LayoutWriter
from .prompts import (
    build_analysis_prompt,
    build_formula_prompt,
    build_insights_prompt,
    convert_range_to_text,
)
from .status_ui import SessionUI, StatusKind, UICollaborator

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Outcome of one user action as shown to the user"""
    action: str
    kind: StatusKind
    message: str
    response_text: Optional[str] = None
    sheet_name: Optional[str] = None
    columns_added: int = 0
    tables_written: int = 0

    @property
    def succeeded(self) -> bool:
        return self.kind == StatusKind.SUCCESS


class AssistantService:
    """Runs user actions against one grid and remembers the last reply"""

    SAMPLE_ROWS = 5

    def __init__(
        self,
        model_caller: Optional[ClaudeService] = None,
        layout_writer: Optional[LayoutWriter] = None,
        ui: Optional[UICollaborator] = None,
    ):
        self.model_caller = model_caller or ClaudeService()
        self.writer = layout_writer or LayoutWriter()
        self.ui = ui or SessionUI()
        self.last_response: Optional[str] = None

    # ------------------------------------------------------------------
    # Public actions
    # ------------------------------------------------------------------

    async def analyze_selection(
        self, grid: GridCollaborator, api_key: Optional[str] = None
    ) -> ActionResult:
        async def handler() -> ActionResult:
            self.ui.show_status("Getting selected data...", StatusKind.INFO)
            selection = grid.get_selection()
            if selection.is_single_cell:
                return self._finish(
                    "analyze_selection", "Please select a larger data range", StatusKind.ERROR
                )

            prompt = build_analysis_prompt(convert_range_to_text(selection.values))
            return await self._apply_suggestions(
                "analyze_selection", grid, selection, prompt, api_key,
                "Analysis applied to spreadsheet!",
            )

        return await self._run("analyze_selection", handler)

    async def create_formula(
        self, grid: GridCollaborator, task: Optional[str], api_key: Optional[str] = None
    ) -> ActionResult:
        async def handler() -> ActionResult:
            if not task or not task.strip():
                # cancelled prompt: nothing to report
                return ActionResult(
                    action="create_formula", kind=StatusKind.INFO, message="No formula task given"
                )

            selection = grid.get_selection()
            prompt = build_formula_prompt(task.strip(), convert_range_to_text(selection.values))
            response = await self._call_model(prompt, api_key)

            suggestion = parse_formula_response(response)
            if suggestion is None:
                return self._finish(
                    "create_formula", "No formula found in response", StatusKind.INFO,
                    response_text=response,
                )

            plan = self.writer.write_side_append(grid, selection, [suggestion])
            return self._finish(
                "create_formula", "Formula applied to spreadsheet!", StatusKind.SUCCESS,
                response_text=response, columns_added=plan.header_count,
            )

        return await self._run("create_formula", handler)

    async def data_insights(
        self, grid: GridCollaborator, api_key: Optional[str] = None
    ) -> ActionResult:
        async def handler() -> ActionResult:
            selection = grid.get_selection()
            prompt = build_insights_prompt(convert_range_to_text(selection.values))
            return await self._apply_suggestions(
                "data_insights", grid, selection, prompt, api_key,
                "Insights added as new columns!",
            )

        return await self._run("data_insights", handler)

    async def custom_request(
        self, grid: GridCollaborator, prompt: Optional[str], api_key: Optional[str] = None
    ) -> ActionResult:
        async def handler() -> ActionResult:
            request = (prompt or "").strip()
            if not request:
                return self._finish("custom_request", "Please enter a request", StatusKind.ERROR)

            response = await self._call_model(request, api_key)

            tables = extract_tables(response)
            if not tables:
                return self._finish(
                    "custom_request", "No code block tables found in response", StatusKind.INFO,
                    response_text=response,
                )

            sheet_name = grid.get_or_create_sheet(self._new_sheet_name(grid))
            plans = self.writer.write_tables(grid, tables)
            return self._finish(
                "custom_request", "Request completed and applied to Excel!", StatusKind.SUCCESS,
                response_text=response, sheet_name=sheet_name, tables_written=len(plans),
            )

        return await self._run("custom_request", handler)

    async def insert_results(self, grid: GridCollaborator) -> ActionResult:
        async def handler() -> ActionResult:
            if not self.last_response:
                return self._finish("insert_results", "No results to insert", StatusKind.ERROR)

            sheet_name = grid.get_or_create_sheet(self._new_sheet_name(grid))
            grid.write_value(0, 0, self.last_response)
            grid.apply_format(0, 0, self.writer.styles.results_text())
            grid.set_column_width(0, settings.RESULTS_COLUMN_WIDTH)
            grid.commit()

            return self._finish(
                "insert_results", "Results inserted in new sheet!", StatusKind.SUCCESS,
                response_text=self.last_response, sheet_name=sheet_name,
            )

        return await self._run("insert_results", handler)

    async def quick_analysis(self, grid: GridCollaborator) -> ActionResult:
        """Summary sheet for the selection without calling the model"""
        async def handler() -> ActionResult:
            selection = grid.get_selection()
            if selection.is_single_cell:
                return self._finish(
                    "quick_analysis", "Please select a data range with multiple cells",
                    StatusKind.ERROR,
                )

            moment = datetime.now(timezone.utc)
            sheet_name = grid.get_or_create_sheet(
                self._new_sheet_name(grid, settings.QUICK_ANALYSIS_PREFIX, moment)
            )
            sample_rows = convert_range_to_text(selection.values).split("\n")[: self.SAMPLE_ROWS]
            rows = [
                ["Quick Data Analysis", ""],
                ["Range Analyzed:", selection.address],
                ["Dimensions:", f"{selection.row_count} rows × {selection.column_count} columns"],
                ["Timestamp:", moment.strftime("%Y-%m-%d %H:%M:%S UTC")],
                ["", ""],
                ["Sample Data:", ""],
            ] + [[line, ""] for line in sample_rows]

            self.writer.write_summary(grid, rows)
            return self._finish(
                "quick_analysis", "Quick analysis complete! Check the new worksheet.",
                StatusKind.SUCCESS, sheet_name=sheet_name,
            )

        return await self._run("quick_analysis", handler)

    def save_api_key(self, api_key: str) -> None:
        self.ui.persist_secret(api_key.strip())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def result_sheet_name(now: Optional[datetime] = None, prefix: Optional[str] = None) -> str:
        """Claude_20261019T1430 (UTC, minute resolution)"""
        moment = now or datetime.now(timezone.utc)
        return f"{prefix or settings.RESULT_SHEET_PREFIX}{moment.strftime('%Y%m%dT%H%M')}"

    def _new_sheet_name(
        self,
        grid: GridCollaborator,
        prefix: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> str:
        base = self.result_sheet_name(now, prefix)
        name = base
        suffix = 2
        while grid.has_sheet(name):
            name = f"{base}_{suffix}"
            suffix += 1
        return name

    async def _run(
        self, action: str, handler: Callable[[], Awaitable[ActionResult]]
    ) -> ActionResult:
        logger.info(f"Action started: {action}")
        started = time.monotonic()
        self.ui.set_busy(True)
        try:
            result = await handler()
        except Exception as e:
            message = e.message if isinstance(e, AssistantError) else str(e)
            logger.error(f"Action {action} failed: {message}", exc_info=not isinstance(e, AssistantError))
            result = self._finish(
                action, f"Error: {message}", StatusKind.ERROR,
                tables_written=e.tables_written if isinstance(e, WriteFailure) else 0,
            )
        finally:
            self.ui.set_busy(False)

        log_action_metrics(
            action,
            time.monotonic() - started,
            kind=result.kind.value,
            columns_added=result.columns_added,
            tables_written=result.tables_written,
        )
        return result

    async def _call_model(self, prompt: str, api_key: Optional[str]) -> str:
        response = await self.model_caller.call(prompt, api_key=api_key or self.ui.restore_secret())
        self.last_response = response
        self.ui.display_result(response)
        return response

    async def _apply_suggestions(
        self,
        action: str,
        grid: GridCollaborator,
        selection: Selection,
        prompt: str,
        api_key: Optional[str],
        success_message: str,
    ) -> ActionResult:
        response = await self._call_model(prompt, api_key)

        suggestions = parse_suggestions(response)
        if not suggestions:
            return self._finish(
                action, "No actionable columns found in response", StatusKind.INFO,
                response_text=response,
            )

        plan = self.writer.write_side_append(grid, selection, suggestions)
        return self._finish(
            action, success_message, StatusKind.SUCCESS,
            response_text=response, columns_added=plan.header_count,
        )

    def _finish(self, action: str, message: str, kind: StatusKind, **fields) -> ActionResult:
        self.ui.show_status(message, kind)
        return ActionResult(action=action, kind=kind, message=message, **fields)
