"""
Assistant action endpoints
각 엔드포인트는 워크북 하나를 열고 사용자 동작 하나를 실행한다
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional
import logging

from excel_assistant.core.exceptions import AssistantError
from excel_assistant.core.responses import ResponseBuilder
from excel_assistant.grid.workbook_grid import WorkbookGrid
from excel_assistant.services.assistant_service import ActionResult
from excel_assistant.services.session_store import SessionStore, session_store

logger = logging.getLogger(__name__)

router = APIRouter()

SESSION_ID_PATTERN = r"^[a-zA-Z0-9\-_]+$"


class WorkbookActionRequest(BaseModel):
    file_path: str = Field(..., min_length=1)
    output_path: Optional[str] = None
    sheet: Optional[str] = Field(None, max_length=31)
    selection: Optional[str] = Field(None, max_length=64)  # e.g. "B2:D6"
    session_id: Optional[str] = Field(None, pattern=SESSION_ID_PATTERN, max_length=128)
    api_key: Optional[str] = None


class FormulaRequest(WorkbookActionRequest):
    task: Optional[str] = Field(None, max_length=5000)


class CustomPromptRequest(WorkbookActionRequest):
    prompt: str = Field("", max_length=20000)


class ApiKeyRequest(BaseModel):
    api_key: str = Field(..., min_length=1)
    session_id: Optional[str] = Field(None, pattern=SESSION_ID_PATTERN, max_length=128)


def get_session_store() -> SessionStore:
    return session_store


def open_grid(request: WorkbookActionRequest) -> WorkbookGrid:
    try:
        return WorkbookGrid.open(
            request.file_path,
            output_path=request.output_path,
            sheet_name=request.sheet,
            selection=request.selection,
        )
    except AssistantError as e:
        logger.warning(f"Cannot open workbook {request.file_path}: {e.message}")
        raise HTTPException(status_code=400, detail=e.to_dict())


def action_response(result: ActionResult, grid: WorkbookGrid) -> Dict[str, Any]:
    return ResponseBuilder.success(
        data={
            "action": result.action,
            "kind": result.kind.value,
            "message": result.message,
            "response_text": result.response_text,
            "sheet_name": result.sheet_name,
            "columns_added": result.columns_added,
            "tables_written": result.tables_written,
            "output_path": grid.output_path,
        },
        message=result.message,
    )


@router.post("/analyze-selection")
async def analyze_selection(
    request: WorkbookActionRequest, store: SessionStore = Depends(get_session_store)
) -> Dict[str, Any]:
    """Suggest new columns for the selection and append them to its right"""
    grid = open_grid(request)
    result = await store.get(request.session_id).analyze_selection(grid, api_key=request.api_key)
    return action_response(result, grid)


@router.post("/create-formula")
async def create_formula(
    request: FormulaRequest, store: SessionStore = Depends(get_session_store)
) -> Dict[str, Any]:
    """Ask for one formula for a described task and fill it down beside the selection"""
    grid = open_grid(request)
    result = await store.get(request.session_id).create_formula(
        grid, request.task, api_key=request.api_key
    )
    return action_response(result, grid)


@router.post("/data-insights")
async def data_insights(
    request: WorkbookActionRequest, store: SessionStore = Depends(get_session_store)
) -> Dict[str, Any]:
    grid = open_grid(request)
    result = await store.get(request.session_id).data_insights(grid, api_key=request.api_key)
    return action_response(result, grid)


@router.post("/custom-request")
async def custom_request(
    request: CustomPromptRequest, store: SessionStore = Depends(get_session_store)
) -> Dict[str, Any]:
    """Free-form request; fenced tables in the reply become a new worksheet"""
    grid = open_grid(request)
    result = await store.get(request.session_id).custom_request(
        grid, request.prompt, api_key=request.api_key
    )
    return action_response(result, grid)


@router.post("/insert-results")
async def insert_results(
    request: WorkbookActionRequest, store: SessionStore = Depends(get_session_store)
) -> Dict[str, Any]:
    """Insert the session's last reply into a new worksheet"""
    grid = open_grid(request)
    result = await store.get(request.session_id).insert_results(grid)
    return action_response(result, grid)


@router.post("/quick-analysis")
async def quick_analysis(
    request: WorkbookActionRequest, store: SessionStore = Depends(get_session_store)
) -> Dict[str, Any]:
    """Summary sheet for the selection; no model call"""
    grid = open_grid(request)
    result = await store.get(request.session_id).quick_analysis(grid)
    return action_response(result, grid)


@router.post("/api-key")
async def save_api_key(
    request: ApiKeyRequest, store: SessionStore = Depends(get_session_store)
) -> Dict[str, Any]:
    store.get(request.session_id).save_api_key(request.api_key)
    return ResponseBuilder.success(data={"saved": True}, message="API key saved")
