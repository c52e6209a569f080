"""
Model relay endpoint
POST {apiKey, prompt} -> {content}; upstream errors pass through with their status
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Optional
import logging

from excel_assistant.core.exceptions import AuthError, NetworkError, ProviderError
from excel_assistant.services.claude_service import ClaudeService

logger = logging.getLogger(__name__)

router = APIRouter()


class RelayRequest(BaseModel):
    apiKey: Optional[str] = None
    prompt: str = ""


def get_model_caller() -> ClaudeService:
    return ClaudeService()


def _error(status_code: int, error: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error})


@router.post("/claude")
async def relay_claude(
    request: RelayRequest, caller: ClaudeService = Depends(get_model_caller)
):
    if not request.apiKey:
        return _error(400, {"message": "API key is required"})

    try:
        content = await caller.call(request.prompt, api_key=request.apiKey)
    except (AuthError, ProviderError) as e:
        status_code = getattr(e, "status_code", None) or e.details.get("status_code", 401)
        return _error(status_code, e.details.get("error") or {"message": e.message})
    except NetworkError as e:
        logger.error(f"Relay error: {e.message}")
        return _error(500, {"message": "Internal server error"})
    except Exception as e:
        logger.error(f"Relay error: {e}", exc_info=True)
        return _error(500, {"message": "Internal server error"})

    return {"content": content}
