"""
Standardized Response Builders
어시스턴트 엔드포인트의 성공/오류 응답 봉투
"""

from typing import Any, Dict, Optional
from datetime import datetime, timezone
import uuid
import logging

from .exceptions import AssistantError

logger = logging.getLogger(__name__)


def _envelope(status: str, message: Optional[str], request_id: Optional[str]) -> Dict[str, Any]:
    return {
        "status": status,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "request_id": request_id or str(uuid.uuid4()),
    }


class ResponseBuilder:
    """표준 응답 빌더"""

    @staticmethod
    def success(
        data: Any, message: Optional[str] = None, request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        성공 응답 생성

        Args:
            data: 응답 데이터 (동작 결과, 저장 여부 등)
            message: 사용자에게 보여준 상태 메시지
            request_id: 요청 ID (없으면 새로 발급)
        """
        response = _envelope("success", message, request_id)
        response["data"] = data
        return response

    @staticmethod
    def error(
        message: str,
        error_code: Optional[str] = None,
        category: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """오류 응답 생성 - category 는 network / write / input 중 하나"""
        response = _envelope("error", message, request_id)
        response.update(
            {"error_code": error_code, "category": category, "details": details or {}}
        )
        return response

    @staticmethod
    def from_exception(
        exception: Exception, request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """AssistantError 는 코드/카테고리를 그대로 싣고, 그 외 예외는 로그를 남긴다"""
        if isinstance(exception, AssistantError):
            return ResponseBuilder.error(
                message=exception.message,
                error_code=exception.code,
                category=exception.category.value,
                details=exception.details,
                request_id=request_id,
            )

        logger.error(
            f"Unhandled {exception.__class__.__name__}: {exception}", exc_info=True
        )
        return ResponseBuilder.error(
            message=str(exception),
            error_code=exception.__class__.__name__,
            request_id=request_id,
        )
