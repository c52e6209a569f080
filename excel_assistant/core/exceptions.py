"""
Custom Exceptions for the Excel assistant
예외 계층: 모델 호출 실패, 그리드 쓰기 실패, 선택 영역 오류
"""
from typing import Optional, Dict, Any
from enum import Enum


class ErrorCategory(Enum):
    """오류 카테고리"""
    NETWORK = "network"      # 모델 호출 / 릴레이 실패
    WRITE = "write"          # 그리드 쓰기 거부
    INPUT = "input"          # 잘못된 선택 영역 / 요청


class AssistantError(Exception):
    """Base exception for every failure the action boundary reports"""

    category = ErrorCategory.INPUT

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "ASSISTANT_ERROR"
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 변환"""
        return {
            "error": True,
            "error_code": self.code,
            "category": self.category.value,
            "message": self.message,
            "details": self.details,
        }


class UpstreamFailure(AssistantError):
    """Model call or relay returned a non-success outcome"""

    category = ErrorCategory.NETWORK


class NetworkError(UpstreamFailure):
    """Provider unreachable or timed out"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="NETWORK_ERROR", details=details)


class AuthError(UpstreamFailure):
    """Missing or rejected credential"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="AUTH_ERROR", details=details)


class ProviderError(UpstreamFailure):
    """Provider answered with an error status"""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code="PROVIDER_ERROR", details=details)
        self.status_code = status_code


class WriteFailure(AssistantError):
    """A grid mutation was rejected; earlier committed tables are kept"""

    category = ErrorCategory.WRITE

    def __init__(
        self,
        message: str,
        tables_written: int = 0,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code="WRITE_FAILURE", details=details)
        self.tables_written = tables_written


class WorkbookLoadError(AssistantError):
    """Workbook file could not be opened"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="WORKBOOK_LOAD_ERROR", details=details)


class SelectionError(AssistantError):
    """Selection or range reference cannot be used"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="SELECTION_ERROR", details=details)
