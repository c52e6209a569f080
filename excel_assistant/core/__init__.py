"""
Core configuration, logging and error types
"""

from .config import settings, Settings
from .exceptions import (
    ErrorCategory,
    AssistantError,
    UpstreamFailure,
    NetworkError,
    AuthError,
    ProviderError,
    WriteFailure,
    SelectionError,
    WorkbookLoadError,
)

__all__ = [
    "settings",
    "Settings",
    "ErrorCategory",
    "AssistantError",
    "UpstreamFailure",
    "NetworkError",
    "AuthError",
    "ProviderError",
    "WriteFailure",
    "SelectionError",
    "WorkbookLoadError",
]
