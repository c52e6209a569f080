"""
Assistant services: model caller, layout writer and user actions
"""

from .layout_writer import LayoutWriter, SideAppendPlan, TablePlan
from .claude_service import ClaudeService
from .status_ui import StatusKind, StatusMessage, UICollaborator, SessionUI
from .assistant_service import AssistantService, ActionResult
from .session_store import SessionStore, session_store

__all__ = [
    "LayoutWriter",
    "SideAppendPlan",
    "TablePlan",
    "ClaudeService",
    "StatusKind",
    "StatusMessage",
    "UICollaborator",
    "SessionUI",
    "AssistantService",
    "ActionResult",
    "SessionStore",
    "session_store",
]
