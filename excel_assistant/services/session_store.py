"""
Per-session assistant services
세션별로 마지막 모델 응답(insert-results 용)을 보관한다
오래 쓰이지 않은 세션부터 LRU 로 제거한다
"""

from collections import OrderedDict
from typing import Callable, Optional
import logging

from ..core.config import settings
from .assistant_service import AssistantService

logger = logging.getLogger(__name__)

DEFAULT_SESSION = "default"


class SessionStore:
    """Keeps one AssistantService per session id, at most max_sessions of them"""

    def __init__(
        self,
        factory: Callable[[], AssistantService] = AssistantService,
        max_sessions: Optional[int] = None,
    ):
        self._factory = factory
        self.max_sessions = max(1, settings.MAX_SESSIONS if max_sessions is None else max_sessions)
        self._sessions: "OrderedDict[str, AssistantService]" = OrderedDict()

    def get(self, session_id: Optional[str] = None) -> AssistantService:
        key = session_id or DEFAULT_SESSION
        if key in self._sessions:
            self._sessions.move_to_end(key)
            return self._sessions[key]

        service = self._factory()
        self._sessions[key] = service
        logger.debug(f"Assistant session created: {key}")

        if len(self._sessions) > self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info(f"Assistant session evicted (LRU): {evicted}")
        return service

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def clear(self) -> None:
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


session_store = SessionStore()
