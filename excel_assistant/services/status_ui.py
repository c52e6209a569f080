"""
UI collaborator: status messages, busy indicator, displayed reply, stored API key
"""

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Deque, Optional
import logging

from ..core.config import settings

logger = logging.getLogger(__name__)


class StatusKind(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    message: str
    kind: StatusKind


class UICollaborator(ABC):
    """Host UI hooks; none of them carry pipeline logic"""

    @abstractmethod
    def show_status(self, message: str, kind: StatusKind) -> None:
        pass

    @abstractmethod
    def set_busy(self, busy: bool) -> None:
        pass

    @abstractmethod
    def display_result(self, text: str) -> None:
        pass

    @abstractmethod
    def persist_secret(self, value: str) -> None:
        pass

    @abstractmethod
    def restore_secret(self) -> Optional[str]:
        pass


class SessionUI(UICollaborator):
    """Records UI calls in memory; the API layer reports them back to the caller"""

    def __init__(self, secret_path: Optional[str] = None, history_size: Optional[int] = None):
        # 최근 상태 메시지만 보관
        self.statuses: Deque[StatusMessage] = deque(
            maxlen=max(1, settings.STATUS_HISTORY_SIZE if history_size is None else history_size)
        )
        self.busy = False
        self.displayed_text: Optional[str] = None
        self._secret: Optional[str] = None
        self._secret_path = Path(secret_path) if secret_path else (
            Path(settings.SECRET_STORE_PATH) if settings.SECRET_STORE_PATH else None
        )

    @property
    def last_status(self) -> Optional[StatusMessage]:
        return self.statuses[-1] if self.statuses else None

    def show_status(self, message: str, kind: StatusKind) -> None:
        log = logger.error if kind == StatusKind.ERROR else logger.info
        log(f"[{kind.value}] {message}")
        self.statuses.append(StatusMessage(message=message, kind=kind))

    def set_busy(self, busy: bool) -> None:
        self.busy = busy

    def display_result(self, text: str) -> None:
        self.displayed_text = text

    def persist_secret(self, value: str) -> None:
        self._secret = value
        if self._secret_path:
            self._secret_path.parent.mkdir(parents=True, exist_ok=True)
            self._secret_path.write_text(value, encoding="utf-8")

    def restore_secret(self) -> Optional[str]:
        if self._secret:
            return self._secret
        if self._secret_path and self._secret_path.exists():
            self._secret = self._secret_path.read_text(encoding="utf-8").strip() or None
        return self._secret
