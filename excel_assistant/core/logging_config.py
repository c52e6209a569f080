"""
중앙화된 로깅 설정
API 와 동작 서비스가 같은 포맷/레벨을 쓰도록 루트 로거를 한 번 구성한다
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Optional

from .config import settings

DEFAULT_FORMAT = (
    '%(asctime)s - %(name)s - %(levelname)s - '
    '[%(filename)s:%(lineno)d] - %(message)s'
)

# 요청마다 INFO 를 남기는 외부 라이브러리
NOISY_LOGGERS = ('httpx', 'httpcore', 'anthropic', 'openpyxl')

ACTION_METRICS_LOGGER = 'excel_assistant.actions'


class CustomFormatter(logging.Formatter):
    """레벨별 색상을 입히는 콘솔 포맷터 (tty 일 때만)"""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, fmt: Optional[str] = None, use_color: Optional[bool] = None):
        super().__init__(fmt)
        if use_color is None:
            use_color = sys.stdout.isatty() and os.getenv('FORCE_COLOR', '').lower() != 'false'
        self.use_color = use_color

    def format(self, record):
        formatted = super().format(record)
        if not self.use_color:
            return formatted
        return f"{self.COLORS.get(record.levelname, '')}{formatted}{self.RESET}"


def _file_handler(file_path: str, level: int, format_str: str) -> logging.Handler:
    log_dir = os.path.dirname(file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    handler = logging.FileHandler(file_path, encoding='utf-8')
    handler.setLevel(level)
    # 파일에는 색상 코드를 쓰지 않는다
    handler.setFormatter(logging.Formatter(format_str))
    return handler


def setup_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    enable_debug: Optional[bool] = None,
    log_file: Optional[str] = None
) -> None:
    """
    루트 로거 구성 - 인자가 없으면 settings(LOG_LEVEL, LOG_FORMAT, LOG_FILE, DEBUG)를 따른다

    Args:
        level: 로깅 레벨 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: 로그 포맷 문자열
        enable_debug: True 이면 level 과 무관하게 DEBUG
        log_file: 로그 파일 경로 (선택사항)
    """
    debug_mode = settings.DEBUG if enable_debug is None else enable_debug
    level_name = 'DEBUG' if debug_mode else (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    format_str = format_string or settings.LOG_FORMAT or DEFAULT_FORMAT

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # 재호출 시 핸들러가 중복되지 않도록 교체
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(CustomFormatter(format_str))
    root_logger.addHandler(console_handler)

    file_path = log_file or settings.LOG_FILE
    if file_path:
        root_logger.addHandler(_file_handler(file_path, log_level, format_str))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"로깅 초기화: level={level_name}, file={file_path or '-'}")


def log_action_metrics(action: str, duration: float, **fields: Any) -> None:
    """
    사용자 동작 한 번의 결과를 JSON 한 줄로 기록

    Args:
        action: 동작 이름 (analyze_selection, custom_request, ...)
        duration: 소요 시간 (초)
        **fields: 상태 종류, 추가된 열 수 등
    """
    metrics = {
        "action": action,
        "duration_seconds": round(duration, 3),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        **fields,
    }
    logging.getLogger(ACTION_METRICS_LOGGER).info(json.dumps(metrics, ensure_ascii=False))
