"""
Core 테스트 - 응답 봉투, 예외 계층, 로깅 설정
"""

import json
import logging

import pytest

from excel_assistant.core.config import Settings
from excel_assistant.core.exceptions import (
    AuthError,
    ErrorCategory,
    ProviderError,
    SelectionError,
    WriteFailure,
)
from excel_assistant.core.logging_config import (
    ACTION_METRICS_LOGGER,
    CustomFormatter,
    log_action_metrics,
    setup_logging,
)
from excel_assistant.core.responses import ResponseBuilder


class TestExceptions:

    @pytest.mark.parametrize(
        "error, category",
        [
            (AuthError("no key"), ErrorCategory.NETWORK),
            (ProviderError("overloaded", status_code=529), ErrorCategory.NETWORK),
            (WriteFailure("rejected", tables_written=2), ErrorCategory.WRITE),
            (SelectionError("bad range"), ErrorCategory.INPUT),
        ],
    )
    def test_categories(self, error, category):
        assert error.category == category
        assert error.to_dict()["category"] == category.value

    def test_to_dict(self):
        error = WriteFailure("rejected", tables_written=1, details={"start_row": 6})
        assert error.to_dict() == {
            "error": True,
            "error_code": "WRITE_FAILURE",
            "category": "write",
            "message": "rejected",
            "details": {"start_row": 6},
        }
        assert error.tables_written == 1


class TestResponseBuilder:

    def test_success(self):
        response = ResponseBuilder.success({"saved": True}, message="ok", request_id="r-1")
        assert response["status"] == "success"
        assert response["data"] == {"saved": True}
        assert response["request_id"] == "r-1"
        assert "timestamp" in response

    def test_from_assistant_error(self):
        response = ResponseBuilder.from_exception(SelectionError("Invalid range reference: x"))
        assert response["status"] == "error"
        assert response["error_code"] == "SELECTION_ERROR"
        assert response["category"] == "input"
        assert response["message"] == "Invalid range reference: x"

    def test_from_unexpected_exception(self):
        response = ResponseBuilder.from_exception(ValueError("boom"))
        assert response["error_code"] == "ValueError"
        assert response["category"] is None
        assert response["details"] == {}


class TestLogging:
    """로깅 설정 테스트"""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        level = root.level
        yield
        for handler in root.handlers[:]:
            if isinstance(handler, logging.FileHandler) or isinstance(handler.formatter, CustomFormatter):
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)

    def test_file_handler_and_level(self, tmp_path):
        log_file = tmp_path / "logs" / "assistant.log"

        setup_logging(level="warning", log_file=str(log_file), enable_debug=False)
        logging.getLogger("excel_assistant.test").warning("written to file")

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len([h for h in root.handlers if isinstance(h, logging.FileHandler)]) == 1
        assert "written to file" in log_file.read_text(encoding="utf-8")
        assert logging.getLogger("anthropic").level == logging.WARNING

    def test_debug_overrides_level(self):
        setup_logging(level="ERROR", enable_debug=True)
        assert logging.getLogger().level == logging.DEBUG

    def test_formatter_without_color(self):
        formatter = CustomFormatter("%(levelname)s %(message)s", use_color=False)
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, None)
        assert formatter.format(record) == "ERROR failed"

    def test_formatter_with_color(self):
        formatter = CustomFormatter("%(message)s", use_color=True)
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, None)
        assert formatter.format(record) == "\033[31mfailed\033[0m"

    def test_action_metrics(self, caplog):
        with caplog.at_level(logging.INFO, logger=ACTION_METRICS_LOGGER):
            log_action_metrics("custom_request", 1.23456, kind="success", tables_written=2)

        record = [r for r in caplog.records if r.name == ACTION_METRICS_LOGGER][-1]
        metrics = json.loads(record.getMessage())
        assert metrics["action"] == "custom_request"
        assert metrics["duration_seconds"] == 1.235
        assert metrics["tables_written"] == 2


class TestSettings:
    """레이아웃 기본값 테스트 (열 너비는 문자 단위)"""

    def test_column_width_defaults(self):
        fields = Settings.model_fields
        assert fields["TITLE_COLUMN_WIDTH"].default == 28.0
        assert fields["DATA_COLUMN_WIDTH"].default == 14.0
        assert fields["RESULTS_COLUMN_WIDTH"].default == 11.0
        assert fields["RESULTS_COLUMN_WIDTH"].default < fields["DATA_COLUMN_WIDTH"].default

    def test_session_limits(self):
        fields = Settings.model_fields
        assert fields["MAX_SESSIONS"].default > 0
        assert fields["STATUS_HISTORY_SIZE"].default > 0
