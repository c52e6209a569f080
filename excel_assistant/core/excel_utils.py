"""
Excel Utilities
A1 참조와 0 기반 (row, column) 좌표 사이의 변환
"""

import re
from typing import Tuple

from .exceptions import SelectionError


class ExcelUtils:
    """Excel 관련 공통 유틸리티"""

    # 컴파일된 정규식 패턴
    CELL_PATTERN = re.compile(r"^\$?([A-Z]+)\$?(\d+)$", re.IGNORECASE)
    RANGE_PATTERN = re.compile(r"^\$?([A-Z]+)\$?(\d+):\$?([A-Z]+)\$?(\d+)$", re.IGNORECASE)

    @staticmethod
    def column_to_index(column: str) -> int:
        """열 문자를 인덱스로 변환 (A=0, B=1, ...)"""
        index = 0
        for char in column.upper():
            index = index * 26 + (ord(char) - ord("A") + 1)
        return index - 1

    @staticmethod
    def index_to_column(index: int) -> str:
        """인덱스를 열 문자로 변환 (0=A, 1=B, ...)"""
        column = ""
        index += 1
        while index > 0:
            index -= 1
            column = chr(index % 26 + ord("A")) + column
            index //= 26
        return column

    @staticmethod
    def to_a1(row: int, column: int) -> str:
        """0 기반 좌표를 A1 주소로 변환 ((0, 0) -> "A1")"""
        return f"{ExcelUtils.index_to_column(column)}{row + 1}"

    @staticmethod
    def strip_sheet_name(reference: str) -> str:
        """'Sheet1'!A1:B2 -> A1:B2"""
        if "!" in reference:
            return reference.rsplit("!", 1)[1]
        return reference

    @staticmethod
    def parse_range(reference: str) -> Tuple[int, int, int, int]:
        """범위 참조를 (row_index, column_index, row_count, column_count)로 변환

        Args:
            reference: "B2:D6", "C3" or "Sheet1!B2:D6"

        Returns:
            0 기반 시작 좌표와 행/열 개수
        """
        ref = ExcelUtils.strip_sheet_name(reference.strip())

        match = ExcelUtils.RANGE_PATTERN.match(ref)
        if match:
            start_col = ExcelUtils.column_to_index(match.group(1))
            start_row = int(match.group(2)) - 1
            end_col = ExcelUtils.column_to_index(match.group(3))
            end_row = int(match.group(4)) - 1
            top, bottom = sorted((start_row, end_row))
            left, right = sorted((start_col, end_col))
            return top, left, bottom - top + 1, right - left + 1

        match = ExcelUtils.CELL_PATTERN.match(ref)
        if match:
            return int(match.group(2)) - 1, ExcelUtils.column_to_index(match.group(1)), 1, 1

        raise SelectionError(f"Invalid range reference: {reference}", details={"reference": reference})
