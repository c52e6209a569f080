"""
Centralized style management for grid writes
Provides consistent styling across side-append columns and table blocks
"""

from dataclasses import dataclass
from typing import Optional
import logging

from ..parsing.classifier import Token, ValueKind
from .models import CellFormat

logger = logging.getLogger(__name__)


@dataclass
class ColorScheme:
    """Color scheme for grid styling"""
    title_fill: str = "4472C4"
    title_font: str = "FFFFFF"
    header_fill: str = "D9E2F3"
    suggestion_header_fill: str = "E7E6E6"


class StyleManager:
    """Manages cell formats for consistent output"""

    NUMBER_FORMATS = {
        "number": "#,##0",
        "percentage": "0%",
    }
    LARGE_NUMBER_THRESHOLD = 100
    HEADER_MARKERS = ("Year", "$")

    def __init__(self, color_scheme: Optional[ColorScheme] = None):
        self.colors = color_scheme or ColorScheme()

    def suggestion_header(self) -> CellFormat:
        """Bold header with a neutral fill for side-appended columns"""
        return CellFormat(bold=True, fill_color=self.colors.suggestion_header_fill)

    def table_title(self) -> CellFormat:
        return CellFormat(
            bold=True,
            font_size=12,
            fill_color=self.colors.title_fill,
            font_color=self.colors.title_font,
        )

    def summary_heading(self) -> CellFormat:
        return CellFormat(bold=True, font_size=14)

    def results_text(self) -> CellFormat:
        return CellFormat(wrap_text=True, vertical_alignment="top")

    def get_number_format(self, token: Token) -> Optional[str]:
        """Number format for a numeric token; None keeps the General format"""
        if token.kind == ValueKind.PERCENTAGE:
            return self.NUMBER_FORMATS["percentage"]
        if token.kind == ValueKind.NUMBER and abs(token.value) >= self.LARGE_NUMBER_THRESHOLD:
            return self.NUMBER_FORMATS["number"]
        return None

    def is_header_like(self, token: Token, row_index: int) -> bool:
        """First table row, or repeated header rows such as 'Year' / '$' lines"""
        return row_index == 0 or any(marker in token.raw for marker in self.HEADER_MARKERS)

    def table_cell(self, token: Token, row_index: int, column_index: int) -> CellFormat:
        """Format of one table-block cell"""
        number_format = None
        alignment = None

        if token.is_numeric:
            number_format = self.get_number_format(token)
            alignment = "right"
        elif column_index == 0:
            alignment = "left"

        if self.is_header_like(token, row_index):
            return CellFormat(
                bold=True,
                fill_color=self.colors.header_fill,
                horizontal_alignment=alignment,
                number_format=number_format,
            )

        return CellFormat(horizontal_alignment=alignment, number_format=number_format)
