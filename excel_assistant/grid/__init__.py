"""
Grid collaborators and write models
"""

from .models import Selection, CellFormat, GridWrite, FormulaFill
from .collaborator import GridCollaborator
from .style_manager import StyleManager, ColorScheme
from .workbook_grid import WorkbookGrid

__all__ = [
    "Selection",
    "CellFormat",
    "GridWrite",
    "FormulaFill",
    "GridCollaborator",
    "StyleManager",
    "ColorScheme",
    "WorkbookGrid",
]
