"""
Suggestion parser for the COLUMN: / FORMULA: / EXPLANATION: line grammar
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .table_extractor import RawResponse, split_lines

logger = logging.getLogger(__name__)

COLUMN_PREFIX = "COLUMN:"
FORMULA_PREFIX = "FORMULA:"
EXPLANATION_PREFIX = "EXPLANATION:"

FORMULA_PATTERN = re.compile(r"FORMULA:\s*(.+)")
HEADER_PATTERN = re.compile(r"HEADER:\s*(.+)")
DEFAULT_FORMULA_HEADER = "Result"


@dataclass(frozen=True)
class Suggestion:
    """A proposed column: header plus optional formula and explanation"""
    header: str
    formula: Optional[str] = None
    explanation: Optional[str] = None

    @property
    def is_applicable(self) -> bool:
        """Only formulas starting with '=' are written; others stay header-only"""
        return bool(self.formula) and self.formula.startswith("=")


def _flush(current: Dict[str, str], suggestions: List[Suggestion]) -> None:
    if current.get("header"):
        suggestions.append(
            Suggestion(
                header=current["header"],
                formula=current.get("formula"),
                explanation=current.get("explanation"),
            )
        )


def parse_suggestions(response: RawResponse) -> Tuple[Suggestion, ...]:
    """Collect one Suggestion per COLUMN: run; runs without a header are dropped"""
    suggestions: List[Suggestion] = []
    current: Dict[str, str] = {}

    for raw_line in split_lines(response):
        line = raw_line.strip()

        if line.startswith(COLUMN_PREFIX):
            _flush(current, suggestions)
            current = {"header": line[len(COLUMN_PREFIX):].strip()}
        elif line.startswith(FORMULA_PREFIX):
            current["formula"] = line[len(FORMULA_PREFIX):].strip()
        elif line.startswith(EXPLANATION_PREFIX):
            current["explanation"] = line[len(EXPLANATION_PREFIX):].strip()

    _flush(current, suggestions)

    # TODO: surface non-'=' formulas as a parse warning instead of a silent header-only column
    skipped = sum(1 for s in suggestions if s.formula and not s.is_applicable)
    if skipped:
        logger.info(f"{skipped} suggestion(s) carry a formula without '=' and will be header-only")

    logger.debug(f"Parsed {len(suggestions)} column suggestions")
    return tuple(suggestions)


def parse_formula_response(response: str) -> Optional[Suggestion]:
    """Single-formula reply: first 'FORMULA:' match anywhere, header defaults to 'Result'"""
    formula_match = FORMULA_PATTERN.search(response)
    if not formula_match:
        return None

    header_match = HEADER_PATTERN.search(response)
    header = header_match.group(1).strip() if header_match else DEFAULT_FORMULA_HEADER

    return Suggestion(header=header or DEFAULT_FORMULA_HEADER, formula=formula_match.group(1).strip())
