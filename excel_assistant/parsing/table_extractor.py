"""
Table block extractor
코드 블록(```) 안의 줄만 표로 변환하고, 블록 밖의 설명 문장은 모두 버린다
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from .tokenizer import Row, tokenize

logger = logging.getLogger(__name__)

FENCE = "```"
TITLE_LOOKBACK = 3

# placeholder titles that are not written as a title row
DEFAULT_TITLES = ("Data", "Table")

ENUMERATION_PREFIX = re.compile(r"^\d+\.\s*")
HEADING_MARKS = re.compile(r"^#+\s*")
TRAILING_COLON = re.compile(r":\s*$")

RawResponse = Union[str, Sequence[str]]


@dataclass(frozen=True)
class Table:
    """A titled group of rows taken from one fenced block"""
    title: str
    rows: Tuple[Row, ...]

    @property
    def has_title(self) -> bool:
        return bool(self.title) and self.title not in DEFAULT_TITLES

    @property
    def display_title(self) -> str:
        return self.title or "Table"

    @property
    def column_count(self) -> int:
        return max((len(row) for row in self.rows), default=0)


def split_lines(response: RawResponse) -> List[str]:
    """Accept either the raw reply text or an already split sequence of lines"""
    if isinstance(response, str):
        return response.splitlines()
    return list(response)


def is_fence(line: str) -> bool:
    return line.strip().startswith(FENCE)


def clean_title(line: str) -> str:
    """'1. Revenue Model:' -> 'Revenue Model'"""
    title = line.strip()
    title = HEADING_MARKS.sub("", title)
    title = title.strip("*").strip()
    title = ENUMERATION_PREFIX.sub("", title)
    title = TRAILING_COLON.sub("", title)
    return title.strip("*").strip()


def find_table_title(lines: Sequence[str], fence_index: int) -> str:
    """Nearest usable non-blank line within the lookback window above a fence"""
    first = max(0, fence_index - TITLE_LOOKBACK)
    for index in range(fence_index - 1, first - 1, -1):
        line = lines[index].strip()
        if not line:
            continue
        if is_fence(line):
            # Lines above a closing fence belong to the previous block
            break
        title = clean_title(line)
        if title:
            return title
    return ""


def extract_tables(response: RawResponse) -> Tuple[Table, ...]:
    """Group the tokenized rows of every closed fenced block into tables"""
    lines = split_lines(response)
    tables: List[Table] = []

    inside = False
    title = ""
    buffer: List[Row] = []

    for index, raw_line in enumerate(lines):
        line = raw_line.strip()

        if is_fence(line):
            if not inside:
                inside = True
                buffer = []
                title = find_table_title(lines, index)
            else:
                if buffer:
                    tables.append(Table(title=title, rows=tuple(buffer)))
                inside = False
                buffer = []
                title = ""
            continue

        if inside and line:
            row = tokenize(line)
            if row:
                buffer.append(row)

    if inside:
        logger.warning(
            f"Unterminated code block discarded ({len(buffer)} rows, title={title!r})"
        )

    logger.debug(f"Extracted {len(tables)} tables from {len(lines)} lines")
    return tuple(tables)
