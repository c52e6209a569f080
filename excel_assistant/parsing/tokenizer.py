"""
Row tokenizer - splits one line of a code block into classified cells
"""

import re
from typing import Tuple

from .classifier import Token, classify

Row = Tuple[Token, ...]

SEPARATOR_LINE_PATTERN = re.compile(r"^[-\s|=_]+$")
COLUMN_GAP_PATTERN = re.compile(r"\s{2,}|\t")
DATA_HINT_PATTERN = re.compile(r"[\d,%]")


def is_separator_line(line: str) -> bool:
    """Table-drawing artifacts such as '-----' or '|===|===|'"""
    return bool(SEPARATOR_LINE_PATTERN.match(line))


def split_fields(line: str) -> Tuple[str, ...]:
    """Split a line into raw field strings without classifying them"""
    text = line.strip()
    if not text or is_separator_line(text):
        return ()

    fields = [field.strip() for field in COLUMN_GAP_PATTERN.split(text)]
    fields = [field for field in fields if field]

    # "Revenue 100 200": single-space rows the column-gap split cannot separate
    if len(fields) <= 1 and " " in text:
        parts = text.split()
        if len(parts) >= 2 and any(DATA_HINT_PATTERN.search(part) for part in parts[1:]):
            fields = parts

    return tuple(fields)


def tokenize(line: str) -> Row:
    """Tokenize one physical line; separator lines yield an empty row"""
    return tuple(classify(field) for field in split_fields(line))
