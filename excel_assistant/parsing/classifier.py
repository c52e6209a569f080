"""
Cell value classifier
모델 응답에서 추출한 문자열을 숫자 / 백분율 / 텍스트로 분류
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

# Glyphs that replace a bare leading sign so the grid never reads it as a formula prefix
EM_DASH = "—"
FULLWIDTH_PLUS = "＋"

SIGN_PLACEHOLDERS = {"-": EM_DASH, "+": FULLWIDTH_PLUS}

# sign followed by a numeric literal: -42, -3.5, +1,000, -.5
SIGNED_NUMBER_PATTERN = re.compile(r"^[+-][\d,]*\.?\d")
DIGIT_OR_GROUPING_PATTERN = re.compile(r"[\d,]")
NUMERIC_NOISE_PATTERN = re.compile(r"[,()%$€£¥₩]")


class ValueKind(str, Enum):
    """Classification tag of one extracted cell value"""
    NUMBER = "number"
    PERCENTAGE = "percentage"
    TEXT = "text"


@dataclass(frozen=True)
class Token:
    """One scalar cell candidate"""
    raw: str
    kind: ValueKind
    display: str
    value: Optional[float] = None

    @property
    def is_numeric(self) -> bool:
        return self.kind in (ValueKind.NUMBER, ValueKind.PERCENTAGE)

    @property
    def payload(self) -> Union[float, str]:
        """Value handed to the grid: the number for numeric tokens, else the display text"""
        return self.value if self.is_numeric else self.display


def _escape_sign(text: str) -> Optional[str]:
    """Replace a leading sign that does not introduce a number"""
    if text in SIGN_PLACEHOLDERS:
        return SIGN_PLACEHOLDERS[text]

    if text[0] in SIGN_PLACEHOLDERS and not SIGNED_NUMBER_PATTERN.match(text):
        return SIGN_PLACEHOLDERS[text[0]] + text[1:]

    return None


def _parse_number(text: str) -> Optional[float]:
    cleaned = NUMERIC_NOISE_PATTERN.sub("", text)
    if not cleaned:
        return None

    try:
        number = float(cleaned)
    except ValueError:
        return None

    if not math.isfinite(number):
        return None
    return number


def classify(raw: Optional[str]) -> Token:
    """Classify one raw cell string.

    The sign escape runs before numeric detection so that an unescaped
    leading sign never reaches the grid as a formula prefix. Percentages
    store the fraction (45% -> 0.45); the percentage number format
    multiplies it back for display.
    """
    original = raw or ""
    text = original.strip()

    if not text:
        return Token(raw=original, kind=ValueKind.TEXT, display="")

    escaped = _escape_sign(text)
    if escaped is not None:
        return Token(raw=original, kind=ValueKind.TEXT, display=escaped)

    number = _parse_number(text)
    if number is not None and DIGIT_OR_GROUPING_PATTERN.search(text):
        if "%" in text:
            return Token(
                raw=original,
                kind=ValueKind.PERCENTAGE,
                display=text,
                value=number / 100,
            )
        return Token(raw=original, kind=ValueKind.NUMBER, display=text, value=number)

    return Token(raw=original, kind=ValueKind.TEXT, display=text)
