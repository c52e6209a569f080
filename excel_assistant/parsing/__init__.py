"""
Pure text -> structured data transforms for model replies
"""

from .classifier import ValueKind, Token, classify
from .tokenizer import Row, tokenize
from .table_extractor import Table, extract_tables
from .suggestion_parser import Suggestion, parse_suggestions, parse_formula_response

__all__ = [
    "ValueKind",
    "Token",
    "classify",
    "Row",
    "tokenize",
    "Table",
    "extract_tables",
    "Suggestion",
    "parse_suggestions",
    "parse_formula_response",
]
