"""
Prompt builders for each user action
"""

from typing import Any, List


def convert_range_to_text(values: List[List[Any]]) -> str:
    """Tab-separated rows, one line per row; empty cells become ''"""
    return "\n".join(
        "\t".join("" if cell is None or cell == "" else str(cell) for cell in row)
        for row in values
    )


def build_analysis_prompt(data_text: str) -> str:
    return (
        "Analyze this Excel data and suggest NEW COLUMNS or CALCULATIONS to add:\n\n"
        f"Data:\n{data_text}\n\n"
        "Please suggest 2-3 new columns. For each suggestion, provide:\n"
        "COLUMN: [Header Name]\n"
        "FORMULA: [Excel formula]\n"
        "EXPLANATION: [Why this is useful]"
    )


def build_formula_prompt(task: str, data_text: str) -> str:
    return (
        f"Create Excel formula for this task: {task}\n\n"
        f"Data:\n{data_text}\n\n"
        "Provide:\n"
        "FORMULA: [Excel formula starting with =]\n"
        "HEADER: [Column header name]"
    )


def build_insights_prompt(data_text: str) -> str:
    return (
        "Analyze this data and create calculated columns:\n\n"
        f"{data_text}\n\n"
        "Create 2-3 columns with:\n"
        "COLUMN: [Column Name]\n"
        "FORMULA: [Excel formula]\n"
        "EXPLANATION: [Business insight]"
    )
