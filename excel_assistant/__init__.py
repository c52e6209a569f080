"""
Excel assistant: turns model replies into spreadsheet content
"""

__version__ = "1.0.0"
