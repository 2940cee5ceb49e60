"""
Cleaning rules, grouped by pipeline stage.
"""
from .whitespace import WhitespaceRule
from .text_case import TextCaseRule
from .dates import DateNormalizationRule
from .types import TypeNormalizationRule
from .projection import ColumnProjectionRule
from .empty import EmptyColumnRule, EmptyRowRule
from .validation import FormatValidationRule
from .dedupe import DeduplicationRule

__all__ = [
    "WhitespaceRule",
    "TextCaseRule",
    "DateNormalizationRule",
    "TypeNormalizationRule",
    "ColumnProjectionRule",
    "EmptyColumnRule",
    "EmptyRowRule",
    "FormatValidationRule",
    "DeduplicationRule",
]
