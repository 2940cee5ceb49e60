"""
Data cleaning module for spreadsheet uploads.

Provides the Table model, the cleaning rules and the rule runner.
"""
from .data_cleaner import DataCleaner
from .config import CleanOptions, TextCase, DateFormat, OutputFormat
from .report import CleaningReport
from .base import Table, CleaningRule, CleaningResult, Change, ChangeType, Stage

__all__ = [
    "DataCleaner",
    "CleanOptions",
    "TextCase",
    "DateFormat",
    "OutputFormat",
    "CleaningReport",
    "Table",
    "CleaningRule",
    "CleaningResult",
    "Change",
    "ChangeType",
    "Stage",
]
