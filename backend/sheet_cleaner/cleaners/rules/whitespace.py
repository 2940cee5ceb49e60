"""
Whitespace cleaning rule implemented for Polars DataFrames.

Trims leading/trailing whitespace from all cells and optionally collapses
internal whitespace runs to a single space.
"""
from __future__ import annotations

import logging

import polars as pl

from ..base import ChangeType, CleaningResult, CleaningRule, Stage, Table

logger = logging.getLogger(__name__)


class WhitespaceRule(CleaningRule):
    """
    Trim and/or collapse whitespace in every cell.

    Trimming runs before collapsing, so "  a   b  " becomes "a b" with both
    enabled and " a b " with only collapsing.
    """

    def __init__(self, trim: bool = True, collapse_spaces: bool = True):
        self.trim = trim
        self.collapse_spaces = collapse_spaces

    @property
    def name(self) -> str:
        return "Whitespace Cleaning"

    @property
    def stage(self) -> Stage:
        return Stage.TRANSFORM

    @property
    def priority(self) -> int:
        return 10

    @property
    def description(self) -> str:
        return "Trim leading/trailing whitespace and collapse internal runs"

    def clean(self, table: Table) -> CleaningResult:
        """
        Clean whitespace in all columns.

        Args:
            table: Input Table

        Returns:
            CleaningResult with trimmed values
        """
        result = CleaningResult(table=table)

        if not (self.trim or self.collapse_spaces) or table.height == 0:
            result.stats["values_cleaned"] = 0
            return result

        expressions = []
        for column_name in table.frame.columns:
            expr = pl.col(column_name)
            if self.trim:
                expr = expr.str.strip_chars()
            if self.collapse_spaces:
                expr = expr.str.replace_all(r"\s+", " ")
            expressions.append(expr.alias(column_name))

        cleaned = table.frame.with_columns(expressions)

        columns_cleaned = 0
        values_cleaned = 0
        for position, column_name in enumerate(cleaned.columns):
            changed = int((table.frame[column_name] != cleaned[column_name]).sum())
            if changed == 0:
                continue

            columns_cleaned += 1
            values_cleaned += changed
            result.add_change(
                ChangeType.VALUE_MODIFIED,
                f"Cleaned whitespace in column '{table.headers[position]}'",
                {"column": table.headers[position], "values_modified": changed},
            )
            logger.debug(
                "Cleaned whitespace in %s values for column '%s'",
                changed,
                table.headers[position],
            )

        result.table = table.with_frame(cleaned)
        result.stats["columns_cleaned"] = columns_cleaned
        result.stats["values_cleaned"] = values_cleaned

        if values_cleaned > 0:
            logger.info(
                "Cleaned whitespace in %s values across %s columns",
                values_cleaned,
                columns_cleaned,
            )
        else:
            logger.info("No whitespace issues detected")

        return result
