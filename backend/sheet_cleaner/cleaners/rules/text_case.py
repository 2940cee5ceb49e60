"""
Text case rule.

Converts every cell to lower, upper or title case.
"""
import logging

import polars as pl

from ..base import ChangeType, CleaningResult, CleaningRule, Stage, Table, count_changed
from ..config import TextCase
from ...transform.normalizers import to_title_case

logger = logging.getLogger(__name__)


class TextCaseRule(CleaningRule):
    """Apply a case transform to all cells."""

    def __init__(self, text_case: TextCase):
        self.text_case = TextCase(text_case)

    @property
    def name(self) -> str:
        return "Text Case"

    @property
    def stage(self) -> Stage:
        return Stage.TRANSFORM

    @property
    def priority(self) -> int:
        return 20

    @property
    def description(self) -> str:
        return f"Convert text to {self.text_case.value} case"

    def _expression(self, column_name: str) -> pl.Expr:
        col = pl.col(column_name)
        if self.text_case is TextCase.LOWER:
            return col.str.to_lowercase()
        if self.text_case is TextCase.UPPER:
            return col.str.to_uppercase()
        return col.map_elements(to_title_case, return_dtype=pl.String)

    def clean(self, table: Table) -> CleaningResult:
        result = CleaningResult(table=table)

        if self.text_case is TextCase.NONE or table.height == 0:
            result.stats["values_modified"] = 0
            return result

        cleaned = table.frame.with_columns(
            [self._expression(name).alias(name) for name in table.frame.columns]
        )

        values_modified = 0
        for position, column_name in enumerate(cleaned.columns):
            changed = count_changed(table.frame, cleaned, column_name)
            if changed:
                values_modified += changed
                result.add_change(
                    ChangeType.VALUE_MODIFIED,
                    f"Converted column '{table.headers[position]}' to {self.text_case.value} case",
                    {"column": table.headers[position], "values_modified": changed},
                )

        result.table = table.with_frame(cleaned)
        result.stats["values_modified"] = values_modified
        logger.info("Applied %s case to %s values", self.text_case.value, values_modified)
        return result
