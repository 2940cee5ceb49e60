"""
Empty column and empty row rules.

A cell counts as empty when it is empty or whitespace-only.
"""
import logging

import polars as pl

from ..base import ChangeType, CleaningResult, CleaningRule, Stage, Table

logger = logging.getLogger(__name__)


def _is_blank(column_name: str) -> pl.Expr:
    return pl.col(column_name).str.strip_chars() == ""


class EmptyColumnRule(CleaningRule):
    """
    Drop columns in which every cell is empty.

    A table with no data rows keeps all its columns. With no cells to
    judge, every column would count as empty and the output would lose its
    header row, so a header-only upload comes back unchanged instead of as
    an empty file. Carried key columns are never dropped.
    """

    @property
    def name(self) -> str:
        return "Empty Column Removal"

    @property
    def stage(self) -> Stage:
        return Stage.FILTER

    @property
    def priority(self) -> int:
        return 70

    @property
    def description(self) -> str:
        return "Drop columns containing only empty or whitespace values"

    def clean(self, table: Table) -> CleaningResult:
        if table.output_width == 0 or table.height == 0:
            result = CleaningResult(table=table)
            result.stats["columns_dropped"] = 0
            return result

        output_columns = table.frame.columns[:table.output_width]
        blank_flags = table.frame.select(
            [_is_blank(name).all().alias(name) for name in output_columns]
        ).row(0)

        keep = [position for position, blank in enumerate(blank_flags) if not blank]
        result = CleaningResult(
            table=table.select_positions(keep + table.carried_positions, carried=table.carried)
        )

        dropped = [table.headers[p] for p, blank in enumerate(blank_flags) if blank]
        for header in dropped:
            result.add_change(
                ChangeType.COLUMN_DROPPED,
                f"Dropped empty column '{header}'",
                {"column": header, "reason": "empty"},
            )

        result.stats["columns_dropped"] = len(dropped)
        if dropped:
            logger.info("Dropped %s empty columns: %s", len(dropped), dropped)
        return result


class EmptyRowRule(CleaningRule):
    """Drop rows in which every output cell is empty."""

    @property
    def name(self) -> str:
        return "Empty Row Removal"

    @property
    def stage(self) -> Stage:
        return Stage.FILTER

    @property
    def priority(self) -> int:
        return 75

    @property
    def description(self) -> str:
        return "Drop rows containing only empty or whitespace values"

    def clean(self, table: Table) -> CleaningResult:
        if table.output_width == 0 or table.height == 0:
            result = CleaningResult(table=table)
            result.stats["rows_dropped"] = 0
            return result

        output_columns = table.frame.columns[:table.output_width]
        all_blank = pl.all_horizontal([_is_blank(name) for name in output_columns])
        frame = table.frame.filter(~all_blank)
        dropped = table.height - frame.height

        result = CleaningResult(table=table.with_frame(frame))
        result.stats["rows_dropped"] = dropped
        if dropped:
            result.add_change(
                ChangeType.ROW_DROPPED,
                f"Dropped {dropped} empty rows",
                {"rows_dropped": dropped, "reason": "empty"},
            )
            logger.info("Dropped %s empty rows", dropped)
        return result
