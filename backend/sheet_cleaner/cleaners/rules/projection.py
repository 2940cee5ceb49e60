"""
Column projection rule.

Keeps only the requested columns. Names are matched case-insensitively
and names that match no header are ignored.
"""
import logging
from typing import Sequence

from ..base import ChangeType, CleaningResult, CleaningRule, Stage, Table
from ..config import resolve_names

logger = logging.getLogger(__name__)


class ColumnProjectionRule(CleaningRule):
    """
    Select and order output columns.

    With ``keep_order`` the selected columns keep their position in the
    source file; otherwise they follow the order they were requested in.

    Columns named in ``carry`` are resolved against the full header row and
    copied after the selection as carried columns, so deduplication can key
    on columns that are not part of the output.
    """

    def __init__(self, columns: Sequence[str], keep_order: bool = True, carry: Sequence[str] = ()):
        self.columns = tuple(columns)
        self.keep_order = keep_order
        self.carry = tuple(carry)

    @property
    def name(self) -> str:
        return "Column Projection"

    @property
    def stage(self) -> Stage:
        return Stage.FILTER

    @property
    def priority(self) -> int:
        return 60

    @property
    def description(self) -> str:
        return "Keep only the selected columns"

    def clean(self, table: Table) -> CleaningResult:
        positions = resolve_names(table.headers, self.columns)
        if self.keep_order:
            positions = sorted(positions)

        carried = resolve_names(table.headers, self.carry)
        result = CleaningResult(
            table=table.select_positions(positions + carried, carried=len(carried))
        )

        kept = set(positions)
        for position, header in enumerate(table.headers):
            if position not in kept:
                result.add_change(
                    ChangeType.COLUMN_DROPPED,
                    f"Column '{header}' not selected",
                    {"column": header, "reason": "not_selected"},
                )

        matched = {table.headers[p].lower() for p in positions}
        unmatched = [name for name in self.columns if name.lower() not in matched]
        if unmatched:
            result.add_warning(f"Ignored unknown columns: {', '.join(unmatched)}")

        result.stats["columns_selected"] = len(positions)
        result.stats["columns_ignored"] = len(unmatched)
        result.stats["key_columns_carried"] = [table.headers[p] for p in carried]
        logger.info(
            "Selected %s of %s columns (%s requested names unmatched)",
            len(positions),
            table.width,
            len(unmatched),
        )
        return result
