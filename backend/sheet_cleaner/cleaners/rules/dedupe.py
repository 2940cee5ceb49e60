"""
Deduplication rule.

Drops rows whose key column values repeat those of an earlier row.
"""
import logging
from typing import Sequence

from ..base import ChangeType, CleaningResult, CleaningRule, Stage, Table
from ..config import resolve_names

logger = logging.getLogger(__name__)


class DeduplicationRule(CleaningRule):
    """
    Keep the first row for each composite key.

    When the table carries key columns (copied before projection) those
    are the keys and they are dropped once duplicates are gone. Otherwise
    key names resolve case-insensitively against the current headers.
    Unknown names are ignored and an empty key list disables the rule.
    Comparison is exact and case-sensitive on the already-transformed
    values, and surviving rows keep their original order.
    """

    def __init__(self, keys: Sequence[str]):
        self.keys = tuple(keys)

    @property
    def name(self) -> str:
        return "Deduplication"

    @property
    def stage(self) -> Stage:
        return Stage.DEDUPLICATE

    @property
    def priority(self) -> int:
        return 90

    @property
    def description(self) -> str:
        return f"Drop repeated rows by key: {', '.join(self.keys)}"

    def clean(self, table: Table) -> CleaningResult:
        result = CleaningResult(table=table.without_carried())
        if table.carried:
            positions = table.carried_positions
        else:
            positions = resolve_names(table.headers, self.keys)
        key_headers = [table.headers[p] for p in positions]
        result.stats["key_columns"] = key_headers

        if not positions or table.height == 0:
            result.stats["rows_dropped"] = 0
            if self.keys and not positions:
                result.add_warning(f"No dedupe keys matched: {', '.join(self.keys)}")
            return result

        subset = [table.frame.columns[p] for p in positions]
        frame = table.frame.unique(subset=subset, keep="first", maintain_order=True)
        rows_dropped = table.height - frame.height

        result.table = table.with_frame(frame).without_carried()
        result.stats["rows_dropped"] = rows_dropped
        if rows_dropped:
            result.add_change(
                ChangeType.ROW_DROPPED,
                f"Dropped {rows_dropped} duplicate rows",
                {"rows_dropped": rows_dropped, "reason": "duplicate", "keys": key_headers},
            )
        logger.info("Deduplicated on %s: %s rows dropped", key_headers, rows_dropped)
        return result
