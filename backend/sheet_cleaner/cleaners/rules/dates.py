"""
Date normalization rule.

Rewrites every cell that parses as a date to ISO "YYYY-MM-DD". Cells that
are not dates are left exactly as they are.
"""
import logging
from typing import Optional

from ..base import ChangeType, CleaningResult, CleaningRule, Stage, Table, count_changed, map_string_columns
from ..config import DateFormat
from ...transform.normalizers import normalize_date_iso

logger = logging.getLogger(__name__)


def _iso_or_same(value: Optional[str]) -> Optional[str]:
    normalized = normalize_date_iso(value)
    return value if normalized is None else normalized


class DateNormalizationRule(CleaningRule):
    """Normalize recognizable dates to ISO format."""

    def __init__(self, date_format: DateFormat):
        self.date_format = DateFormat(date_format)

    @property
    def name(self) -> str:
        return "Date Normalization"

    @property
    def stage(self) -> Stage:
        return Stage.TRANSFORM

    @property
    def priority(self) -> int:
        return 30

    @property
    def description(self) -> str:
        return "Rewrite dates as YYYY-MM-DD, leaving non-dates unchanged"

    def clean(self, table: Table) -> CleaningResult:
        result = CleaningResult(table=table)

        if self.date_format is DateFormat.NONE:
            result.stats["dates_normalized"] = 0
            return result

        cleaned = map_string_columns(table, _iso_or_same)

        dates_normalized = 0
        for position, column_name in enumerate(cleaned.columns):
            changed = count_changed(table.frame, cleaned, column_name)
            if changed:
                dates_normalized += changed
                result.add_change(
                    ChangeType.VALUE_MODIFIED,
                    f"Normalized dates in column '{table.headers[position]}'",
                    {"column": table.headers[position], "values_modified": changed},
                )

        result.table = table.with_frame(cleaned)
        result.stats["dates_normalized"] = dates_normalized
        logger.info("Normalized %s date values", dates_normalized)
        return result
