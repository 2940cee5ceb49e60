"""
Type normalization rule.

Rewrites booleans and numbers to their canonical string form:
"Yes" -> "true", "$1,234.50" -> "1234.50", "15%" -> "15".
"""
import logging

from ..base import ChangeType, CleaningResult, CleaningRule, Stage, Table, count_changed, map_string_columns
from ...transform.normalizers import normalize_type

logger = logging.getLogger(__name__)


class TypeNormalizationRule(CleaningRule):
    """Canonicalize boolean and numeric cells."""

    @property
    def name(self) -> str:
        return "Type Normalization"

    @property
    def stage(self) -> Stage:
        return Stage.TRANSFORM

    @property
    def priority(self) -> int:
        return 40

    @property
    def description(self) -> str:
        return "Normalize booleans to true/false and strip currency, separators and percent from numbers"

    def clean(self, table: Table) -> CleaningResult:
        result = CleaningResult(table=table)
        cleaned = map_string_columns(table, normalize_type)

        values_normalized = 0
        for position, column_name in enumerate(cleaned.columns):
            changed = count_changed(table.frame, cleaned, column_name)
            if changed:
                values_normalized += changed
                result.add_change(
                    ChangeType.VALUE_MODIFIED,
                    f"Normalized types in column '{table.headers[position]}'",
                    {"column": table.headers[position], "values_modified": changed},
                )

        result.table = table.with_frame(cleaned)
        result.stats["values_normalized"] = values_normalized
        logger.info("Normalized %s typed values", values_normalized)
        return result
