"""
Format validation rules for email and URL columns.

Columns are picked by header name (see ``cleaners.roles``). Invalid values
are either counted and left in place, or their whole row is dropped.
"""
import logging
from typing import Callable, Optional

import polars as pl

from ..base import ChangeType, CleaningResult, CleaningRule, Stage, Table
from ..roles import ColumnRole, columns_with_role
from ...transform.normalizers import is_valid_email, is_valid_url

logger = logging.getLogger(__name__)


VALIDATORS = {
    ColumnRole.EMAIL: is_valid_email,
    ColumnRole.URL: is_valid_url,
}


class FormatValidationRule(CleaningRule):
    """
    Validate the cells of every column playing ``role``.

    With ``remove_invalid`` a row is dropped if any of its role columns
    holds an invalid value. Without it the rule reports invalid values
    and returns the table unchanged.
    """

    def __init__(
        self,
        role: ColumnRole,
        remove_invalid: bool = False,
        validator: Optional[Callable[[str], bool]] = None,
    ):
        self.role = ColumnRole(role)
        self.remove_invalid = remove_invalid
        self.validator = validator or VALIDATORS[self.role]

    @property
    def name(self) -> str:
        return f"{self.role.value.capitalize()} Validation"

    @property
    def stage(self) -> Stage:
        return Stage.FILTER

    @property
    def priority(self) -> int:
        return 80 if self.role is ColumnRole.EMAIL else 81

    @property
    def description(self) -> str:
        action = "drop rows with" if self.remove_invalid else "report"
        return f"Validate {self.role.value} columns and {action} invalid values"

    def clean(self, table: Table) -> CleaningResult:
        result = CleaningResult(table=table)
        positions = columns_with_role(table.output_headers, self.role)
        result.stats["columns_checked"] = [table.headers[p] for p in positions]

        if not positions or table.height == 0:
            result.stats["invalid_values"] = 0
            result.stats["rows_dropped"] = 0
            if not positions:
                logger.info("No %s columns found to validate", self.role.value)
            return result

        frame_columns = table.frame.columns
        validity = table.frame.select(
            [
                pl.col(frame_columns[p])
                .map_elements(self.validator, return_dtype=pl.Boolean)
                .alias(frame_columns[p])
                for p in positions
            ]
        )

        invalid_values = 0
        for p in positions:
            invalid = int((~validity[frame_columns[p]]).sum())
            if invalid:
                invalid_values += invalid
                result.add_change(
                    ChangeType.VALUE_INVALID,
                    f"Found {invalid} invalid {self.role.value} values in column '{table.headers[p]}'",
                    {"column": table.headers[p], "role": self.role.value, "invalid_values": invalid},
                )

        rows_dropped = 0
        if self.remove_invalid and invalid_values:
            row_valid = validity.select(pl.all_horizontal(pl.all()).alias("valid"))["valid"]
            frame = table.frame.filter(row_valid)
            rows_dropped = table.height - frame.height
            result.table = table.with_frame(frame)
            result.add_change(
                ChangeType.ROW_DROPPED,
                f"Dropped {rows_dropped} rows with invalid {self.role.value} values",
                {"rows_dropped": rows_dropped, "reason": f"invalid_{self.role.value}"},
            )
        elif invalid_values:
            result.add_warning(
                f"{invalid_values} invalid {self.role.value} values left unchanged"
            )

        result.stats["invalid_values"] = invalid_values
        result.stats["rows_dropped"] = rows_dropped
        logger.info(
            "Validated %s %s columns: %s invalid values, %s rows dropped",
            len(positions),
            self.role.value,
            invalid_values,
            rows_dropped,
        )
        return result
