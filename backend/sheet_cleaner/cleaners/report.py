"""
Cleaning report generation and formatting.

Tracks what was cleaned for one request.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Any
import json
from datetime import datetime, timezone


@dataclass
class CleaningReport:
    """
    Report of cleaning operations performed.

    Tracks all changes made to the data for audit trail and transparency.
    """

    # Shape information (rows, columns)
    original_shape: Tuple[int, int] = (0, 0)
    cleaned_shape: Tuple[int, int] = (0, 0)

    # Output headers, in order
    columns_kept: List[str] = field(default_factory=list)

    # Columns dropped (not selected or empty)
    columns_dropped: List[str] = field(default_factory=list)

    # Rows dropped by reason ("empty", "invalid_email", "duplicate", ...)
    rows_dropped: Dict[str, int] = field(default_factory=dict)

    # Invalid values found per role, whether or not their rows were dropped
    invalid_values: Dict[str, int] = field(default_factory=dict)

    # Per-rule statistics
    rule_stats: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    # All changes made (detailed log)
    changes: List[Dict[str, Any]] = field(default_factory=list)

    # Warnings/issues encountered
    warnings: List[str] = field(default_factory=list)

    # Metadata
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    options_used: Dict[str, Any] = field(default_factory=dict)

    @property
    def rows_removed(self) -> int:
        """Number of rows removed."""
        return sum(self.rows_dropped.values())

    @property
    def columns_removed(self) -> int:
        """Number of columns removed."""
        return len(self.columns_dropped)

    def add_rule_stats(self, rule_name: str, stats: Dict[str, Any]):
        """Add statistics for a rule execution."""
        self.rule_stats[rule_name] = stats

    def add_change(self, change: Dict[str, Any]):
        """Add a change to the log, updating the drop/invalid tallies."""
        self.changes.append(change)
        details = change.get("details", {})
        if change.get("type") == "row_dropped":
            reason = details.get("reason", "unknown")
            self.rows_dropped[reason] = self.rows_dropped.get(reason, 0) + details.get("rows_dropped", 0)
        elif change.get("type") == "column_dropped":
            column = details.get("column")
            if column is not None and column not in self.columns_dropped:
                self.columns_dropped.append(column)
        elif change.get("type") == "value_invalid":
            role = details.get("role", "unknown")
            self.invalid_values[role] = self.invalid_values.get(role, 0) + details.get("invalid_values", 0)

    def add_warning(self, warning: str):
        """Add a warning."""
        self.warnings.append(warning)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp,
            "original_shape": {"rows": self.original_shape[0], "columns": self.original_shape[1]},
            "cleaned_shape": {"rows": self.cleaned_shape[0], "columns": self.cleaned_shape[1]},
            "summary": {
                "rows_removed": self.rows_removed,
                "columns_removed": self.columns_removed,
                "warnings_count": len(self.warnings),
            },
            "columns_kept": self.columns_kept,
            "columns_dropped": self.columns_dropped,
            "rows_dropped": self.rows_dropped,
            "invalid_values": self.invalid_values,
            "rule_stats": self.rule_stats,
            "changes": self.changes,
            "warnings": self.warnings,
            "options_used": self.options_used,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def to_summary(self) -> str:
        """Generate a text summary of the cleaning report."""
        lines = [
            "="*80,
            "DATA CLEANING REPORT",
            "="*80,
            f"Timestamp: {self.timestamp}",
            "",
            "SHAPE CHANGES:",
            f"  Original: {self.original_shape[0]} rows × {self.original_shape[1]} columns",
            f"  Cleaned:  {self.cleaned_shape[0]} rows × {self.cleaned_shape[1]} columns",
            f"  Removed:  {self.rows_removed} rows, {self.columns_removed} columns",
            "",
        ]

        if self.columns_dropped:
            lines.append(f"COLUMNS DROPPED ({len(self.columns_dropped)}):")
            for col in self.columns_dropped[:10]:
                lines.append(f"  '{col}'")
            if len(self.columns_dropped) > 10:
                lines.append(f"  ... and {len(self.columns_dropped)-10} more")
            lines.append("")

        if self.rows_dropped:
            lines.append("ROWS DROPPED:")
            for reason, count in self.rows_dropped.items():
                lines.append(f"  {reason}: {count}")
            lines.append("")

        if self.invalid_values:
            lines.append("INVALID VALUES:")
            for role, count in self.invalid_values.items():
                lines.append(f"  {role}: {count}")
            lines.append("")

        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for warning in self.warnings[:5]:
                lines.append(f"  ⚠ {warning}")
            if len(self.warnings) > 5:
                lines.append(f"  ... and {len(self.warnings)-5} more")
            lines.append("")

        lines.append("="*80)

        return "\n".join(lines)

    def __str__(self) -> str:
        """String representation (summary)."""
        return self.to_summary()
