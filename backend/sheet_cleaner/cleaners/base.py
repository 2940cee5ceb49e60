"""
Base classes and interfaces for data cleaning.

This module provides the in-memory Table, the abstract base class for all
cleaning rules, and data structures for tracking cleaning results and changes.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
from enum import Enum
import polars as pl


def column_id(position: int) -> str:
    """Positional frame column name for header position ``position``."""
    return f"c{position}"


@dataclass
class Table:
    """
    Ordered header row plus rows of string cells.

    Cells live in a Polars DataFrame whose columns are named positionally
    (c0, c1, ...) so header names may repeat before cleaning. ``headers[i]``
    is the display name of ``frame.columns[i]``. Every cell is a non-null
    string.

    The last ``carried`` columns are copies of the dedupe key columns taken
    before projection. Filters ignore them, deduplication compares on them
    and then drops them, so they never reach the output.
    """
    headers: List[str]
    frame: pl.DataFrame
    carried: int = 0

    def __post_init__(self):
        if len(self.headers) != self.frame.width:
            raise ValueError(
                f"Header count {len(self.headers)} does not match column count {self.frame.width}"
            )
        if not 0 <= self.carried <= len(self.headers):
            raise ValueError(f"Carried column count {self.carried} out of range")

    @classmethod
    def from_rows(cls, headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> "Table":
        """
        Build a Table from a header list and raw rows.

        Rows shorter than the header are padded with empty strings, longer
        rows are truncated. None becomes an empty string.
        """
        width = len(headers)
        columns: Dict[str, List[str]] = {column_id(i): [] for i in range(width)}
        for row in rows:
            for i in range(width):
                value = row[i] if i < len(row) else None
                columns[column_id(i)].append("" if value is None else str(value))
        frame = pl.DataFrame(columns, schema={name: pl.String for name in columns})
        return cls(headers=list(headers), frame=frame)

    @property
    def height(self) -> int:
        return self.frame.height

    @property
    def width(self) -> int:
        return len(self.headers)

    @property
    def shape(self) -> tuple:
        return (self.height, self.width)

    @property
    def output_width(self) -> int:
        """Number of columns that belong to the output."""
        return self.width - self.carried

    @property
    def output_headers(self) -> List[str]:
        return self.headers[:self.output_width]

    @property
    def carried_positions(self) -> List[int]:
        return list(range(self.output_width, self.width))

    def rows(self) -> List[List[str]]:
        """Rows as lists of strings, in order."""
        return [list(row) for row in self.frame.iter_rows()]

    def select_positions(self, positions: Sequence[int], carried: int = 0) -> "Table":
        """
        New Table with only the columns at ``positions``, in that order.

        The last ``carried`` positions become the carried columns of the
        new Table. A position may appear more than once.
        """
        columns = self.frame.columns
        frame = self.frame.select(
            [pl.col(columns[p]).alias(column_id(i)) for i, p in enumerate(positions)]
        )
        return Table(headers=[self.headers[p] for p in positions], frame=frame, carried=carried)

    def without_carried(self) -> "Table":
        """New Table holding only the output columns."""
        if not self.carried:
            return self
        return self.select_positions(range(self.output_width))

    def with_frame(self, frame: pl.DataFrame) -> "Table":
        """New Table sharing the headers but holding ``frame``."""
        return Table(headers=list(self.headers), frame=frame, carried=self.carried)


class ChangeType(Enum):
    """Types of changes that can be made during cleaning."""
    COLUMN_DROPPED = "column_dropped"
    VALUE_MODIFIED = "value_modified"
    ROW_DROPPED = "row_dropped"
    VALUE_INVALID = "value_invalid"


@dataclass
class Change:
    """Represents a single change made during cleaning."""
    change_type: ChangeType
    description: str
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "type": self.change_type.value,
            "description": self.description,
            "details": self.details
        }


@dataclass
class CleaningResult:
    """
    Result of a cleaning rule execution.

    Contains the cleaned Table plus metadata about what changed.
    """
    table: Table
    changes: List[Change] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    def add_change(self, change_type: ChangeType, description: str, details: Optional[Dict[str, Any]] = None):
        """Convenience method to add a change."""
        self.changes.append(Change(
            change_type=change_type,
            description=description,
            details=details or {}
        ))

    def add_warning(self, message: str):
        """Convenience method to add a warning."""
        self.warnings.append(message)


class Stage(Enum):
    """Pipeline stage a rule belongs to."""
    TRANSFORM = "transform"
    FILTER = "filter"
    DEDUPLICATE = "deduplicate"


class CleaningRule(ABC):
    """
    Abstract base class for all cleaning rules.

    Each rule performs a specific data cleaning operation and returns
    a CleaningResult with the new Table and change log. Rules never
    mutate the Table they receive.
    """

    @abstractmethod
    def clean(self, table: Table) -> CleaningResult:
        """
        Clean the table according to this rule's logic.

        Args:
            table: Input Table to clean

        Returns:
            CleaningResult with cleaned Table and metadata
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this rule."""
        pass

    @property
    @abstractmethod
    def stage(self) -> Stage:
        """Pipeline stage this rule runs in."""
        pass

    @property
    def priority(self) -> int:
        """
        Execution priority within the pipeline (lower number = runs earlier).

        Transform rules use 10-59, filter rules 60-89, deduplication 90+.
        """
        return 50

    @property
    def description(self) -> str:
        """Description of what this rule does."""
        return ""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self.name} (priority={self.priority})>"


def map_string_columns(table: Table, fn, columns: Optional[Sequence[str]] = None) -> pl.DataFrame:
    """
    Apply a pure str -> str function to every cell of the given frame columns.

    Args:
        table: Table whose frame is transformed
        fn: Per-cell function
        columns: Frame column ids to transform (all columns when None)

    Returns:
        New DataFrame with transformed columns
    """
    targets = list(columns) if columns is not None else table.frame.columns
    if not targets or table.height == 0:
        return table.frame.clone()
    return table.frame.with_columns(
        [pl.col(name).map_elements(fn, return_dtype=pl.String) for name in targets]
    )


def count_changed(before: pl.DataFrame, after: pl.DataFrame, column: str) -> int:
    """Number of cells in ``column`` whose value differs between two frames."""
    if before.height == 0:
        return 0
    return int((before[column] != after[column]).sum())
