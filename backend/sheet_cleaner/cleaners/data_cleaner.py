"""
Data cleaning rule runner using Polars.

Runs cleaning rules in priority order, stage by stage, and collects a
cleaning report. A failing rule aborts the run: the caller never gets a
partially cleaned table.
"""
from typing import List, Optional, Tuple
import logging

from .base import CleaningRule, CleaningResult, Stage, Table
from .config import CleanOptions, DateFormat, TextCase
from .report import CleaningReport
from .roles import ColumnRole


logger = logging.getLogger(__name__)


class DataCleaner:
    """
    Orchestrates cleaning rules.

    Rules are grouped by stage (transform, filter, deduplicate) and run in
    priority order within each stage.
    """

    def __init__(self, options: Optional[CleanOptions] = None, report: Optional[CleaningReport] = None):
        """
        Initialize the data cleaner.

        Args:
            options: Cleaning options. If None, uses default options.
            report: Report to record into. If None, a new one is created.
        """
        self.options = options or CleanOptions()
        self.report = report or CleaningReport(options_used=self.options.to_dict())
        self.rules: List[CleaningRule] = []

    def register_rule(self, rule: CleaningRule):
        """
        Register a cleaning rule.

        Args:
            rule: Cleaning rule to register
        """
        self.rules.append(rule)
        # Sort rules by priority (lower = earlier)
        self.rules.sort(key=lambda r: r.priority)

    def register_rules(self, rules: List[CleaningRule]):
        """
        Register multiple cleaning rules.

        Args:
            rules: List of rules to register
        """
        for rule in rules:
            self.register_rule(rule)

    def rules_for(self, stage: Stage) -> List[CleaningRule]:
        """Registered rules of one stage, in execution order."""
        return [rule for rule in self.rules if rule.stage is stage]

    def run_stage(self, table: Table, stage: Stage) -> Table:
        """
        Run every rule of ``stage`` over ``table``.

        Args:
            table: Input Table
            stage: Stage whose rules to run

        Returns:
            The Table produced by the last rule of the stage
        """
        for rule in self.rules_for(stage):
            logger.info(f"Running rule: {rule.name} (priority={rule.priority})")

            result: CleaningResult = rule.clean(table)
            table = result.table

            for change in result.changes:
                self.report.add_change(change.to_dict())

            for warning in result.warnings:
                self.report.add_warning(f"[{rule.name}] {warning}")

            if result.stats:
                self.report.add_rule_stats(rule.name, result.stats)

            logger.info(f"Rule '{rule.name}' completed: {len(result.changes)} changes, {len(result.warnings)} warnings")

        return table

    def clean(self, table: Table) -> Tuple[Table, CleaningReport]:
        """
        Clean a Table using registered rules, all stages in order.

        Args:
            table: Input Table to clean

        Returns:
            Tuple of (cleaned Table, cleaning report)
        """
        self.report.original_shape = table.shape
        logger.info(f"Starting data cleaning with {len(self.rules)} rules")

        for stage in Stage:
            table = self.run_stage(table, stage)

        self.finish(table)
        return table, self.report

    def finish(self, table: Table):
        """Record the final shape and headers in the report."""
        self.report.cleaned_shape = table.shape
        self.report.columns_kept = list(table.headers)
        logger.info(f"Cleaning completed: {self.report.original_shape} → {self.report.cleaned_shape}")

    def register_default_rules(self) -> "DataCleaner":
        """
        Register the rules the options ask for.

        Transform order is fixed: whitespace, case, dates, types. Filters
        run projection, empty columns, empty rows, then validation;
        deduplication runs last.
        """
        # Import rules here to avoid circular imports
        from .rules.whitespace import WhitespaceRule
        from .rules.text_case import TextCaseRule
        from .rules.dates import DateNormalizationRule
        from .rules.types import TypeNormalizationRule
        from .rules.projection import ColumnProjectionRule
        from .rules.empty import EmptyColumnRule, EmptyRowRule
        from .rules.validation import FormatValidationRule
        from .rules.dedupe import DeduplicationRule

        options = self.options

        if options.trim or options.collapse_spaces:
            self.register_rule(WhitespaceRule(trim=options.trim, collapse_spaces=options.collapse_spaces))

        if options.text_case is not TextCase.NONE:
            self.register_rule(TextCaseRule(options.text_case))

        if options.date_format is not DateFormat.NONE:
            self.register_rule(DateNormalizationRule(options.date_format))

        if options.normalize_types:
            self.register_rule(TypeNormalizationRule())

        # Without a selection every column is kept. Dedupe keys resolve
        # against the full header row, so unselected keys are carried along.
        if options.columns:
            self.register_rule(ColumnProjectionRule(
                options.columns,
                keep_order=options.keep_order,
                carry=options.dedupe_keys,
            ))

        if options.drop_empty_cols:
            self.register_rule(EmptyColumnRule())

        if options.drop_empty_rows:
            self.register_rule(EmptyRowRule())

        if options.validate_email:
            self.register_rule(FormatValidationRule(ColumnRole.EMAIL, remove_invalid=options.remove_invalid_emails))

        if options.validate_url:
            self.register_rule(FormatValidationRule(ColumnRole.URL, remove_invalid=options.remove_invalid_urls))

        if options.dedupe_keys:
            self.register_rule(DeduplicationRule(options.dedupe_keys))

        return self

    def __repr__(self) -> str:
        return f"<DataCleaner: {len(self.rules)} rules registered>"
