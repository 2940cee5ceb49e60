"""
Clean service - runs one upload through the whole cleaning pipeline.

Stages run strictly in order:

    RECEIVED -> DECODED -> TRANSFORMED -> FILTERED -> DEDUPLICATED -> ENCODED -> DONE

Any failure moves the run to FAILED and raises CleanFailure naming the stage
that was running. No partial output is ever returned.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from sheet_cleaner.cleaners.base import Stage, Table
from sheet_cleaner.cleaners.config import CleanOptions
from sheet_cleaner.cleaners.data_cleaner import DataCleaner
from sheet_cleaner.cleaners.report import CleaningReport
from sheet_cleaner.core.errors import CleanError, CleanFailure, EncodingError, FormatError
from sheet_cleaner.export.table_emitter import cleaned_filename, emit_table
from sheet_cleaner.loaders.table_loader import detect_format, load_table

logger = logging.getLogger(__name__)


class CleanState(str, Enum):
    RECEIVED = "received"
    DECODED = "decoded"
    TRANSFORMED = "transformed"
    FILTERED = "filtered"
    DEDUPLICATED = "deduplicated"
    ENCODED = "encoded"
    DONE = "done"
    FAILED = "failed"


# Stage name reported on failure, keyed by the state the run was leaving
STAGE_NAMES = {
    CleanState.RECEIVED: "decode",
    CleanState.DECODED: "transform",
    CleanState.TRANSFORMED: "filter",
    CleanState.FILTERED: "deduplicate",
    CleanState.DEDUPLICATED: "encode",
    CleanState.ENCODED: "finalize",
}

# Error kind used when a stage raises something that is not a CleanError
FALLBACK_ERRORS = {
    "decode": FormatError,
    "encode": EncodingError,
}


@dataclass
class CleanedFile:
    """Successful result of a cleaning run."""

    filename: str
    media_type: str
    content: bytes
    report: CleaningReport


@dataclass
class CleanRun:
    """
    State of one cleaning run.

    Holds the request-scoped Table; nothing is shared between runs.
    """

    filename: str
    content_type: Optional[str]
    options: CleanOptions
    state: CleanState = CleanState.RECEIVED
    history: List[CleanState] = field(default_factory=lambda: [CleanState.RECEIVED])
    table: Optional[Table] = None

    def advance(self, state: CleanState):
        self.state = state
        self.history.append(state)
        logger.debug("Clean run for '%s' -> %s", self.filename, state.value)

    def fail(self):
        self.table = None
        self.state = CleanState.FAILED
        self.history.append(CleanState.FAILED)


class CleanService:
    """Sequences decode, clean and encode for one upload."""

    def run(
        self,
        content: bytes,
        filename: Optional[str],
        options: CleanOptions,
        content_type: Optional[str] = None,
    ) -> CleanedFile:
        """
        Clean an uploaded file.

        Args:
            content: Raw upload bytes
            filename: Original upload name
            options: Validated cleaning options
            content_type: MIME type reported by the client

        Returns:
            CleanedFile with the encoded output and the cleaning report

        Raises:
            CleanFailure: If any stage fails
        """
        run = CleanRun(filename=filename or "file", content_type=content_type, options=options)
        cleaner = DataCleaner(options).register_default_rules()
        logger.info(f"Cleaning '{run.filename}' with {len(cleaner.rules)} rules")

        try:
            file_format = detect_format(filename, content_type)
            run.table = load_table(content, file_format)
            cleaner.report.original_shape = run.table.shape
            run.advance(CleanState.DECODED)

            run.table = cleaner.run_stage(run.table, Stage.TRANSFORM)
            run.advance(CleanState.TRANSFORMED)

            run.table = cleaner.run_stage(run.table, Stage.FILTER)
            run.advance(CleanState.FILTERED)

            run.table = cleaner.run_stage(run.table, Stage.DEDUPLICATE)
            run.advance(CleanState.DEDUPLICATED)

            output = emit_table(run.table, options.output_format)
            run.advance(CleanState.ENCODED)

            cleaner.finish(run.table)
            result = CleanedFile(
                filename=cleaned_filename(filename, options.output_format),
                media_type=options.output_format.media_type,
                content=output,
                report=cleaner.report,
            )
            run.advance(CleanState.DONE)
        except Exception as e:
            stage = STAGE_NAMES.get(run.state, run.state.value)
            run.fail()
            raise self._failure(stage, e) from e
        finally:
            # Release the request's Table whatever the outcome
            run.table = None

        logger.info(
            "Cleaned '%s': %s → %s",
            run.filename,
            result.report.original_shape,
            result.report.cleaned_shape,
        )
        logger.debug("Cleaning report for '%s':\n%s", run.filename, result.report.to_summary())
        return result

    @staticmethod
    def _failure(stage: str, error: Exception) -> CleanFailure:
        if isinstance(error, CleanError):
            kind, status_code, detail = error.kind, error.status_code, error.message
        else:
            fallback = FALLBACK_ERRORS.get(stage, CleanError)
            kind, status_code, detail = fallback.kind, fallback.status_code, str(error)
            logger.error(f"Stage '{stage}' failed unexpectedly: {error}", exc_info=True)

        logger.warning(f"Clean run failed in {stage}: {kind}: {detail}")
        return CleanFailure(stage, kind, detail, status_code=status_code)
