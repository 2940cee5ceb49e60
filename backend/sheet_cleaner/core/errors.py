"""
Error taxonomy for the cleaning engine.

Every engine error is terminal for the request: the caller never receives
partial output. Per-cell problems (an unparseable date, a non-numeric value)
are not errors at all, the cell is simply left unchanged.
"""
from typing import Optional


class CleanError(Exception):
    """Base class for all cleaning engine errors."""

    kind: str = "InternalError"
    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class FormatError(CleanError):
    """Input is unsupported, unparseable or has no rows."""

    kind = "FormatError"
    status_code = 400


class ValidationError(CleanError):
    """Option values are malformed or the request cannot be resolved."""

    kind = "ValidationError"
    status_code = 400


class EncodingError(CleanError):
    """The cleaned table could not be serialized."""

    kind = "EncodingError"
    status_code = 500


class CleanFailure(CleanError):
    """
    A pipeline stage failed.

    Carries the stage that was running and the kind of the originating error
    so the HTTP layer can report it as plain text.
    """

    def __init__(self, stage: str, kind: str, detail: str, status_code: int = 500):
        self.stage = stage
        self.kind = kind
        self.detail = detail
        super().__init__(f"{stage} failed: {kind}: {detail}", status_code=status_code)
