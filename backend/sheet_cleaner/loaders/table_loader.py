"""
Tabular decoder - turns uploaded CSV/Excel bytes into a Table.

Polars-based implementation:
- CSV: read_csv(has_header=False, infer_schema=False), every cell a string,
  missing fields read as null and filled with ""
- Excel: read_excel(sheet_id=1, has_header=False, infer_schema_length=0),
  first sheet only
- Row 0 is the header row; columns whose header is blank are dropped
- Ragged rows are padded with "" or truncated to the header width
"""
import codecs
import io
import logging
from enum import Enum
from pathlib import PurePath
from typing import Optional

import polars as pl

from sheet_cleaner.cleaners.base import Table, column_id
from sheet_cleaner.core.errors import FormatError

logger = logging.getLogger(__name__)


class FileFormat(str, Enum):
    CSV = "csv"
    XLSX = "xlsx"


EXTENSION_FORMATS = {
    ".csv": FileFormat.CSV,
    ".xlsx": FileFormat.XLSX,
    ".xls": FileFormat.XLSX,
}


def detect_format(filename: Optional[str], content_type: Optional[str] = None) -> FileFormat:
    """
    Decide the input format from the file name, then the MIME type.

    Args:
        filename: Original upload name
        content_type: MIME type reported by the client

    Returns:
        Detected FileFormat

    Raises:
        FormatError: If neither the extension nor the MIME type is supported
    """
    suffix = PurePath(filename or "").suffix.lower()
    if suffix in EXTENSION_FORMATS:
        return EXTENSION_FORMATS[suffix]

    mime = (content_type or "").lower()
    if "csv" in mime:
        return FileFormat.CSV
    if "sheet" in mime or "excel" in mime:
        return FileFormat.XLSX

    raise FormatError("Unsupported file type")


def load_table(content: bytes, file_format: FileFormat) -> Table:
    """
    Decode raw bytes into a Table.

    Args:
        content: Uploaded file bytes
        file_format: Declared or detected format

    Returns:
        Table with trimmed, non-blank headers

    Raises:
        FormatError: If the bytes cannot be parsed or contain no rows
    """
    file_format = FileFormat(file_format)
    if file_format is FileFormat.CSV:
        raw = _read_csv(content)
    else:
        raw = _read_excel(content)

    if raw.height == 0:
        raise FormatError("File contains no rows")

    table = _to_table(raw)
    logger.info(
        "Decoded %s: %s rows × %s columns (%s blank headers dropped)",
        file_format.value,
        table.height,
        table.width,
        raw.width - table.width,
    )
    return table


def _read_csv(content: bytes) -> pl.DataFrame:
    if content.startswith(codecs.BOM_UTF8):
        content = content[len(codecs.BOM_UTF8):]

    if not content.strip():
        raise FormatError("File contains no rows")

    try:
        return pl.read_csv(
            io.BytesIO(content),
            has_header=False,
            infer_schema=False,
            truncate_ragged_lines=True,
        )
    except pl.exceptions.NoDataError:
        raise FormatError("File contains no rows")
    except (pl.exceptions.PolarsError, ValueError, OSError) as e:
        raise FormatError(f"Could not parse CSV: {e}")


def _read_excel(content: bytes) -> pl.DataFrame:
    if not content:
        raise FormatError("File contains no rows")

    try:
        return pl.read_excel(
            io.BytesIO(content),
            sheet_id=1,
            has_header=False,
            infer_schema_length=0,
            drop_empty_rows=False,
            drop_empty_cols=False,
        )
    except pl.exceptions.NoDataError:
        raise FormatError("File contains no rows")
    except Exception as e:
        # fastexcel raises its own exception types for corrupt workbooks
        raise FormatError(f"Could not parse spreadsheet: {e}")


def _to_table(raw: pl.DataFrame) -> Table:
    """Split off the header row and drop columns with blank headers."""
    raw = raw.with_columns(pl.all().cast(pl.String).fill_null(""))

    header_row = raw.row(0)
    keep = [i for i, value in enumerate(header_row) if str(value).strip()]
    headers = [str(header_row[i]).strip() for i in keep]

    data = raw.slice(1)
    frame = data.select(
        [pl.col(raw.columns[i]).alias(column_id(position)) for position, i in enumerate(keep)]
    )
    return Table(headers=headers, frame=frame)
