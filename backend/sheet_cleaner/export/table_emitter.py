"""
Tabular encoder - serializes a cleaned Table to CSV or XLSX bytes.

Polars-based implementation:
- CSV: write_csv(separator=',', quote_style='necessary', line_terminator='\n'),
  UTF-8, header row first
- XLSX: write_excel into an in-memory xlsxwriter workbook, single sheet,
  header row first, every cell written as text

The header row is written as the first data row so duplicate header
names never reach Polars column naming.
"""
import io
import logging
import re
from typing import Optional

import polars as pl
import xlsxwriter

from sheet_cleaner.cleaners.base import Table
from sheet_cleaner.cleaners.config import OutputFormat
from sheet_cleaner.core.config import settings
from sheet_cleaner.core.errors import EncodingError

logger = logging.getLogger(__name__)

_INPUT_SUFFIX = re.compile(r"\.(xlsx|xls|csv)$", re.IGNORECASE)


def cleaned_filename(original: Optional[str], output_format: OutputFormat) -> str:
    """
    Suggested download name: ``cleaned_<base>.<ext>``.

    ``<base>`` is the original name without a .csv/.xlsx/.xls suffix.
    """
    base = _INPUT_SUFFIX.sub("", original or "") or "file"
    return f"cleaned_{base}{OutputFormat(output_format).extension}"


def _with_header_row(table: Table) -> pl.DataFrame:
    header = pl.DataFrame(
        {name: [header] for name, header in zip(table.frame.columns, table.headers)},
        schema={name: pl.String for name in table.frame.columns},
    )
    return pl.concat([header, table.frame], how="vertical")


def _empty_as_null(frame: pl.DataFrame) -> pl.DataFrame:
    return frame.with_columns(
        [
            pl.when(pl.col(name) == "").then(None).otherwise(pl.col(name)).alias(name)
            for name in frame.columns
        ]
    )


def emit_csv(table: Table) -> bytes:
    """
    Serialize a Table to RFC 4180 CSV bytes.

    Only fields holding the separator, a quote or a line break are quoted.
    Empty cells are written bare (Polars quotes empty strings, so they are
    written as nulls). A single-column table keeps ``""`` for empty cells,
    otherwise they would read back as blank lines.
    """
    if table.width == 0:
        return b""

    frame = _with_header_row(table)
    if table.width > 1:
        frame = _empty_as_null(frame)

    buffer = io.BytesIO()
    frame.write_csv(
        buffer,
        include_header=False,
        separator=",",
        quote_style="necessary",
        line_terminator="\n",
        null_value="",
    )
    return buffer.getvalue()


def emit_xlsx(table: Table, sheet_name: Optional[str] = None) -> bytes:
    """Serialize a Table to a single-sheet XLSX workbook."""
    sheet_name = sheet_name or settings.XLSX_SHEET_NAME
    buffer = io.BytesIO()
    workbook = xlsxwriter.Workbook(
        buffer,
        {"in_memory": True, "strings_to_numbers": False, "strings_to_formulas": False, "strings_to_urls": False},
    )
    try:
        if table.width == 0:
            workbook.add_worksheet(sheet_name)
        else:
            _with_header_row(table).write_excel(
                workbook=workbook,
                worksheet=sheet_name,
                include_header=False,
                autofit=True,
            )
    finally:
        workbook.close()
    return buffer.getvalue()


def emit_table(table: Table, output_format: OutputFormat) -> bytes:
    """
    Serialize a Table in the requested format.

    Raises:
        EncodingError: If serialization fails
    """
    output_format = OutputFormat(output_format)
    try:
        if output_format is OutputFormat.XLSX:
            content = emit_xlsx(table)
        else:
            content = emit_csv(table)
    except EncodingError:
        raise
    except Exception as e:
        raise EncodingError(f"Could not write {output_format.value}: {e}")

    logger.info(
        "Encoded %s rows × %s columns as %s (%s bytes)",
        table.height,
        table.width,
        output_format.value,
        len(content),
    )
    return content
