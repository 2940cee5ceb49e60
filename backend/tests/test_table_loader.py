"""
Tests for the tabular decoder.

Validates:
- Format detection by extension, then MIME type
- Header extraction (trimmed, blank headers dropped with their column)
- Ragged row repair, RFC 4180 quoting, BOM handling
- FormatError on unparseable or empty input
"""
import pytest

from sheet_cleaner.cleaners.base import Table
from sheet_cleaner.core.errors import FormatError
from sheet_cleaner.export.table_emitter import emit_csv, emit_xlsx
from sheet_cleaner.loaders.table_loader import FileFormat, detect_format, load_table


class TestDetectFormat:
    """Tests for detect_format."""

    def test_by_extension(self):
        assert detect_format("data.csv") is FileFormat.CSV
        assert detect_format("DATA.CSV") is FileFormat.CSV
        assert detect_format("book.xlsx") is FileFormat.XLSX
        assert detect_format("legacy.xls") is FileFormat.XLSX

    def test_extension_beats_mime(self):
        assert detect_format("data.csv", "application/octet-stream") is FileFormat.CSV

    def test_by_mime(self):
        assert detect_format("upload", "text/csv") is FileFormat.CSV
        assert detect_format("upload", "application/vnd.ms-excel") is FileFormat.XLSX
        assert detect_format(
            "upload", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        ) is FileFormat.XLSX

    def test_unsupported(self):
        with pytest.raises(FormatError, match="Unsupported file type"):
            detect_format("notes.txt", "text/plain")

        with pytest.raises(FormatError, match="Unsupported file type"):
            detect_format(None, None)


class TestLoadCsv:
    """Tests for CSV decoding."""

    def test_basic(self):
        table = load_table(b"Name,Email\nJohn,j@x.com\nJane,jane@x.com\n", FileFormat.CSV)

        assert table.headers == ["Name", "Email"]
        assert table.rows() == [["John", "j@x.com"], ["Jane", "jane@x.com"]]

    def test_cell_whitespace_preserved(self):
        table = load_table(b"Name\n  padded  \n", FileFormat.CSV)
        assert table.rows() == [["  padded  "]]

    def test_headers_trimmed(self):
        table = load_table(b" Name , Age \nA,1\n", FileFormat.CSV)
        assert table.headers == ["Name", "Age"]

    def test_blank_header_drops_column(self):
        table = load_table(b"Name, ,Age\nA,x,1\nB,y,2\n", FileFormat.CSV)

        assert table.headers == ["Name", "Age"]
        assert table.rows() == [["A", "1"], ["B", "2"]]

    def test_empty_fields_become_empty_strings(self):
        table = load_table(b"Name,Email,Age\nA,,1\n,b@x.com,\n", FileFormat.CSV)

        assert table.rows() == [["A", "", "1"], ["", "b@x.com", ""]]
        assert table.frame.null_count().sum_horizontal().item() == 0

    def test_duplicate_headers_kept(self):
        table = load_table(b"Name,Name\nA,B\n", FileFormat.CSV)

        assert table.headers == ["Name", "Name"]
        assert table.rows() == [["A", "B"]]

    def test_ragged_rows_repaired(self):
        table = load_table(b"a,b,c\n1\n1,2,3,4\n", FileFormat.CSV)

        assert table.rows() == [["1", "", ""], ["1", "2", "3"]]
        assert all(len(row) == table.width for row in table.rows())

    def test_quoted_fields(self):
        content = b'Name,Note\n"Doe, John","said ""hi""\nthen left"\n'
        table = load_table(content, FileFormat.CSV)

        assert table.rows() == [["Doe, John", 'said "hi"\nthen left']]

    def test_utf8_bom_ignored(self):
        table = load_table(b"\xef\xbb\xbfName\nA\n", FileFormat.CSV)
        assert table.headers == ["Name"]

    def test_header_only(self):
        table = load_table(b"Name,Email\n", FileFormat.CSV)

        assert table.headers == ["Name", "Email"]
        assert table.height == 0

    def test_empty_file_raises(self):
        with pytest.raises(FormatError, match="no rows"):
            load_table(b"", FileFormat.CSV)

        with pytest.raises(FormatError, match="no rows"):
            load_table(b"  \n\n", FileFormat.CSV)


class TestLoadExcel:
    """Tests for XLSX decoding."""

    def test_reads_first_sheet(self):
        source = Table.from_rows(["Name", "City"], [["Ann", "Oslo"], ["Bob", "Rome"]])
        table = load_table(emit_xlsx(source), FileFormat.XLSX)

        assert table.headers == ["Name", "City"]
        assert table.rows() == [["Ann", "Oslo"], ["Bob", "Rome"]]

    def test_corrupt_workbook_raises(self):
        with pytest.raises(FormatError):
            load_table(b"this is not a workbook", FileFormat.XLSX)

    def test_empty_bytes_raise(self):
        with pytest.raises(FormatError, match="no rows"):
            load_table(b"", FileFormat.XLSX)


def test_csv_round_trip():
    """Encoding to CSV and decoding again reproduces headers and cells."""
    source = Table.from_rows(
        ["Name", "Note", "Empty"],
        [
            ["Doe, John", 'quote "here"', ""],
            ["Multi", "line1\nline2", "x"],
            ["  spaced  ", "", ""],
        ],
    )

    decoded = load_table(emit_csv(source), FileFormat.CSV)

    assert decoded.headers == source.headers
    assert decoded.rows() == source.rows()
