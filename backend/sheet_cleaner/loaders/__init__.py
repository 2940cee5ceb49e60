"""
Loaders for uploaded spreadsheet files.
"""
from sheet_cleaner.loaders.table_loader import FileFormat, detect_format, load_table

__all__ = ["FileFormat", "detect_format", "load_table"]
