"""
Export module for serializing cleaned tables.
"""
from sheet_cleaner.export.table_emitter import cleaned_filename, emit_csv, emit_table, emit_xlsx

__all__ = ["cleaned_filename", "emit_csv", "emit_table", "emit_xlsx"]
