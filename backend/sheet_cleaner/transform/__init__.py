"""
Transform module for per-cell normalization and validation.
"""
from sheet_cleaner.transform.normalizers import (
    collapse_spaces,
    to_title_case,
    normalize_date_iso,
    normalize_number,
    normalize_type,
    parse_bool,
    is_valid_email,
    is_valid_url,
)

__all__ = [
    "collapse_spaces",
    "to_title_case",
    "normalize_date_iso",
    "normalize_number",
    "normalize_type",
    "parse_bool",
    "is_valid_email",
    "is_valid_url",
]
