"""
Shared fixtures for cleaning engine tests.
"""
import pytest

from sheet_cleaner.cleaners.base import Table
from sheet_cleaner.cleaners.config import CleanOptions
from sheet_cleaner.services.clean_service import CleanService


@pytest.fixture
def make_table():
    """Build a Table from headers and rows."""
    def _make(headers, rows):
        return Table.from_rows(headers, rows)
    return _make


@pytest.fixture
def service():
    return CleanService()


@pytest.fixture
def contacts_csv():
    """Messy contacts file with padding, an invalid email and a duplicate."""
    return b"Name,Email\n John , JOHN@X.COM \nJane,bad-email\nJohn,JOHN@X.COM\n"


@pytest.fixture
def contacts_options():
    return CleanOptions(
        columns=("Name", "Email"),
        trim=True,
        dedupe_keys=("Email",),
        validate_email=True,
        remove_invalid_emails=True,
    )
