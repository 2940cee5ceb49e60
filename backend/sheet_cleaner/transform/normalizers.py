"""
Idempotent per-cell normalizers for the cleaning pipeline.

All normalizers must be idempotent: normalized(normalized(x)) == normalized(x)
and are pure functions of a single cell value. They never consult other
cells or rows, so the rules can apply them column by column.

Functions that may fail to recognize a value return None (dates) or the
value unchanged (types); they never raise for bad cell content.
"""
import re
from datetime import datetime
from typing import Optional
from urllib.parse import urlsplit

from email_validator import validate_email, EmailNotValidError


_WHITESPACE_RUN = re.compile(r"\s+")
_TOKEN = re.compile(r"\S+")
_COMPACT_DATE = re.compile(r"^[0-9]{8}$")

COMPACT_DATE_FORMAT = "%Y%m%d"

# Tried in order; US month-first wins over EU day-first for ambiguous input.
DATE_FORMATS = [
    "%Y-%m-%d",  # ISO
    "%m/%d/%Y",  # US: 01/15/2024, 3/4/2024
    "%d/%m/%Y",  # EU: 15/01/2024
    "%m-%d-%Y",  # US: 01-15-2024
    "%d-%m-%Y",  # EU: 15-01-2024
    "%Y/%m/%d",  # Alternative: 2024/01/15
    "%d.%m.%Y",  # EU dotted: 15.01.2024
    "%b %d, %Y",  # Jan 15, 2024
    "%B %d, %Y",  # January 15, 2024
    "%d %b %Y",  # 15 Jan 2024
    "%d %B %Y",  # 15 January 2024
    COMPACT_DATE_FORMAT,  # Compact: 20240115, exactly eight digits
    "%Y-%m-%d %H:%M:%S",  # Spreadsheet date-time
    "%Y-%m-%dT%H:%M:%S",  # ISO date-time
]

TRUE_TOKENS = {"true", "yes", "1"}
FALSE_TOKENS = {"false", "no", "0"}

CURRENCY_SYMBOLS = "$€£¥"

_NUMBER = re.compile(
    r"^(?P<sign>[-+]?)\s*"
    r"(?P<currency>[" + re.escape(CURRENCY_SYMBOLS) + r"]?)\s*"
    r"(?P<sign2>[-+]?)"
    r"(?P<digits>[0-9]{1,3}(?:,[0-9]{3})+|[0-9]+)"
    r"(?P<fraction>\.[0-9]+)?"
    r"\s*(?P<percent>%?)$"
)

URL_SCHEMES_WITH_HOST = {"http", "https", "ftp", "ftps"}


def collapse_spaces(value: str) -> str:
    """Replace every run of whitespace with a single space."""
    return _WHITESPACE_RUN.sub(" ", value)


def to_title_case(value: str) -> str:
    """
    Capitalize the first letter of each whitespace-separated token.

    The rest of each token is lower-cased; the whitespace between tokens
    is preserved as-is.

    Idempotent: to_title_case("Hello World") == "Hello World"
    """
    return _TOKEN.sub(lambda m: m.group()[:1].upper() + m.group()[1:].lower(), value)


def normalize_date_iso(value: Optional[str]) -> Optional[str]:
    """
    Normalize a date to ISO format "YYYY-MM-DD".

    Tries the formats in DATE_FORMATS in order:
    - ISO: YYYY-MM-DD
    - US: m/d/yyyy, m-d-yyyy
    - EU: d/m/yyyy, d-m-yyyy, d.m.yyyy
    - Alternative: YYYY/MM/DD
    - Named months: "Jan 15, 2024", "15 Jan 2024"
    - Compact: YYYYMMDD
    - Date-times as written by spreadsheets

    Idempotent: normalize_date_iso("2024-01-15") == "2024-01-15"

    Args:
        value: Date string in various formats

    Returns:
        ISO date string, or None if the value is not a recognizable date
    """
    if not value:
        return None

    value_str = str(value).strip()
    if not value_str:
        return None

    for fmt in DATE_FORMATS:
        # strptime accepts unpadded fields, so "2023111" would parse
        if fmt == COMPACT_DATE_FORMAT and not _COMPACT_DATE.match(value_str):
            continue
        try:
            parsed = datetime.strptime(value_str, fmt)
        except ValueError:
            continue
        return parsed.strftime("%Y-%m-%d")

    return None


def parse_bool(value: Optional[str]) -> Optional[bool]:
    """
    Interpret a value as a boolean token.

    Recognizes (case-insensitive):
    - Truthy: true, yes, 1
    - Falsy: false, no, 0

    Returns:
        True/False, or None if the value is not a boolean token
    """
    if value is None:
        return None

    val_str = str(value).strip().lower()
    if val_str in TRUE_TOKENS:
        return True
    if val_str in FALSE_TOKENS:
        return False
    return None


def normalize_number(value: Optional[str]) -> Optional[str]:
    """
    Normalize a numeric string to its plain canonical form.

    Rules:
    - Optional sign, before or after a leading currency symbol ($ € £ ¥)
    - Thousands separators must group by three: "1,234,567"
    - Optional decimal fraction and trailing "%"
    - Output drops currency, separators, "%" and a leading "+"

    Idempotent: normalize_number("1234.50") == "1234.50"

    Returns:
        Canonical number string, or None if the value is not numeric
    """
    if value is None:
        return None

    match = _NUMBER.match(str(value).strip())
    if not match:
        return None

    signs = match.group("sign") + match.group("sign2")
    if len(signs) > 1:
        return None

    number = match.group("digits").replace(",", "") + (match.group("fraction") or "")
    if signs == "-":
        number = f"-{number}"
    return number


def normalize_type(value: Optional[str]) -> Optional[str]:
    """
    Normalize a cell to the canonical string form of its detected type.

    Boolean tokens are checked first, then numbers. Cells that match no
    recognized type are returned unchanged.

    Because "1" and "0" are boolean tokens, a quantity column holding only
    ones and zeros comes out as "true" and "false". Other integers such as
    "2" or "10" stay numeric.

    Idempotent: normalize_type(normalize_type(x)) == normalize_type(x)
    """
    if value is None:
        return value

    stripped = str(value).strip()
    if not stripped:
        return value

    as_bool = parse_bool(stripped)
    if as_bool is not None:
        return "true" if as_bool else "false"

    as_number = normalize_number(stripped)
    if as_number is not None:
        return as_number

    return value


def is_valid_email(value: Optional[str]) -> bool:
    """
    Check an email address.

    Empty values are considered valid (nothing to enforce). Deliverability
    (DNS) is never checked.
    """
    if value is None or not str(value).strip():
        return True

    try:
        validate_email(str(value).strip(), check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_url(value: Optional[str]) -> bool:
    """
    Check a URL.

    Accepts http(s)/ftp(s) URLs with a host, and mailto: links with an
    address. Empty values are considered valid.
    """
    if value is None or not str(value).strip():
        return True

    text = str(value).strip()
    if any(ch.isspace() for ch in text):
        return False

    try:
        parts = urlsplit(text)
        # Accessing the port validates it
        parts.port
    except ValueError:
        return False

    scheme = parts.scheme.lower()
    if scheme in URL_SCHEMES_WITH_HOST:
        return bool(parts.hostname)
    if scheme == "mailto":
        return bool(parts.path)
    return False
