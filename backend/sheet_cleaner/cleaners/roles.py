"""
Semantic column roles inferred from header names.

A header is normalized (lower-cased, spaces, "-" and "_" removed) and
matched by substring:

- email: contains "email"   ("Email", "E-Mail", "work_email", "EmailAddress")
- url:   contains "url", "website", "homepage" or "weblink"
         ("URL", "Website", "Company Web Site", "profile_url")

Every header that matches a role is validated for that role.
"""
import re
from enum import Enum
from typing import List, Sequence


class ColumnRole(str, Enum):
    EMAIL = "email"
    URL = "url"


ROLE_KEYWORDS = {
    ColumnRole.EMAIL: ("email",),
    ColumnRole.URL: ("url", "website", "homepage", "weblink"),
}

_SEPARATORS = re.compile(r"[\s\-_]+")


def normalize_header(header: str) -> str:
    """Lower-case a header and strip spaces, dashes and underscores."""
    return _SEPARATORS.sub("", header.lower())


def has_role(header: str, role: ColumnRole) -> bool:
    """True if ``header`` names a column playing ``role``."""
    normalized = normalize_header(header)
    return any(keyword in normalized for keyword in ROLE_KEYWORDS[role])


def columns_with_role(headers: Sequence[str], role: ColumnRole) -> List[int]:
    """Positions of all headers playing ``role``, in header order."""
    return [i for i, header in enumerate(headers) if has_role(header, role)]
