"""
Configuration for one cleaning request.

CleanOptions is the flat, immutable option set sent by the upload form.
Each rule receives only the fields it needs.
"""
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Iterable, Mapping, Optional, Tuple

from ..core.errors import ValidationError


class TextCase(str, Enum):
    NONE = "none"
    LOWER = "lower"
    UPPER = "upper"
    TITLE = "title"


class DateFormat(str, Enum):
    NONE = "none"
    ISO = "iso"


class OutputFormat(str, Enum):
    CSV = "csv"
    XLSX = "xlsx"

    @property
    def extension(self) -> str:
        return f".{self.value}"

    @property
    def media_type(self) -> str:
        if self is OutputFormat.XLSX:
            return "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        return "text/csv"


TRUE_STRINGS = {"true", "1", "yes", "on"}
FALSE_STRINGS = {"false", "0", "no", "off"}

# Form field name -> CleanOptions attribute
FORM_FIELDS = {
    "columns": "columns",
    "trim": "trim",
    "collapseSpaces": "collapse_spaces",
    "textCase": "text_case",
    "dateFormat": "date_format",
    "dedupeKeys": "dedupe_keys",
    "dropEmptyRows": "drop_empty_rows",
    "dropEmptyCols": "drop_empty_cols",
    "normalizeTypes": "normalize_types",
    "validateEmail": "validate_email",
    "removeInvalidEmails": "remove_invalid_emails",
    "validateUrl": "validate_url",
    "removeInvalidUrls": "remove_invalid_urls",
    "outputFormat": "output_format",
    "keepOrder": "keep_order",
}


def split_names(value: Optional[str]) -> Tuple[str, ...]:
    """Split a comma-joined name list, trimming tokens and dropping blanks."""
    if not value:
        return ()
    return tuple(token.strip() for token in value.split(",") if token.strip())


def parse_form_bool(name: str, value: Optional[str], default: bool) -> bool:
    """Parse a string-encoded boolean form field."""
    if value is None or not value.strip():
        return default
    lowered = value.strip().lower()
    if lowered in TRUE_STRINGS:
        return True
    if lowered in FALSE_STRINGS:
        return False
    raise ValidationError(f"Invalid boolean for '{name}': {value!r}")


def _parse_choice(name: str, value: Optional[str], enum_cls, default):
    if value is None or not value.strip():
        return default
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid value for '{name}': {value!r} (expected one of: {allowed})")


@dataclass(frozen=True)
class CleanOptions:
    """
    Options for one cleaning request.

    Defaults mirror the upload form: whitespace trimming, space collapsing
    and empty row/column removal are on; everything else is off.
    """

    # Column selection (case-insensitive header names)
    columns: Tuple[str, ...] = ()
    keep_order: bool = True

    # Field transforms, applied in this order
    trim: bool = True
    collapse_spaces: bool = True
    text_case: TextCase = TextCase.NONE
    date_format: DateFormat = DateFormat.NONE
    normalize_types: bool = False

    # Row/column filters
    drop_empty_rows: bool = True
    drop_empty_cols: bool = True
    validate_email: bool = False
    remove_invalid_emails: bool = False
    validate_url: bool = False
    remove_invalid_urls: bool = False

    # Deduplication (case-insensitive header names; empty disables)
    dedupe_keys: Tuple[str, ...] = ()

    # Output
    output_format: OutputFormat = OutputFormat.CSV

    def __post_init__(self):
        # Accept plain lists/strings from library callers
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "dedupe_keys", tuple(self.dedupe_keys))
        object.__setattr__(self, "text_case", TextCase(self.text_case))
        object.__setattr__(self, "date_format", DateFormat(self.date_format))
        object.__setattr__(self, "output_format", OutputFormat(self.output_format))

    def validate(self) -> "CleanOptions":
        """Raise ValidationError if the options cannot describe a request."""
        if not self.columns:
            raise ValidationError("No columns provided")
        return self

    @classmethod
    def from_form(cls, form: Mapping[str, Optional[str]]) -> "CleanOptions":
        """
        Build options from string-encoded form fields.

        Missing or blank fields take their defaults. Unknown fields are
        ignored.

        Raises:
            ValidationError: If a value is malformed or no column is selected
        """
        defaults = cls()
        options = cls(
            columns=split_names(form.get("columns")),
            keep_order=parse_form_bool("keepOrder", form.get("keepOrder"), defaults.keep_order),
            trim=parse_form_bool("trim", form.get("trim"), defaults.trim),
            collapse_spaces=parse_form_bool("collapseSpaces", form.get("collapseSpaces"), defaults.collapse_spaces),
            text_case=_parse_choice("textCase", form.get("textCase"), TextCase, defaults.text_case),
            date_format=_parse_choice("dateFormat", form.get("dateFormat"), DateFormat, defaults.date_format),
            normalize_types=parse_form_bool("normalizeTypes", form.get("normalizeTypes"), defaults.normalize_types),
            drop_empty_rows=parse_form_bool("dropEmptyRows", form.get("dropEmptyRows"), defaults.drop_empty_rows),
            drop_empty_cols=parse_form_bool("dropEmptyCols", form.get("dropEmptyCols"), defaults.drop_empty_cols),
            validate_email=parse_form_bool("validateEmail", form.get("validateEmail"), defaults.validate_email),
            remove_invalid_emails=parse_form_bool(
                "removeInvalidEmails", form.get("removeInvalidEmails"), defaults.remove_invalid_emails
            ),
            validate_url=parse_form_bool("validateUrl", form.get("validateUrl"), defaults.validate_url),
            remove_invalid_urls=parse_form_bool(
                "removeInvalidUrls", form.get("removeInvalidUrls"), defaults.remove_invalid_urls
            ),
            dedupe_keys=split_names(form.get("dedupeKeys")),
            output_format=_parse_choice("outputFormat", form.get("outputFormat"), OutputFormat, defaults.output_format),
        )
        return options.validate()

    @classmethod
    def describe(cls) -> dict:
        """Form contract: field names, allowed values and defaults."""
        defaults = asdict(cls())
        choices = {
            "text_case": [m.value for m in TextCase],
            "date_format": [m.value for m in DateFormat],
            "output_format": [m.value for m in OutputFormat],
        }
        fields = []
        for form_name, attr in FORM_FIELDS.items():
            default = defaults[attr]
            if isinstance(default, Enum):
                default = default.value
            elif isinstance(default, tuple):
                default = ",".join(default)
            fields.append({
                "name": form_name,
                "default": default,
                "choices": choices.get(attr),
                "required": attr == "columns",
            })
        return {"fields": fields}

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, Enum):
                data[key] = value.value
            elif isinstance(value, tuple):
                data[key] = list(value)
        return data


def resolve_names(headers: Iterable[str], names: Iterable[str]) -> list:
    """
    Resolve names to header positions, case-insensitively.

    Each name binds to the first header it matches; names that match no
    header, and names already bound, are ignored.

    Returns:
        Header positions in the order of ``names``
    """
    lowered = [h.lower() for h in headers]
    positions = []
    for name in names:
        target = name.strip().lower()
        if not target:
            continue
        try:
            position = lowered.index(target)
        except ValueError:
            continue
        if position not in positions:
            positions.append(position)
    return positions
