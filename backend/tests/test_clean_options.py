"""
Tests for CleanOptions form parsing.
"""
import pytest

from sheet_cleaner.cleaners.config import (
    CleanOptions,
    DateFormat,
    OutputFormat,
    TextCase,
    parse_form_bool,
    split_names,
)
from sheet_cleaner.core.errors import ValidationError


def test_split_names():
    assert split_names("Name, Email ,,") == ("Name", "Email")
    assert split_names("") == ()
    assert split_names(None) == ()


class TestParseFormBool:
    """Tests for parse_form_bool."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", "on"])
    def test_true(self, value):
        assert parse_form_bool("trim", value, False) is True

    @pytest.mark.parametrize("value", ["false", "0", "No", "off"])
    def test_false(self, value):
        assert parse_form_bool("trim", value, True) is False

    def test_blank_uses_default(self):
        assert parse_form_bool("trim", None, True) is True
        assert parse_form_bool("trim", "  ", False) is False

    def test_invalid(self):
        with pytest.raises(ValidationError, match="trim"):
            parse_form_bool("trim", "maybe", True)


class TestFromForm:
    """Tests for CleanOptions.from_form."""

    def test_defaults(self):
        options = CleanOptions.from_form({"columns": "Name"})

        assert options.columns == ("Name",)
        assert options.trim is True
        assert options.collapse_spaces is True
        assert options.drop_empty_rows is True
        assert options.drop_empty_cols is True
        assert options.keep_order is True
        assert options.text_case is TextCase.NONE
        assert options.date_format is DateFormat.NONE
        assert options.normalize_types is False
        assert options.validate_email is False
        assert options.validate_url is False
        assert options.dedupe_keys == ()
        assert options.output_format is OutputFormat.CSV

    def test_all_fields(self):
        options = CleanOptions.from_form({
            "columns": "Name,Email",
            "trim": "false",
            "collapseSpaces": "0",
            "textCase": "Title",
            "dateFormat": "iso",
            "dedupeKeys": "Email",
            "dropEmptyRows": "no",
            "dropEmptyCols": "off",
            "normalizeTypes": "true",
            "validateEmail": "true",
            "removeInvalidEmails": "1",
            "validateUrl": "yes",
            "removeInvalidUrls": "on",
            "outputFormat": "XLSX",
            "keepOrder": "false",
        })

        assert options.columns == ("Name", "Email")
        assert options.trim is False
        assert options.collapse_spaces is False
        assert options.text_case is TextCase.TITLE
        assert options.date_format is DateFormat.ISO
        assert options.dedupe_keys == ("Email",)
        assert options.drop_empty_rows is False
        assert options.drop_empty_cols is False
        assert options.normalize_types is True
        assert options.validate_email is True
        assert options.remove_invalid_emails is True
        assert options.validate_url is True
        assert options.remove_invalid_urls is True
        assert options.output_format is OutputFormat.XLSX
        assert options.keep_order is False

    def test_columns_required(self):
        with pytest.raises(ValidationError, match="No columns provided"):
            CleanOptions.from_form({})

        with pytest.raises(ValidationError, match="No columns provided"):
            CleanOptions.from_form({"columns": " , "})

    def test_invalid_choice(self):
        with pytest.raises(ValidationError, match="textCase"):
            CleanOptions.from_form({"columns": "Name", "textCase": "sponge"})

        with pytest.raises(ValidationError, match="outputFormat"):
            CleanOptions.from_form({"columns": "Name", "outputFormat": "pdf"})

    def test_invalid_bool(self):
        with pytest.raises(ValidationError) as exc_info:
            CleanOptions.from_form({"columns": "Name", "validateEmail": "sure"})
        assert exc_info.value.status_code == 400


def test_options_are_immutable():
    options = CleanOptions(columns=["Name"])

    assert options.columns == ("Name",)
    with pytest.raises(AttributeError):
        options.trim = False


def test_describe_lists_every_form_field():
    fields = {field["name"]: field for field in CleanOptions.describe()["fields"]}

    assert len(fields) == 15
    assert fields["columns"]["required"] is True
    assert fields["trim"]["default"] is True
    assert fields["textCase"]["choices"] == ["none", "lower", "upper", "title"]
    assert fields["outputFormat"]["default"] == "csv"
    assert fields["dedupeKeys"]["default"] == ""


def test_to_dict_is_plain():
    data = CleanOptions(columns=("Name",), text_case="upper").to_dict()

    assert data["columns"] == ["Name"]
    assert data["text_case"] == "upper"
