"""
Tests for CleaningReport tallies and serialization.
"""
import json

from sheet_cleaner.cleaners.report import CleaningReport


def _report():
    report = CleaningReport(original_shape=(5, 3), cleaned_shape=(2, 2), options_used={"trim": True})
    report.add_change({"type": "column_dropped", "description": "", "details": {"column": "Notes", "reason": "empty"}})
    report.add_change({"type": "row_dropped", "description": "", "details": {"rows_dropped": 2, "reason": "duplicate"}})
    report.add_change({"type": "row_dropped", "description": "", "details": {"rows_dropped": 1, "reason": "empty"}})
    report.add_change({"type": "value_invalid", "description": "", "details": {"role": "email", "invalid_values": 3}})
    report.add_warning("[Email Validation] 3 invalid email values left unchanged")
    return report


def test_tallies():
    report = _report()

    assert report.columns_dropped == ["Notes"]
    assert report.rows_dropped == {"duplicate": 2, "empty": 1}
    assert report.invalid_values == {"email": 3}
    assert report.rows_removed == 3
    assert report.columns_removed == 1


def test_to_dict_and_json():
    report = _report()
    data = report.to_dict()

    assert data["original_shape"] == {"rows": 5, "columns": 3}
    assert data["cleaned_shape"] == {"rows": 2, "columns": 2}
    assert data["summary"] == {"rows_removed": 3, "columns_removed": 1, "warnings_count": 1}
    assert len(data["changes"]) == 4
    assert json.loads(report.to_json()) == data


def test_summary_text():
    summary = _report().to_summary()

    assert "DATA CLEANING REPORT" in summary
    assert "Original: 5 rows × 3 columns" in summary
    assert "Removed:  3 rows, 1 columns" in summary
    assert "  duplicate: 2" in summary
    assert "  email: 3" in summary
    assert str(_report()).startswith("=" * 80)
