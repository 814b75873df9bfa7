"""Unit tests for transaction-history export formatting

Tests cover:
- Transaction codes
- Range resolution for every choice, in PH calendar terms
- Custom range validation
- Row formatting and filename
"""

import pytest
from datetime import date, datetime, timezone

from src.app.use_cases.accounts.dtos import ExportChoice, ExportRangeDTO
from src.app.use_cases.accounts.snapshots import OrderSnapshot
from src.app.use_cases.accounts.transaction_export import (
    EXPORT_HEADERS,
    build_transaction_export,
    describe_range_label,
    resolve_export_range,
    sanitize_label,
    transaction_code,
)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


# Wednesday 2024-03-13 12:00 in Manila
NOW = utc(2024, 3, 13, 4, 0)


class TestTransactionCode:
    """Test display codes"""

    def test_code_from_uuid(self):
        code = transaction_code("5f0c2b1e-8d7a-4c1e-9a55-2b7e1f7c9d10", utc(2024, 3, 1, 2, 0))

        assert code == "TXN-20240301-5F0C2B1E"

    def test_uses_utc_calendar_date(self):
        """Created at 01:00 PH on the 2nd is still the 1st in UTC"""
        code = transaction_code("abc", utc(2024, 3, 1, 17, 0))

        assert code == "TXN-20240301-ABC"

    def test_fragment_is_at_most_eight_chars(self):
        assert transaction_code("abcdefghijkl", None) == "TXN-00000000-ABCDEFGH"


class TestResolveRange:
    """Test export range resolution"""

    def test_today(self):
        result = resolve_export_range(ExportChoice.TODAY, NOW)

        assert result.is_ok()
        assert result.value.start == utc(2024, 3, 12, 16, 0)
        assert result.value.end == utc(2024, 3, 13, 15, 59, 59, 999000)
        assert result.value.label == "TODAY_2024-03-13"

    def test_this_week_on_a_wednesday(self):
        result = resolve_export_range("this_week", NOW)

        assert result.value.start == utc(2024, 3, 10, 16, 0)
        assert result.value.end == utc(2024, 3, 17, 15, 59, 59, 999000)
        assert result.value.label == "THIS_WEEK_2024-03-11_to_2024-03-17"

    def test_this_month(self):
        result = resolve_export_range("this_month", NOW)

        assert result.value.start == utc(2024, 2, 29, 16, 0)
        assert result.value.label == "THIS_MONTH_2024-03-01_to_2024-03-31"

    def test_this_year(self):
        result = resolve_export_range("this_year", NOW)

        assert result.value.label == "THIS_YEAR_2024-01-01_to_2024-12-31"

    def test_all_is_unbounded(self):
        result = resolve_export_range("all", NOW)

        assert result.value.start is None
        assert result.value.end is None
        assert result.value.label == "ALL"

    def test_custom(self):
        result = resolve_export_range("custom", NOW, "2024-03-01", "2024-03-15")

        assert result.value.start == utc(2024, 2, 29, 16, 0)
        assert result.value.end == utc(2024, 3, 15, 15, 59, 59, 999000)
        assert result.value.label == "CUSTOM_2024-03-01_to_2024-03-15"

    def test_custom_single_day(self):
        result = resolve_export_range("custom", NOW, "2024-03-15", "2024-03-15")

        assert result.is_ok()

    @pytest.mark.parametrize(
        "start,end",
        [(None, "2024-03-15"), ("2024-03-01", None), ("", ""), ("2024-02-30", "2024-03-01"), ("03/01/2024", "2024-03-15"),
         ("20240301", "2024-03-15"), ("2024-03-01", "2024-W11-5")],
    )
    def test_custom_invalid_dates(self, start, end):
        result = resolve_export_range("custom", NOW, start, end)

        assert result.is_err()
        assert result.error.code == "EXPORT_RANGE_INVALID"

    def test_custom_start_after_end(self):
        result = resolve_export_range("custom", NOW, "2024-03-16", "2024-03-15")

        assert result.is_err()
        assert result.error.code == "EXPORT_RANGE_INVALID"

    def test_unknown_choice(self):
        result = resolve_export_range("last_decade", NOW)

        assert result.is_err()
        assert result.error.code == "EXPORT_CHOICE_INVALID"


class TestLabels:
    """Test filename labels"""

    def test_sanitize(self):
        assert sanitize_label("THIS WEEK/2024:03") == "THIS_WEEK_2024_03"

    def test_all_without_bounds(self):
        assert describe_range_label(ExportChoice.TODAY) == "ALL"


class TestBuildExport:
    """Test row formatting and filename"""

    def test_rows_and_filename(self):
        orders = [
            OrderSnapshot.model_validate(
                {
                    "id": "5f0c2b1e-8d7a-4c1e-9a55-2b7e1f7c9d10",
                    "status": "completed",
                    "created_at": "2024-03-13T06:30:00Z",
                    "total_amount": "11200",
                    "customers": {"name": "Juan Hardware", "code": "INV-1"},
                }
            ),
            OrderSnapshot.model_validate(
                {"id": "abc", "status": "completed", "created_at": None, "total_amount": None}
            ),
        ]
        export_range = ExportRangeDTO(choice=ExportChoice.TODAY, label="TODAY_2024-03-13")

        export = build_transaction_export(orders, export_range, today=date(2024, 3, 13))

        assert export.filename == "Transaction_History_TODAY_2024-03-13_2024-03-13.xlsx"
        assert export.headers == EXPORT_HEADERS
        assert export.row_count == 2

        first = export.rows[0]
        assert first.transaction_code == "TXN-20240313-5F0C2B1E"
        assert first.customer == "Juan Hardware"
        assert first.status == "completed"
        assert first.total_amount == "₱11,200.00"
        assert first.created == "Mar 13, 2024, 02:30 PM"

        second = export.rows[1]
        assert second.customer == "—"
        assert second.total_amount == "₱0.00"
        assert second.created == "—"

    def test_empty_export_has_headers(self):
        export_range = ExportRangeDTO(choice=ExportChoice.ALL, label="ALL")

        export = build_transaction_export([], export_range, today=date(2024, 3, 13))

        assert export.rows == []
        assert export.headers == EXPORT_HEADERS
        assert export.filename == "Transaction_History_ALL_2024-03-13.xlsx"
