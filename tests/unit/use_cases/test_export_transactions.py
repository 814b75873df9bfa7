"""Unit tests for ExportTransactions use case

Tests cover:
- Range passed to the repository in UTC
- Workbook rendered with header and formatted rows
- Invalid custom range blocks the export
- Empty result still renders a workbook
"""

import pytest
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.adapter.services.clock import FixedClock
from src.app.use_cases.accounts.dtos import ExportCommandDTO
from src.app.use_cases.accounts.export_transactions import ExportTransactions
from src.app.use_cases.accounts.transaction_export import EXPORT_HEADERS
from src.domain.customer import Customer
from src.domain.order import Order


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def mock_order_repo():
    return MagicMock()


@pytest.fixture
def mock_spreadsheet_service():
    service = MagicMock()
    service.render_workbook = MagicMock(return_value=b"PK\x03\x04xlsx")
    return service


@pytest.fixture
def use_case(mock_order_repo, mock_spreadsheet_service):
    # Wednesday 2024-03-13 12:00 in Manila
    clock = FixedClock(utc(2024, 3, 13, 4, 0))
    return ExportTransactions(mock_order_repo, mock_spreadsheet_service, clock)


@pytest.mark.asyncio
class TestExportTransactions:
    """Test transaction-history export"""

    async def test_this_week_export(self, use_case, mock_order_repo, mock_spreadsheet_service):
        """
        Given: One completed order this week
        When: this_week is exported
        Then: The repository gets Monday 00:00 to Sunday 23:59:59.999 PH as UTC
        """
        # Arrange
        order = Order(
            id="5f0c2b1e-8d7a-4c1e-9a55-2b7e1f7c9d10",
            status="completed",
            total_amount=Decimal("11200.00"),
            created_at=datetime(2024, 3, 12, 6, 30),
        )
        mock_order_repo.list_completed_with_customer = AsyncMock(
            return_value=[(order, Customer(id="c", name="Juan Hardware"))]
        )

        # Act
        result = await use_case.execute(ExportCommandDTO(choice="this_week"))

        # Assert
        assert result.is_ok()
        export = result.value
        mock_order_repo.list_completed_with_customer.assert_called_once_with(
            start=utc(2024, 3, 10, 16, 0),
            end=utc(2024, 3, 17, 15, 59, 59, 999000),
        )
        assert export.filename == "Transaction_History_THIS_WEEK_2024-03-11_to_2024-03-17_2024-03-13.xlsx"
        assert export.row_count == 1
        assert export.content == b"PK\x03\x04xlsx"

        title, headers, rows = mock_spreadsheet_service.render_workbook.call_args.args
        assert title == "Transaction History"
        assert headers == EXPORT_HEADERS
        assert rows == [
            ["TXN-20240312-5F0C2B1E", "Juan Hardware", "completed", "₱11,200.00", "Mar 12, 2024, 02:30 PM"]
        ]

    async def test_all_is_unbounded(self, use_case, mock_order_repo):
        # Arrange
        mock_order_repo.list_completed_with_customer = AsyncMock(return_value=[])

        # Act
        result = await use_case.execute(ExportCommandDTO(choice="all"))

        # Assert
        assert result.is_ok()
        mock_order_repo.list_completed_with_customer.assert_called_once_with(start=None, end=None)
        assert result.value.filename == "Transaction_History_ALL_2024-03-13.xlsx"

    async def test_empty_result_still_renders(self, use_case, mock_order_repo, mock_spreadsheet_service):
        # Arrange
        mock_order_repo.list_completed_with_customer = AsyncMock(return_value=[])

        # Act
        result = await use_case.execute(ExportCommandDTO(choice="today"))

        # Assert
        assert result.is_ok()
        assert result.value.row_count == 0
        mock_spreadsheet_service.render_workbook.assert_called_once()

    async def test_invalid_custom_range_blocks_export(
        self, use_case, mock_order_repo, mock_spreadsheet_service
    ):
        # Arrange
        mock_order_repo.list_completed_with_customer = AsyncMock()

        # Act
        result = await use_case.execute(
            ExportCommandDTO(choice="custom", custom_start="2024-03-20", custom_end="2024-03-01")
        )

        # Assert
        assert result.is_err()
        assert result.error.code == "EXPORT_RANGE_INVALID"
        mock_order_repo.list_completed_with_customer.assert_not_called()
        mock_spreadsheet_service.render_workbook.assert_not_called()

    async def test_unknown_choice(self, use_case):
        # Act
        result = await use_case.execute(ExportCommandDTO(choice="forever"))

        # Assert
        assert result.is_err()
        assert result.error.code == "EXPORT_CHOICE_INVALID"

    async def test_gateway_failure(self, use_case, mock_order_repo):
        # Arrange
        mock_order_repo.list_completed_with_customer = AsyncMock(side_effect=RuntimeError("down"))

        # Act
        result = await use_case.execute(ExportCommandDTO(choice="this_month"))

        # Assert
        assert result.is_err()
        assert result.error.code == "EXPORT_FAILED"
