"""Unit tests for GetPaymentSchedule use case"""

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.adapter.services.clock import FixedClock
from src.app.use_cases.accounts.dtos import InstallmentStatus
from src.app.use_cases.accounts.get_payment_schedule import GetPaymentSchedule
from src.domain.order import Order
from src.domain.order_installment import OrderInstallment


@pytest.fixture
def mock_order_repo():
    return MagicMock()


@pytest.fixture
def mock_installment_repo():
    return MagicMock()


@pytest.fixture
def sample_installments():
    return [
        OrderInstallment(
            order_id="order-1", term_no=1, due_date=date(2024, 2, 1),
            amount_due=Decimal("1000.00"), amount_paid=Decimal("1000.00"), status="paid",
        ),
        OrderInstallment(
            order_id="order-1", term_no=2, due_date=date(2024, 3, 1),
            amount_due=Decimal("1000.00"), amount_paid=Decimal("0.00"), status="pending",
        ),
        OrderInstallment(
            order_id="order-1", term_no=3, due_date=date(2024, 4, 1),
            amount_due=Decimal("1000.00"), amount_paid=Decimal("0.00"), status="pending",
        ),
    ]


@pytest.mark.asyncio
class TestGetPaymentSchedule:
    """Test schedule retrieval"""

    async def test_classifies_against_ph_today(
        self, mock_order_repo, mock_installment_repo, sample_installments
    ):
        """
        Given: Three terms and a clock at 2024-03-14T17:00Z (01:00 on the 15th in Manila)
        When: The schedule is requested
        Then: Terms are paid, overdue, pending and today is the PH date
        """
        # Arrange
        mock_order_repo.get_by_id = AsyncMock(return_value=Order(id="order-1"))
        mock_installment_repo.list_by_order = AsyncMock(return_value=sample_installments)
        clock = FixedClock(datetime(2024, 3, 14, 17, 0, tzinfo=timezone.utc))
        use_case = GetPaymentSchedule(mock_order_repo, mock_installment_repo, clock)

        # Act
        result = await use_case.execute("order-1")

        # Assert
        assert result.is_ok()
        schedule = result.value
        assert schedule.today == date(2024, 3, 15)
        assert [i.status for i in schedule.installments] == [
            InstallmentStatus.PAID,
            InstallmentStatus.OVERDUE,
            InstallmentStatus.PENDING,
        ]
        assert schedule.next_unpaid.term_no == 2
        assert schedule.next_unpaid.is_overdue is True
        assert schedule.remaining == Decimal("2000.00")

    async def test_order_without_plan(self, mock_order_repo, mock_installment_repo):
        # Arrange
        mock_order_repo.get_by_id = AsyncMock(return_value=Order(id="order-1"))
        mock_installment_repo.list_by_order = AsyncMock(return_value=[])
        use_case = GetPaymentSchedule(
            mock_order_repo, mock_installment_repo, FixedClock(datetime(2024, 3, 15))
        )

        # Act
        result = await use_case.execute("order-1")

        # Assert
        assert result.is_ok()
        assert result.value.installments == []
        assert result.value.next_unpaid is None

    async def test_order_not_found(self, mock_order_repo, mock_installment_repo):
        # Arrange
        mock_order_repo.get_by_id = AsyncMock(return_value=None)
        use_case = GetPaymentSchedule(
            mock_order_repo, mock_installment_repo, FixedClock(datetime(2024, 3, 15))
        )

        # Act
        result = await use_case.execute("missing")

        # Assert
        assert result.is_err()
        assert result.error.code == "ORDER_NOT_FOUND"

    async def test_gateway_failure(self, mock_order_repo, mock_installment_repo):
        # Arrange
        mock_order_repo.get_by_id = AsyncMock(return_value=Order(id="order-1"))
        mock_installment_repo.list_by_order = AsyncMock(side_effect=RuntimeError("timeout"))
        use_case = GetPaymentSchedule(
            mock_order_repo, mock_installment_repo, FixedClock(datetime(2024, 3, 15))
        )

        # Act
        result = await use_case.execute("order-1")

        # Assert
        assert result.is_err()
        assert result.error.code == "SCHEDULE_LOAD_FAILED"
