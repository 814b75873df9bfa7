"""Unit tests for ReviewPayment use case

Tests cover:
- Received payment stamps and allocates to installments in term order
- Rejected payment touches no installment
- Payment not found / already reviewed
- Notification failure does not undo the review
- Rollback on failure
"""

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.adapter.services.clock import FixedClock
from src.app.services.change_feed import ChangeType
from src.app.use_cases.accounts.dtos import ReviewDecision, ReviewPaymentCommandDTO
from src.app.use_cases.accounts.review_payment import ReviewPayment, allocate_to_installments
from src.domain.order_installment import OrderInstallment
from src.domain.payment import Payment


def make_installments():
    return [
        OrderInstallment(
            order_id="order-1", term_no=2, due_date=date(2024, 4, 1),
            amount_due=Decimal("1000.00"), amount_paid=Decimal("0.00"), status="pending",
        ),
        OrderInstallment(
            order_id="order-1", term_no=1, due_date=date(2024, 3, 1),
            amount_due=Decimal("1000.00"), amount_paid=Decimal("400.00"), status="pending",
        ),
        OrderInstallment(
            order_id="order-1", term_no=3, due_date=date(2024, 5, 1),
            amount_due=Decimal("1000.00"), amount_paid=Decimal("0.00"), status="pending",
        ),
    ]


@pytest.fixture
def pending_payment():
    return Payment(
        id="p1",
        order_id="order-1",
        customer_id="cust-1",
        amount=Decimal("1000.00"),
        method="cash",
        status="pending",
        created_at=datetime(2024, 3, 5, 3, 0),
    )


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def mock_payment_repo(pending_payment):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=pending_payment)
    repo.update = AsyncMock(side_effect=lambda payment: payment)
    return repo


@pytest.fixture
def mock_installment_repo():
    repo = MagicMock()
    repo.list_by_order = AsyncMock(return_value=make_installments())
    repo.update = AsyncMock(side_effect=lambda row: row)
    return repo


@pytest.fixture
def mock_change_feed():
    feed = MagicMock()
    feed.publish = AsyncMock(return_value=1)
    return feed


@pytest.fixture
def mock_notification_service():
    service = MagicMock()
    service.send_payment_reviewed = AsyncMock(return_value=True)
    return service


@pytest.fixture
def use_case(mock_uow, mock_payment_repo, mock_installment_repo, mock_change_feed, mock_notification_service):
    return ReviewPayment(
        mock_uow,
        mock_payment_repo,
        mock_installment_repo,
        mock_change_feed,
        mock_notification_service,
        FixedClock(datetime(2024, 3, 6, 1, 0, tzinfo=timezone.utc)),
    )


class TestAllocateToInstallments:
    """Test allocation of a received amount"""

    def test_fills_lowest_term_first(self):
        rows = make_installments()

        touched, allocations, left = allocate_to_installments(rows, Decimal("1000.00"))

        assert [(a.term_no, a.applied) for a in allocations] == [
            (1, Decimal("600.00")),
            (2, Decimal("400.00")),
        ]
        assert allocations[0].status == "paid"
        assert allocations[1].status == "pending"
        assert left == Decimal("0.00")
        assert {r.term_no for r in touched} == {1, 2}

    def test_never_exceeds_amount_due(self):
        rows = make_installments()

        _, allocations, left = allocate_to_installments(rows, Decimal("5000.00"))

        assert [a.amount_paid for a in allocations] == [Decimal("1000.00")] * 3
        assert left == Decimal("2400.00")

    def test_skips_paid_terms(self):
        rows = make_installments()
        rows[1].status = "paid"

        _, allocations, _ = allocate_to_installments(rows, Decimal("100.00"))

        assert allocations[0].term_no == 2

    def test_no_installments(self):
        touched, allocations, left = allocate_to_installments([], Decimal("250.00"))

        assert touched == [] and allocations == []
        assert left == Decimal("250.00")


@pytest.mark.asyncio
class TestReviewPayment:
    """Test payment review"""

    async def test_mark_received(
        self,
        use_case,
        mock_uow,
        mock_payment_repo,
        mock_installment_repo,
        mock_change_feed,
        mock_notification_service,
    ):
        """
        Given: A pending 1,000 payment and a plan with 600 left on term 1
        When: Staff mark it received
        Then: Payment is stamped, terms 1-2 are updated, events and notification are sent
        """
        # Act
        result = await use_case.execute(
            ReviewPaymentCommandDTO(
                payment_id="p1", decision=ReviewDecision.RECEIVED, reviewed_by="cashier@example.com"
            )
        )

        # Assert
        assert result.is_ok()
        response = result.value
        assert response.payment.status == "received"
        assert response.payment.received_at == datetime(2024, 3, 6, 1, 0)
        assert response.payment.received_by == "cashier@example.com"
        assert [a.term_no for a in response.allocations] == [1, 2]
        assert response.unallocated == Decimal("0.00")

        mock_payment_repo.get_by_id.assert_called_once_with("p1", for_update=True)
        mock_installment_repo.list_by_order.assert_called_once_with("order-1", for_update=True)
        assert mock_installment_repo.update.call_count == 2
        mock_uow.commit.assert_called_once()

        events = [c.args[0] for c in mock_change_feed.publish.call_args_list]
        assert [(e.table, e.change_type) for e in events] == [
            ("payments", ChangeType.UPDATE),
            ("order_installments", ChangeType.UPDATE),
            ("order_installments", ChangeType.UPDATE),
        ]
        assert events[0].old["status"] == "pending"
        assert events[0].new["status"] == "received"
        mock_notification_service.send_payment_reviewed.assert_called_once()

    async def test_mark_rejected(self, use_case, mock_installment_repo, mock_notification_service):
        # Act
        result = await use_case.execute(
            ReviewPaymentCommandDTO(payment_id="p1", decision=ReviewDecision.REJECTED)
        )

        # Assert
        assert result.is_ok()
        assert result.value.payment.status == "rejected"
        assert result.value.payment.received_at is None
        assert result.value.allocations == []
        mock_installment_repo.list_by_order.assert_not_called()
        mock_notification_service.send_payment_reviewed.assert_called_once()

    async def test_payment_not_found(self, use_case, mock_payment_repo, mock_uow):
        # Arrange
        mock_payment_repo.get_by_id = AsyncMock(return_value=None)

        # Act
        result = await use_case.execute(
            ReviewPaymentCommandDTO(payment_id="missing", decision=ReviewDecision.RECEIVED)
        )

        # Assert
        assert result.is_err()
        assert result.error.code == "PAYMENT_NOT_FOUND"
        mock_uow.commit.assert_not_called()

    async def test_already_reviewed(self, use_case, pending_payment, mock_change_feed):
        # Arrange
        pending_payment.status = "received"

        # Act
        result = await use_case.execute(
            ReviewPaymentCommandDTO(payment_id="p1", decision=ReviewDecision.REJECTED)
        )

        # Assert
        assert result.is_err()
        assert result.error.code == "PAYMENT_ALREADY_REVIEWED"
        mock_change_feed.publish.assert_not_called()

    async def test_notification_failure_keeps_review(self, use_case, mock_uow, mock_notification_service):
        # Arrange
        mock_notification_service.send_payment_reviewed = AsyncMock(side_effect=RuntimeError("smtp down"))

        # Act
        result = await use_case.execute(
            ReviewPaymentCommandDTO(payment_id="p1", decision=ReviewDecision.RECEIVED)
        )

        # Assert
        assert result.is_ok()
        mock_uow.commit.assert_called_once()

    async def test_rollback_on_failure(self, use_case, mock_uow, mock_installment_repo, mock_change_feed):
        # Arrange
        mock_installment_repo.update = AsyncMock(side_effect=RuntimeError("deadlock"))

        # Act
        result = await use_case.execute(
            ReviewPaymentCommandDTO(payment_id="p1", decision=ReviewDecision.RECEIVED)
        )

        # Assert
        assert result.is_err()
        assert result.error.code == "PAYMENT_REVIEW_FAILED"
        mock_uow.rollback.assert_called_once()
        mock_change_feed.publish.assert_not_called()
