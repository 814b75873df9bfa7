"""GetOrderAccount Use Case

Reads the full snapshot of one order (order, customer, payments,
installments) and derives ledger and schedule from it together.
"""

import logging
from datetime import timedelta
from typing import Optional, Sequence
from libs.ph_calendar import PH_OFFSET
from libs.result import Result, Return, Error
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.installment_repository import InstallmentRepository
from src.app.services.clock import Clock
from .account_view import OrderAccountSnapshot, derive_account_view
from .dtos import OrderAccountDTO
from .ledger_builder import DEFAULT_CREDITED_STATUSES
from .snapshots import InstallmentSnapshot, OrderSnapshot, PaymentSnapshot

logger = logging.getLogger(__name__)


class GetOrderAccount:
    """
    Use Case: View the account of an order (ledger + schedule)

    The view is a pure function of one freshly read snapshot. Callers that
    react to change notifications simply execute this again.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        payment_repo: PaymentRepository,
        installment_repo: InstallmentRepository,
        clock: Clock,
        credited_statuses: Sequence[str] = DEFAULT_CREDITED_STATUSES,
        offset: timedelta = PH_OFFSET,
    ):
        self.order_repo = order_repo
        self.payment_repo = payment_repo
        self.installment_repo = installment_repo
        self.clock = clock
        self.credited_statuses = tuple(credited_statuses)
        self.offset = offset

    async def load_snapshot(self, order_id: str) -> Optional[OrderAccountSnapshot]:
        """Read everything the view needs; None when the order does not exist"""
        found = await self.order_repo.get_with_customer(order_id)
        if not found:
            return None
        order, customer = found

        payments = await self.payment_repo.list_by_order(order_id)
        installments = await self.installment_repo.list_by_order(order_id)

        snapshot_order = OrderSnapshot.from_entities(order, customer)
        return OrderAccountSnapshot(
            order=snapshot_order,
            invoice_code=snapshot_order.customer_code,
            payments=[PaymentSnapshot.model_validate(p) for p in payments],
            installments=[InstallmentSnapshot.model_validate(i) for i in installments],
        )

    async def execute(self, order_id: str) -> Result[OrderAccountDTO]:
        """
        Execute account derivation

        Args:
            order_id: Order identifier

        Returns:
            Result[OrderAccountDTO]: Ledger, schedule and outstanding balance
        """
        try:
            snapshot = await self.load_snapshot(order_id)
            if snapshot is None:
                return Return.err(
                    Error(
                        code="ORDER_NOT_FOUND",
                        message=f"Order {order_id} not found",
                        reason="Order does not exist",
                    )
                )

            view = derive_account_view(
                snapshot,
                today=self.clock.today(self.offset),
                credited_statuses=self.credited_statuses,
            )
            return Return.ok(view)

        except Exception as e:
            logger.error(f"Failed to load account for order {order_id}: {e}")
            return Return.err(
                Error(
                    code="ACCOUNT_LOAD_FAILED",
                    message="Failed to load order account",
                    reason=str(e),
                )
            )
