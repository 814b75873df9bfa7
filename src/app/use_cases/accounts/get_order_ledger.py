"""GetOrderLedger Use Case

Loads one order with its customer and payments and derives the ledger.
"""

import logging
from typing import Sequence
from libs.result import Result, Return, Error
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.payment_repository import PaymentRepository
from .dtos import OrderLedgerDTO
from .ledger_builder import DEFAULT_CREDITED_STATUSES, build_ledger
from .snapshots import OrderSnapshot, PaymentSnapshot

logger = logging.getLogger(__name__)


class GetOrderLedger:
    """
    Use Case: View the payment ledger of an order

    Business Rules:
    1. Order must exist
    2. Debit = grand total plus shipping fee, posted at order creation
    3. Only payments with a credited status become credit rows
    4. Nothing is persisted; the ledger is recomputed on every call

    Flow:
    1. Retrieve order joined with its customer
    2. Retrieve the order's payments
    3. Normalize rows into snapshots
    4. Build the ledger
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        payment_repo: PaymentRepository,
        credited_statuses: Sequence[str] = DEFAULT_CREDITED_STATUSES,
    ):
        self.order_repo = order_repo
        self.payment_repo = payment_repo
        self.credited_statuses = tuple(credited_statuses)

    async def execute(self, order_id: str) -> Result[OrderLedgerDTO]:
        """
        Execute ledger computation

        Args:
            order_id: Order identifier

        Returns:
            Result[OrderLedgerDTO]: Ledger rows and balance, or error
        """
        try:
            # Step 1: Retrieve order and customer
            found = await self.order_repo.get_with_customer(order_id)
            if not found:
                return Return.err(
                    Error(
                        code="ORDER_NOT_FOUND",
                        message=f"Order {order_id} not found",
                        reason="Order does not exist",
                    )
                )
            order, customer = found

            # Step 2: Retrieve payments
            payments = await self.payment_repo.list_by_order(order_id)

            # Step 3 + 4: Normalize and build
            ledger = build_ledger(
                OrderSnapshot.from_entities(order, customer),
                [PaymentSnapshot.model_validate(p) for p in payments],
                credited_statuses=self.credited_statuses,
            )
            return Return.ok(ledger)

        except Exception as e:
            logger.error(f"Failed to load ledger for order {order_id}: {e}")
            return Return.err(
                Error(
                    code="LEDGER_LOAD_FAILED",
                    message="Failed to load order ledger",
                    reason=str(e),
                )
            )
