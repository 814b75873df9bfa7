"""ListOutstandingOrders Use Case

Lists the completed orders of a customer that still carry a balance.
"""

from decimal import Decimal
from typing import Sequence
from libs.money import ZERO, round2
from libs.result import Result, Return
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.order import OrderStatus
from .dtos import ListOutstandingOrdersResponseDTO, OutstandingOrderDTO
from .ledger_builder import DEFAULT_CREDITED_STATUSES
from .snapshots import OrderSnapshot, PaymentSnapshot
from .transaction_export import transaction_code

# Balances at or below one centavo are treated as settled
SETTLED_THRESHOLD = Decimal("0.01")


class ListOutstandingOrders:
    """
    Use case: Outstanding orders of a customer

    balance = max(charge - credited payments, 0); orders above one centavo
    are returned, largest balance first.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        payment_repo: PaymentRepository,
        credited_statuses: Sequence[str] = DEFAULT_CREDITED_STATUSES,
    ):
        self.order_repo = order_repo
        self.payment_repo = payment_repo
        self.credited_statuses = {s.lower() for s in credited_statuses}

    async def execute(self, customer_id: str) -> Result[ListOutstandingOrdersResponseDTO]:
        orders = await self.order_repo.list_by_customer(
            customer_id, status=OrderStatus.COMPLETED.value
        )
        snapshots = [OrderSnapshot.model_validate(o) for o in orders]

        payments = await self.payment_repo.list_by_orders([o.id for o in snapshots])
        received = {}
        for p in (PaymentSnapshot.model_validate(p) for p in payments):
            if p.status in self.credited_statuses:
                received[p.order_id] = received.get(p.order_id, ZERO) + p.amount

        outstanding = []
        for order in snapshots:
            total_received = round2(received.get(order.id, ZERO))
            balance = max(ZERO, round2(order.charge_amount - total_received))
            if balance <= SETTLED_THRESHOLD:
                continue
            outstanding.append(
                OutstandingOrderDTO(
                    order_id=order.id,
                    transaction_code=transaction_code(order.id, order.created_at),
                    charge_amount=order.charge_amount,
                    total_received=total_received,
                    balance=balance,
                )
            )

        outstanding.sort(key=lambda o: o.balance, reverse=True)

        return Return.ok(
            ListOutstandingOrdersResponseDTO(
                customer_id=customer_id,
                orders=outstanding,
                total_balance=round2(sum((o.balance for o in outstanding), ZERO)),
            )
        )
