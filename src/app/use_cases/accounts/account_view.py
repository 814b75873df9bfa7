"""Order account view

The derived view of one order (ledger + schedule) as a pure function of the
latest full snapshot. Change notifications never patch a view; they trigger
a reload and a fresh call to derive_account_view.
"""

from datetime import date
from typing import List, Optional, Sequence
from pydantic import BaseModel, Field

from libs.money import ZERO
from .dtos import OrderAccountDTO
from .installment_schedule import build_schedule
from .ledger_builder import DEFAULT_CREDITED_STATUSES, build_ledger
from .snapshots import InstallmentSnapshot, OrderSnapshot, PaymentSnapshot


class OrderAccountSnapshot(BaseModel):
    """Everything read from the store for one order, at one point in time"""

    order: OrderSnapshot
    invoice_code: Optional[str] = None
    payments: List[PaymentSnapshot] = Field(default_factory=list)
    installments: List[InstallmentSnapshot] = Field(default_factory=list)


def derive_account_view(
    snapshot: OrderAccountSnapshot,
    today: date,
    credited_statuses: Sequence[str] = DEFAULT_CREDITED_STATUSES,
) -> OrderAccountDTO:
    ledger = build_ledger(
        snapshot.order,
        snapshot.payments,
        invoice_code=snapshot.invoice_code,
        credited_statuses=credited_statuses,
    )
    schedule = build_schedule(snapshot.order.id, snapshot.installments, today)
    return OrderAccountDTO(
        order_id=snapshot.order.id,
        ledger=ledger,
        schedule=schedule,
        balance=max(ZERO, ledger.current_balance),
    )
