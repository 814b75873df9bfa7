"""Order ledger computation

Turns an order and its payments into debit/credit rows with a running
balance. A pure fold over its inputs: the same order and payments always
produce the same ledger, so it can be recomputed on every change notification.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from libs.money import ZERO, round2
from libs.ph_calendar import format_ph_datetime
from .dtos import LedgerEntryDTO, LedgerEntryKind, OrderLedgerDTO
from .snapshots import OrderSnapshot, PaymentSnapshot

DEFAULT_CREDITED_STATUSES = ("received",)

# Rows without a timestamp sort after every dated row
_UNDATED = datetime.max.replace(tzinfo=timezone.utc)


def describe_payment(payment: PaymentSnapshot) -> str:
    """
    Build the credit row description from method and reference fields

    Example: "Deposit Payment (Ref: 0012 • Bank: BDO • Date: 2024-03-05)"
    """
    method = (payment.method or "").strip()
    refs = []
    if payment.cheque_number:
        refs.append(f"Ref: {payment.cheque_number}")
    if payment.bank_name:
        refs.append(f"Bank: {payment.bank_name}")
    if payment.cheque_date:
        refs.append(f"Date: {payment.cheque_date.isoformat()}")

    label = f"{method.capitalize()} Payment" if method else "Payment"
    if refs:
        return f"{label} ({' • '.join(refs)})"
    return label


def _charge_row(order: OrderSnapshot, invoice_code: Optional[str]) -> dict:
    return {
        "kind": LedgerEntryKind.DEBIT,
        "entry_date": order.created_at,
        "date_label": format_ph_datetime(order.created_at),
        "description": f"TXN Charge ({invoice_code or 'No TXN Code'})",
        "debit": order.charge_amount,
        "credit": ZERO,
        "status": (order.status or "—").upper(),
        "reference_id": order.id,
    }


def _payment_row(payment: PaymentSnapshot) -> dict:
    return {
        "kind": LedgerEntryKind.CREDIT,
        "entry_date": payment.created_at,
        "date_label": format_ph_datetime(payment.created_at),
        "description": describe_payment(payment),
        "debit": ZERO,
        "credit": round2(payment.amount),
        "status": (payment.status or "pending").upper(),
        "reference_id": payment.id,
    }


def build_ledger(
    order: OrderSnapshot,
    payments: Iterable[PaymentSnapshot],
    invoice_code: Optional[str] = None,
    credited_statuses: Sequence[str] = DEFAULT_CREDITED_STATUSES,
) -> OrderLedgerDTO:
    """
    Build the ledger of one order

    Steps:
    1. One debit row at the order's creation time for the charge amount
       (grand total plus shipping fee)
    2. One credit row per payment of this order whose status is credited
    3. Stable sort ascending by date (undated rows last, debit first on ties)
    4. Running balance: balance = round2(balance + debit - credit)

    Args:
        order: Normalized order
        payments: Normalized payments; rows of other orders are ignored
        invoice_code: Code shown on the charge row (defaults to the
            customer code carried on the order snapshot)
        credited_statuses: Payment statuses that count as credits

    Returns:
        OrderLedgerDTO with rows, total_credits and current_balance
    """
    code = invoice_code or order.customer_code
    credited = {status.lower() for status in credited_statuses}

    rows: List[dict] = [_charge_row(order, code)]
    for payment in payments:
        if payment.order_id is not None and payment.order_id != order.id:
            continue
        if payment.status not in credited:
            continue
        rows.append(_payment_row(payment))

    rows.sort(key=lambda r: r["entry_date"] or _UNDATED)

    balance = ZERO
    entries: List[LedgerEntryDTO] = []
    for row in rows:
        balance = round2(balance + row["debit"] - row["credit"])
        entries.append(LedgerEntryDTO(balance=balance, **row))

    total_credits = round2(sum((e.credit for e in entries), Decimal("0")))
    current_balance = entries[-1].balance if entries else ZERO

    return OrderLedgerDTO(
        order_id=order.id,
        invoice_code=code,
        order_status=order.status,
        charge_amount=order.charge_amount,
        entries=entries,
        total_credits=total_credits,
        current_balance=current_balance,
    )
