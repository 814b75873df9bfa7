"""Installment schedule view

Classifies each term of an order's payment plan as paid, pending or overdue
relative to a local calendar "today" and computes plan totals.
Classification only depends on the row and "today", and moving "today" later
can only turn pending into overdue, never back.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from libs.money import AMOUNT_EPSILON, ZERO, round2
from .dtos import (
    InstallmentDTO,
    InstallmentStatus,
    NextInstallmentDTO,
    PaymentScheduleDTO,
)
from .snapshots import InstallmentSnapshot


def is_installment_paid(row: InstallmentSnapshot) -> bool:
    """Stored status is paid, or the paid amount covers the amount due"""
    return row.status == "paid" or row.amount_paid + AMOUNT_EPSILON >= row.amount_due


def is_installment_overdue(row: InstallmentSnapshot, today: date) -> bool:
    """Unpaid and due strictly before today; a row without a due date never is"""
    if is_installment_paid(row) or row.due_date is None:
        return False
    return row.due_date < today


def classify_installment(row: InstallmentSnapshot, today: date) -> InstallmentStatus:
    if is_installment_paid(row):
        return InstallmentStatus.PAID
    if is_installment_overdue(row, today):
        return InstallmentStatus.OVERDUE
    return InstallmentStatus.PENDING


def find_next_unpaid(
    rows: Iterable[InstallmentSnapshot], today: date
) -> Optional[NextInstallmentDTO]:
    """Lowest-numbered unpaid term, or None when every term is paid"""
    for row in sorted(rows, key=lambda r: r.term_no):
        if is_installment_paid(row):
            continue
        return NextInstallmentDTO(
            term_no=row.term_no,
            due_date=row.due_date,
            amount_due=round2(row.amount_due),
            amount_paid=round2(row.amount_paid),
            is_overdue=is_installment_overdue(row, today),
        )
    return None


def build_schedule(
    order_id: str, rows: Iterable[InstallmentSnapshot], today: date
) -> PaymentScheduleDTO:
    """
    Build the schedule view of one order

    Args:
        order_id: Order the rows belong to
        rows: Normalized installment rows (any order)
        today: Local calendar date in the PH offset

    Returns:
        PaymentScheduleDTO with classified rows, totals and the next term
    """
    ordered = sorted(rows, key=lambda r: r.term_no)

    total_due = round2(sum((r.amount_due for r in ordered), Decimal("0")))
    total_paid = round2(sum((r.amount_paid for r in ordered), Decimal("0")))
    remaining = max(Decimal("0.00"), round2(total_due - total_paid))

    return PaymentScheduleDTO(
        order_id=order_id,
        today=today,
        installments=[
            InstallmentDTO(
                term_no=r.term_no,
                due_date=r.due_date,
                amount_due=round2(r.amount_due),
                amount_paid=round2(r.amount_paid),
                remaining=max(ZERO, round2(r.amount_due) - round2(r.amount_paid)),
                status=classify_installment(r, today),
            )
            for r in ordered
        ],
        total_due=total_due,
        total_paid=total_paid,
        remaining=remaining,
        next_unpaid=find_next_unpaid(ordered, today),
    )
