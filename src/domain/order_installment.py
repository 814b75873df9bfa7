"""Order Installment Domain Entity

One scheduled term of an order's payment plan.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, UniqueConstraint
from sqlalchemy import Numeric, Date
from src.domain.base import BaseModel, generate_uuid


class InstallmentRowStatus(str, Enum):
    """Stored installment status"""
    PENDING = "pending"
    PAID = "paid"


class OrderInstallment(BaseModel, table=True):
    """
    OrderInstallment - One term of a payment plan

    Domain Rules:
    - term_no is 1-based and unique per order; terms are contiguous
    - amount_paid grows as received payments are allocated
    - status becomes paid once amount_paid covers amount_due
    """

    __tablename__ = "order_installments"
    __table_args__ = (
        UniqueConstraint("order_id", "term_no", name="uq_order_installments_order_term"),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Installment identifier (UUID)"
    )

    order_id: str = Field(
        foreign_key="orders.id",
        index=True,
        description="Owning order"
    )

    term_no: int = Field(
        ge=1,
        description="1-based term number"
    )

    due_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Calendar due date (no time component)"
    )

    amount_due: Decimal = Field(
        sa_column=Column(Numeric(14, 2), nullable=False),
        description="Amount due for this term"
    )

    amount_paid: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(14, 2), nullable=False, default=0),
        description="Amount allocated to this term so far"
    )

    status: Optional[str] = Field(
        default=InstallmentRowStatus.PENDING.value,
        description="Stored status (pending, paid)"
    )
