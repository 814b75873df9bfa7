"""Payment Domain Entity

A payment submitted against an order. Only reviewed payments move the
balance; the review status is set by staff.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Numeric
from src.domain.base import BaseModel, generate_uuid


class PaymentStatus(str, Enum):
    """Payment review status"""
    PENDING = "pending"
    RECEIVED = "received"
    REJECTED = "rejected"


class PaymentMethod(str, Enum):
    """Payment method ("cheque" is kept for legacy rows)"""
    CASH = "cash"
    DEPOSIT = "deposit"
    CHEQUE = "cheque"


class Payment(BaseModel, table=True):
    """
    Payment - Money submitted against an order

    Domain Rules:
    - Inserted as pending at submission time
    - Status transitions: pending -> received or pending -> rejected
    - Never deleted in normal flow
    - received_at / received_by are set when the payment is received
    """

    __tablename__ = "payments"
    __table_args__ = (
        Index("ix_payments_order_id_created_at", "order_id", "created_at"),
        Index("ix_payments_customer_id", "customer_id"),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Payment identifier (UUID)"
    )

    order_id: str = Field(
        foreign_key="orders.id",
        description="Order this payment applies to"
    )

    customer_id: Optional[str] = Field(
        default=None,
        description="Paying customer"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(14, 2), nullable=False),
        description="Payment amount"
    )

    method: Optional[str] = Field(
        default=PaymentMethod.CASH.value,
        description="Payment method (cash, deposit, cheque)"
    )

    cheque_number: Optional[str] = Field(
        default=None,
        description="Deposit slip / cheque reference number"
    )

    bank_name: Optional[str] = Field(
        default=None,
        description="Issuing or receiving bank"
    )

    cheque_date: Optional[date] = Field(
        default=None,
        description="Date printed on the slip or cheque"
    )

    image_url: Optional[str] = Field(
        default=None,
        description="URL of the uploaded slip image"
    )

    status: str = Field(
        default=PaymentStatus.PENDING.value,
        description="Review status (pending, received, rejected)"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Submission timestamp (UTC)"
    )

    received_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp when staff marked the payment received"
    )

    received_by: Optional[str] = Field(
        default=None,
        description="Staff member who reviewed the payment"
    )
