"""Order Domain Entity

A customer order created at checkout. Its total fields determine the charge
posted to the order ledger.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Numeric
from src.domain.base import BaseModel, generate_uuid


class OrderStatus(str, Enum):
    """Known order statuses (the stored column is free-form)"""
    PENDING = "pending"
    COMPLETED = "completed"
    REJECTED = "rejected"


class Order(BaseModel, table=True):
    """
    Order - Checkout order for one customer

    Domain Rules:
    - Status transitions: pending -> completed or pending -> rejected
    - Ledger charge = grand_total_with_interest when positive, else
      total_amount + sales_tax; shipping_fee is added on top
    - payment_terms is the number of installments (1 for cash)
    """

    __tablename__ = "orders"
    __table_args__ = (
        Index("ix_orders_customer_id", "customer_id"),
        Index("ix_orders_status_created_at", "status", "created_at"),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Order identifier (UUID)"
    )

    customer_id: Optional[str] = Field(
        default=None,
        foreign_key="customers.id",
        description="Owning customer"
    )

    status: str = Field(
        default=OrderStatus.PENDING.value,
        description="Order status (pending, completed, rejected)"
    )

    total_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(14, 2), nullable=False, default=0),
        description="Base total of order items"
    )

    grand_total_with_interest: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(14, 2), nullable=True),
        description="Stored grand total including interest and tax (optional)"
    )

    sales_tax: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(14, 2), nullable=False, default=0),
        description="Sales tax amount"
    )

    shipping_fee: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(14, 2), nullable=False, default=0),
        description="Delivery shipping fee"
    )

    payment_terms: int = Field(
        default=1,
        description="Number of installment terms"
    )

    per_term_amount: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(14, 2), nullable=True),
        description="Base amount per term, excluding shipping (optional)"
    )

    terms: Optional[str] = Field(
        default=None,
        description="Free-text payment terms (e.g. 'Net 30', '3 months')"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Order creation timestamp (UTC)"
    )
