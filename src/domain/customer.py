"""Customer Domain Entity

A buyer account. The customer's code is the invoice/TXN code shown on the
order ledger.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel, generate_uuid


class Customer(BaseModel, table=True):
    """
    Customer - Buyer of hardware orders

    Domain Rules:
    - code is the human-facing invoice code printed on ledgers (optional)
    - payment_type is free text in practice ("cash", "credit")
    """

    __tablename__ = "customers"

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Customer identifier (UUID)"
    )

    name: Optional[str] = Field(
        default=None,
        description="Customer display name"
    )

    code: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), nullable=True, index=True),
        description="Invoice/TXN code for this customer's purchase"
    )

    email: Optional[str] = Field(
        default=None,
        index=True,
        description="Contact e-mail"
    )

    payment_type: Optional[str] = Field(
        default=None,
        description="Preferred payment type (cash, credit)"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Customer creation timestamp (UTC)"
    )
