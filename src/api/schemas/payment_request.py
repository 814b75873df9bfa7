"""Request schemas for Payment API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from src.app.use_cases.accounts.dtos import ReviewDecision


class RecordPaymentRequestSchema(BaseModel):
    """
    Request schema for submitting a payment

    Used for POST /payments endpoint.
    """

    order_id: str = Field(
        ...,
        min_length=1,
        description="Order the payment applies to"
    )

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Payment amount in PHP (must be > 0)"
    )

    method: str = Field(
        default="cash",
        description="cash, deposit or cheque"
    )

    cheque_number: Optional[str] = Field(
        default=None,
        description="Deposit slip / cheque reference number"
    )

    bank_name: Optional[str] = Field(
        default=None,
        description="Bank name"
    )

    cheque_date: Optional[date] = Field(
        default=None,
        description="Date printed on the slip or cheque (YYYY-MM-DD)"
    )

    image_url: Optional[str] = Field(
        default=None,
        description="URL of the uploaded slip image"
    )

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v):
        """Centavo precision at most"""
        if v.as_tuple().exponent < -2:
            raise ValueError("Amount must have at most 2 decimal places")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "order_id": "5f0c2b1e-8d7a-4c1e-9a55-2b7e1f7c9d10",
                "amount": "5000.00",
                "method": "deposit",
                "cheque_number": "0012",
                "bank_name": "BDO",
                "cheque_date": "2024-03-05",
                "image_url": None,
            }
        }


class ReviewPaymentRequestSchema(BaseModel):
    """
    Request schema for reviewing a pending payment

    Used for POST /payments/{payment_id}/review endpoint.
    """

    decision: ReviewDecision = Field(
        ...,
        description="received or rejected"
    )

    reviewed_by: Optional[str] = Field(
        default=None,
        description="Staff member e-mail or name"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "decision": "received",
                "reviewed_by": "cashier@example.com",
            }
        }
