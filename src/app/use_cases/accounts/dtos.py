"""Data Transfer Objects for Account Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class LedgerEntryKind(str, Enum):
    """Side of a ledger row"""
    DEBIT = "debit"
    CREDIT = "credit"


class InstallmentStatus(str, Enum):
    """Derived installment classification"""
    PAID = "paid"
    PENDING = "pending"
    OVERDUE = "overdue"


class ExportChoice(str, Enum):
    """Transaction-history export range choices"""
    TODAY = "today"
    THIS_WEEK = "this_week"
    THIS_MONTH = "this_month"
    THIS_YEAR = "this_year"
    CUSTOM = "custom"
    ALL = "all"


class ReviewDecision(str, Enum):
    """Staff decision on a pending payment"""
    RECEIVED = "received"
    REJECTED = "rejected"


# ---------------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------------


class LedgerEntryDTO(BaseModel):
    """
    One derived debit or credit row with the running balance after it

    Not persisted; recomputed from the order and its payments on every load.
    """

    kind: LedgerEntryKind = Field(..., description="debit (charge) or credit (payment)")
    entry_date: Optional[datetime] = Field(
        default=None, description="Order creation or payment submission time (UTC)"
    )
    date_label: str = Field(..., description="PH-localized date/time, or a dash if missing")
    description: str = Field(..., description="Human-readable description")
    debit: Decimal = Field(..., description="Debit amount")
    credit: Decimal = Field(..., description="Credit amount")
    balance: Decimal = Field(..., description="Running balance after this row")
    status: str = Field(..., description="Upper-cased order or payment status")
    reference_id: str = Field(..., description="Order id (debit) or payment id (credit)")


class OrderLedgerDTO(BaseModel):
    """
    Response DTO for the order ledger

    Returned by GetOrderLedger.
    """

    order_id: str = Field(..., description="Order identifier")
    invoice_code: Optional[str] = Field(default=None, description="Customer invoice/TXN code")
    order_status: str = Field(..., description="Order status")
    charge_amount: Decimal = Field(..., description="Grand total plus shipping fee")
    entries: List[LedgerEntryDTO] = Field(default_factory=list, description="Rows in date order")
    total_credits: Decimal = Field(..., description="Sum of all credit amounts")
    current_balance: Decimal = Field(..., description="Balance after the last row (0 if none)")

    class Config:
        json_schema_extra = {
            "example": {
                "order_id": "5f0c2b1e-8d7a-4c1e-9a55-2b7e1f7c9d10",
                "invoice_code": "INV-0001",
                "order_status": "completed",
                "charge_amount": "11200.00",
                "entries": [
                    {
                        "kind": "debit",
                        "entry_date": "2024-03-01T02:00:00Z",
                        "date_label": "Mar 01, 2024, 10:00 AM",
                        "description": "TXN Charge (INV-0001)",
                        "debit": "11200.00",
                        "credit": "0.00",
                        "balance": "11200.00",
                        "status": "COMPLETED",
                        "reference_id": "5f0c2b1e-8d7a-4c1e-9a55-2b7e1f7c9d10",
                    },
                    {
                        "kind": "credit",
                        "entry_date": "2024-03-05T03:00:00Z",
                        "date_label": "Mar 05, 2024, 11:00 AM",
                        "description": "Cash Payment",
                        "debit": "0.00",
                        "credit": "5000.00",
                        "balance": "6200.00",
                        "status": "RECEIVED",
                        "reference_id": "a1c4...",
                    },
                ],
                "total_credits": "5000.00",
                "current_balance": "6200.00",
            }
        }


# ---------------------------------------------------------------------------
# Installment schedule
# ---------------------------------------------------------------------------


class InstallmentDTO(BaseModel):
    """One schedule row with its derived classification"""

    term_no: int = Field(..., description="1-based term number")
    due_date: Optional[date] = Field(default=None, description="Calendar due date")
    amount_due: Decimal = Field(..., description="Amount due for the term")
    amount_paid: Decimal = Field(..., description="Amount allocated so far")
    remaining: Decimal = Field(..., description="Amount still owed on the term, never negative")
    status: InstallmentStatus = Field(..., description="paid, pending or overdue")


class NextInstallmentDTO(BaseModel):
    """Lowest-numbered unpaid term"""

    term_no: int
    due_date: Optional[date] = None
    amount_due: Decimal
    amount_paid: Decimal
    is_overdue: bool


class PaymentScheduleDTO(BaseModel):
    """
    Response DTO for the installment schedule view

    Returned by GetPaymentSchedule.
    """

    order_id: str = Field(..., description="Order identifier")
    today: date = Field(..., description="Local calendar date the view was evaluated for")
    installments: List[InstallmentDTO] = Field(default_factory=list)
    total_due: Decimal = Field(..., description="Sum of amount_due")
    total_paid: Decimal = Field(..., description="Sum of amount_paid")
    remaining: Decimal = Field(..., description="max(0, total_due - total_paid)")
    next_unpaid: Optional[NextInstallmentDTO] = Field(
        default=None, description="Next actionable term, None when all terms are paid"
    )


class OrderAccountDTO(BaseModel):
    """Ledger and schedule of one order, derived from one snapshot"""

    order_id: str
    ledger: OrderLedgerDTO
    schedule: PaymentScheduleDTO
    balance: Decimal = Field(..., description="Outstanding balance, never negative")


class OutstandingOrderDTO(BaseModel):
    """A completed order that still carries a balance"""

    order_id: str
    transaction_code: str
    charge_amount: Decimal
    total_received: Decimal
    balance: Decimal


class ListOutstandingOrdersResponseDTO(BaseModel):
    """Response DTO for ListOutstandingOrders"""

    customer_id: str
    orders: List[OutstandingOrderDTO] = Field(default_factory=list)
    total_balance: Decimal


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------


class RecordPaymentCommandDTO(BaseModel):
    """
    Command DTO for recording a submitted payment

    Used as input to RecordPayment. The payment starts as pending.
    """

    order_id: str = Field(..., description="Order the payment applies to")
    amount: Decimal = Field(..., gt=0, description="Payment amount (must be > 0)")
    method: str = Field(default="cash", description="cash, deposit or cheque")
    cheque_number: Optional[str] = Field(default=None, description="Slip/cheque reference")
    bank_name: Optional[str] = Field(default=None, description="Bank name")
    cheque_date: Optional[date] = Field(default=None, description="Date on the slip/cheque")
    image_url: Optional[str] = Field(default=None, description="Uploaded slip image URL")


class ReviewPaymentCommandDTO(BaseModel):
    """Command DTO for marking a pending payment received or rejected"""

    payment_id: str = Field(..., description="Payment identifier")
    decision: ReviewDecision = Field(..., description="received or rejected")
    reviewed_by: Optional[str] = Field(default=None, description="Staff member e-mail or name")


class PaymentResponseDTO(BaseModel):
    """Payment as returned by the payment use cases"""

    id: str
    order_id: str
    customer_id: Optional[str] = None
    amount: Decimal
    method: Optional[str] = None
    cheque_number: Optional[str] = None
    bank_name: Optional[str] = None
    cheque_date: Optional[date] = None
    status: str
    created_at: datetime
    received_at: Optional[datetime] = None
    received_by: Optional[str] = None


class InstallmentAllocationDTO(BaseModel):
    """Part of a received payment applied to one term"""

    term_no: int
    applied: Decimal
    amount_paid: Decimal
    status: str


class ReviewPaymentResponseDTO(BaseModel):
    """Response DTO for ReviewPayment"""

    payment: PaymentResponseDTO
    allocations: List[InstallmentAllocationDTO] = Field(default_factory=list)
    unallocated: Decimal = Field(
        default=Decimal("0.00"),
        description="Received amount left over after every term was covered",
    )


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------


class ExportCommandDTO(BaseModel):
    """Command DTO for the transaction-history export"""

    choice: str = Field(
        default=ExportChoice.TODAY.value,
        description="today, this_week, this_month, this_year, custom or all",
    )
    custom_start: Optional[str] = Field(default=None, description="YYYY-MM-DD, custom only")
    custom_end: Optional[str] = Field(default=None, description="YYYY-MM-DD, custom only")


class ExportRangeDTO(BaseModel):
    """Resolved export range; start/end are None for 'all'"""

    choice: ExportChoice
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    label: str


class TransactionRowDTO(BaseModel):
    """One formatted export row"""

    transaction_code: str
    customer: str
    status: str
    total_amount: str
    created: str


class TransactionExportDTO(BaseModel):
    """Rendered export: table plus the workbook bytes"""

    filename: str
    label: str
    headers: List[str]
    rows: List[TransactionRowDTO] = Field(default_factory=list)
    content: bytes = Field(default=b"", exclude=True)

    @property
    def row_count(self) -> int:
        return len(self.rows)


class LedgerStatementDTO(BaseModel):
    """Ledger rendered as a PDF statement"""

    order_id: str
    filename: str
    pdf_base64: str
    generated_at: datetime
