"""Normalized snapshots of stored rows

Rows reach the account computations either as ORM entities or as plain
dicts (change feed payloads, joined query results). Each snapshot resolves
loose typing once, here: amounts become Decimal (bad values -> 0),
timestamps become aware UTC datetimes (bad values -> None), statuses are
lower-cased, and a joined customer given as an object or a single-element
list collapses to optional name/code fields.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from libs.money import round2, to_decimal
from libs.ph_calendar import parse_calendar_date, parse_timestamp


def _normalize_status(value: Any) -> str:
    return str(value or "").strip().lower()


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _resolve_join(value: Any) -> Any:
    """A joined row may arrive as an object, a list of one, or an empty list"""
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _join_field(joined: Any, name: str) -> Any:
    if joined is None:
        return None
    if isinstance(joined, dict):
        return joined.get(name)
    return getattr(joined, name, None)


class OrderSnapshot(BaseModel):
    """Order fields consumed by the ledger and export computations"""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    status: str = ""
    created_at: Optional[datetime] = None
    total_amount: Decimal = Decimal("0")
    grand_total_with_interest: Optional[Decimal] = None
    sales_tax: Decimal = Decimal("0")
    shipping_fee: Decimal = Decimal("0")
    payment_terms: int = 1
    per_term_amount: Optional[Decimal] = None
    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_code: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_customer_join(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        joined = None
        for key in ("customers", "customer"):
            if key in data:
                joined = _resolve_join(data[key])
                break
        if joined is None:
            return data
        flattened = {k: v for k, v in data.items() if k not in ("customers", "customer")}
        flattened.setdefault("customer_name", _join_field(joined, "name"))
        flattened.setdefault("customer_code", _join_field(joined, "code"))
        return flattened

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v: Any) -> str:
        return str(v)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v: Any) -> str:
        return _normalize_status(v)

    @field_validator("created_at", mode="before")
    @classmethod
    def _timestamp(cls, v: Any) -> Optional[datetime]:
        return parse_timestamp(v)

    @field_validator("total_amount", "sales_tax", "shipping_fee", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> Decimal:
        return to_decimal(v)

    @field_validator("grand_total_with_interest", "per_term_amount", mode="before")
    @classmethod
    def _optional_amount(cls, v: Any) -> Optional[Decimal]:
        if v is None:
            return None
        return to_decimal(v)

    @field_validator("payment_terms", mode="before")
    @classmethod
    def _terms(cls, v: Any) -> int:
        try:
            return max(int(v), 1)
        except (TypeError, ValueError):
            return 1

    @field_validator("customer_id", "customer_name", "customer_code", mode="before")
    @classmethod
    def _text(cls, v: Any) -> Optional[str]:
        return _optional_text(v)

    @classmethod
    def from_entities(cls, order: Any, customer: Any = None) -> "OrderSnapshot":
        """Build from an Order entity and its (optional) Customer"""
        snapshot = cls.model_validate(order)
        if customer is None:
            return snapshot
        return snapshot.model_copy(
            update={
                "customer_name": _optional_text(_join_field(customer, "name")),
                "customer_code": _optional_text(_join_field(customer, "code")),
            }
        )

    @property
    def grand_total(self) -> Decimal:
        """Stored grand total when positive, else subtotal + tax"""
        if self.grand_total_with_interest is not None and self.grand_total_with_interest > 0:
            return round2(self.grand_total_with_interest)
        return round2(self.total_amount + self.sales_tax)

    @property
    def charge_amount(self) -> Decimal:
        """Authoritative ledger charge: grand total plus shipping fee"""
        return round2(self.grand_total + self.shipping_fee)


class PaymentSnapshot(BaseModel):
    """Payment fields consumed by the ledger"""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    order_id: Optional[str] = None
    amount: Decimal = Decimal("0")
    method: Optional[str] = None
    cheque_number: Optional[str] = None
    bank_name: Optional[str] = None
    cheque_date: Optional[date] = None
    status: str = ""
    created_at: Optional[datetime] = None
    received_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v: Any) -> str:
        return str(v)

    @field_validator("order_id", "method", "cheque_number", "bank_name", mode="before")
    @classmethod
    def _text(cls, v: Any) -> Optional[str]:
        return _optional_text(v)

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> Decimal:
        return to_decimal(v)

    @field_validator("cheque_date", mode="before")
    @classmethod
    def _calendar_date(cls, v: Any) -> Optional[date]:
        return parse_calendar_date(v)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v: Any) -> str:
        return _normalize_status(v)

    @field_validator("created_at", "received_at", mode="before")
    @classmethod
    def _timestamp(cls, v: Any) -> Optional[datetime]:
        return parse_timestamp(v)


class InstallmentSnapshot(BaseModel):
    """Installment fields consumed by the schedule view"""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    order_id: Optional[str] = None
    term_no: int = 0
    due_date: Optional[date] = None
    amount_due: Decimal = Decimal("0")
    amount_paid: Decimal = Decimal("0")
    status: str = ""

    @field_validator("order_id", mode="before")
    @classmethod
    def _text(cls, v: Any) -> Optional[str]:
        return _optional_text(v)

    @field_validator("term_no", mode="before")
    @classmethod
    def _term(cls, v: Any) -> int:
        try:
            return int(v)
        except (TypeError, ValueError):
            return 0

    @field_validator("due_date", mode="before")
    @classmethod
    def _calendar_date(cls, v: Any) -> Optional[date]:
        return parse_calendar_date(v)

    @field_validator("amount_due", "amount_paid", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> Decimal:
        return to_decimal(v)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v: Any) -> str:
        return _normalize_status(v)
