"""Transaction-history export formatting

Resolves the export range in PH calendar terms and renders completed orders
into display rows. Filtering (range and completed-only) happens in the
query; nothing here drops rows.
"""

import re
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from libs.money import format_php
from libs.ph_calendar import (
    PH_OFFSET,
    PLACEHOLDER,
    end_of_date_string,
    end_of_day,
    end_of_month,
    end_of_week,
    end_of_year,
    format_ph_datetime,
    local_iso_date,
    start_of_date_string,
    start_of_day,
    start_of_month,
    start_of_week,
    start_of_year,
)
from libs.result import Error, Result, Return
from .dtos import ExportChoice, ExportRangeDTO, TransactionExportDTO, TransactionRowDTO
from .snapshots import OrderSnapshot

EXPORT_HEADERS = [
    "Transaction Code",
    "Customer",
    "Status",
    "Total Amount (PHP)",
    "Created (PH)",
]

_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w\-]+")

_BOUNDARIES = {
    ExportChoice.TODAY: (start_of_day, end_of_day),
    ExportChoice.THIS_WEEK: (start_of_week, end_of_week),
    ExportChoice.THIS_MONTH: (start_of_month, end_of_month),
    ExportChoice.THIS_YEAR: (start_of_year, end_of_year),
}


def transaction_code(order_id: str, created_at: Optional[datetime]) -> str:
    """
    Derive the display code TXN-<YYYYMMDD>-<ID FRAGMENT>

    The date is the UTC calendar date of creation; the fragment is the first
    dash-separated segment of the id (at most 8 chars), upper-cased. Codes
    are for display and may collide.
    """
    date_code = created_at.strftime("%Y%m%d") if created_at else "00000000"
    fragment = str(order_id).split("-")[0][:8].upper()
    return f"TXN-{date_code}-{fragment}"


def sanitize_label(label: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("_", label)


def describe_range_label(
    choice: ExportChoice,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    offset: timedelta = PH_OFFSET,
) -> str:
    """TODAY_<d>, THIS_WEEK_<s>_to_<e>, ..., or ALL"""
    if choice == ExportChoice.ALL or start is None or end is None:
        return "ALL"
    s = local_iso_date(start, offset)
    e = local_iso_date(end, offset)
    if choice == ExportChoice.TODAY:
        label = f"TODAY_{s}"
    else:
        label = f"{choice.value.upper()}_{s}_to_{e}"
    return sanitize_label(label)


def resolve_export_range(
    choice: ExportChoice,
    now: datetime,
    custom_start: Optional[str] = None,
    custom_end: Optional[str] = None,
    offset: timedelta = PH_OFFSET,
) -> Result[ExportRangeDTO]:
    """
    Resolve an export choice into UTC instants

    Args:
        choice: Range choice
        now: Current instant (from the Clock)
        custom_start: YYYY-MM-DD, required for custom
        custom_end: YYYY-MM-DD, required for custom
        offset: Calendar offset (PH by default)

    Returns:
        Result[ExportRangeDTO]; start/end are inclusive bounds

    Errors:
        EXPORT_CHOICE_INVALID: Unknown choice
        EXPORT_RANGE_INVALID: Custom dates missing, malformed or reversed
    """
    try:
        choice = ExportChoice(choice)
    except ValueError:
        return Return.err(
            Error(
                code="EXPORT_CHOICE_INVALID",
                message=f"Unknown export range '{choice}'",
            )
        )

    if choice == ExportChoice.ALL:
        return Return.ok(ExportRangeDTO(choice=choice, label="ALL"))

    if choice == ExportChoice.CUSTOM:
        if not custom_start or not custom_end:
            return Return.err(
                Error(
                    code="EXPORT_RANGE_INVALID",
                    message="Please provide a valid date range.",
                    reason="custom_start and custom_end are required for a custom range",
                )
            )
        try:
            start = start_of_date_string(custom_start, offset)
            end = end_of_date_string(custom_end, offset)
        except ValueError as e:
            return Return.err(
                Error(
                    code="EXPORT_RANGE_INVALID",
                    message="Please provide a valid date range.",
                    reason=str(e),
                )
            )
        if start > end:
            return Return.err(
                Error(
                    code="EXPORT_RANGE_INVALID",
                    message="Start date must not be after end date.",
                    reason=f"start={custom_start}, end={custom_end}",
                )
            )
    else:
        start_fn, end_fn = _BOUNDARIES[choice]
        start = start_fn(now, offset)
        end = end_fn(now, offset)

    return Return.ok(
        ExportRangeDTO(
            choice=choice,
            start=start,
            end=end,
            label=describe_range_label(choice, start, end, offset),
        )
    )


def format_transaction_row(order: OrderSnapshot, offset: timedelta = PH_OFFSET) -> TransactionRowDTO:
    return TransactionRowDTO(
        transaction_code=transaction_code(order.id, order.created_at),
        customer=order.customer_name or PLACEHOLDER,
        status=order.status or "pending",
        total_amount=format_php(order.total_amount),
        created=format_ph_datetime(order.created_at, offset),
    )


def build_transaction_export(
    orders: Iterable[OrderSnapshot],
    export_range: ExportRangeDTO,
    today: date,
    offset: timedelta = PH_OFFSET,
) -> TransactionExportDTO:
    """
    Render orders into the export table

    Args:
        orders: Completed orders already filtered to the range
        export_range: The resolved range (used for the filename label)
        today: Local date stamped into the filename

    Returns:
        TransactionExportDTO without workbook content
    """
    label = sanitize_label(export_range.label)
    return TransactionExportDTO(
        filename=f"Transaction_History_{label}_{today.isoformat()}.xlsx",
        label=label,
        headers=list(EXPORT_HEADERS),
        rows=[format_transaction_row(order, offset) for order in orders],
    )
