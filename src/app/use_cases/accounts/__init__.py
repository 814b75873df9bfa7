"""Order account use cases: ledger, installment schedule, export, payments"""
from .get_order_ledger import GetOrderLedger
from .get_payment_schedule import GetPaymentSchedule
from .get_order_account import GetOrderAccount
from .export_transactions import ExportTransactions
from .record_payment import RecordPayment
from .review_payment import ReviewPayment, allocate_to_installments
from .list_outstanding_orders import ListOutstandingOrders
from .generate_ledger_statement import GenerateLedgerStatement
from .order_account_watcher import OrderAccountWatcher
from .account_view import OrderAccountSnapshot, derive_account_view
from .ledger_builder import DEFAULT_CREDITED_STATUSES, build_ledger, describe_payment
from .installment_schedule import (
    build_schedule,
    classify_installment,
    find_next_unpaid,
    is_installment_overdue,
    is_installment_paid,
)
from .transaction_export import (
    EXPORT_HEADERS,
    build_transaction_export,
    describe_range_label,
    format_transaction_row,
    resolve_export_range,
    sanitize_label,
    transaction_code,
)
from .snapshots import InstallmentSnapshot, OrderSnapshot, PaymentSnapshot
from .dtos import (
    LedgerEntryKind,
    InstallmentStatus,
    ExportChoice,
    ReviewDecision,
    LedgerEntryDTO,
    OrderLedgerDTO,
    InstallmentDTO,
    NextInstallmentDTO,
    PaymentScheduleDTO,
    OrderAccountDTO,
    OutstandingOrderDTO,
    ListOutstandingOrdersResponseDTO,
    RecordPaymentCommandDTO,
    ReviewPaymentCommandDTO,
    PaymentResponseDTO,
    InstallmentAllocationDTO,
    ReviewPaymentResponseDTO,
    ExportCommandDTO,
    ExportRangeDTO,
    TransactionRowDTO,
    TransactionExportDTO,
    LedgerStatementDTO,
)

__all__ = [
    "GetOrderLedger",
    "GetPaymentSchedule",
    "GetOrderAccount",
    "ExportTransactions",
    "RecordPayment",
    "ReviewPayment",
    "allocate_to_installments",
    "ListOutstandingOrders",
    "GenerateLedgerStatement",
    "OrderAccountWatcher",
    "OrderAccountSnapshot",
    "derive_account_view",
    "DEFAULT_CREDITED_STATUSES",
    "build_ledger",
    "describe_payment",
    "build_schedule",
    "classify_installment",
    "find_next_unpaid",
    "is_installment_overdue",
    "is_installment_paid",
    "EXPORT_HEADERS",
    "build_transaction_export",
    "describe_range_label",
    "format_transaction_row",
    "resolve_export_range",
    "sanitize_label",
    "transaction_code",
    "InstallmentSnapshot",
    "OrderSnapshot",
    "PaymentSnapshot",
    "LedgerEntryKind",
    "InstallmentStatus",
    "ExportChoice",
    "ReviewDecision",
    "LedgerEntryDTO",
    "OrderLedgerDTO",
    "InstallmentDTO",
    "NextInstallmentDTO",
    "PaymentScheduleDTO",
    "OrderAccountDTO",
    "OutstandingOrderDTO",
    "ListOutstandingOrdersResponseDTO",
    "RecordPaymentCommandDTO",
    "ReviewPaymentCommandDTO",
    "PaymentResponseDTO",
    "InstallmentAllocationDTO",
    "ReviewPaymentResponseDTO",
    "ExportCommandDTO",
    "ExportRangeDTO",
    "TransactionRowDTO",
    "TransactionExportDTO",
    "LedgerStatementDTO",
]
