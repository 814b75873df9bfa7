from .order_repository import SqlAlchemyOrderRepository
from .payment_repository import SqlAlchemyPaymentRepository
from .installment_repository import SqlAlchemyInstallmentRepository

__all__ = [
    "SqlAlchemyOrderRepository",
    "SqlAlchemyPaymentRepository",
    "SqlAlchemyInstallmentRepository",
]
