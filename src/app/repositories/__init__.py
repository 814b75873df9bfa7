from .order_repository import OrderRepository
from .payment_repository import PaymentRepository
from .installment_repository import InstallmentRepository

__all__ = [
    "OrderRepository",
    "PaymentRepository",
    "InstallmentRepository",
]
