from .base import BaseModel, generate_uuid
from .customer import Customer
from .order import Order, OrderStatus
from .payment import Payment, PaymentStatus, PaymentMethod
from .order_installment import OrderInstallment, InstallmentRowStatus

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Customer",
    "Order",
    "OrderStatus",
    "Payment",
    "PaymentStatus",
    "PaymentMethod",
    "OrderInstallment",
    "InstallmentRowStatus",
]
