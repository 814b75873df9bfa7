"""Payment Repository Interface

Defines the contract for payment persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from src.domain.payment import Payment


class PaymentRepository(ABC):
    """
    Repository interface for Payment persistence

    Payments are inserted as pending and only their review fields change.
    """

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        """
        Create a new payment

        Args:
            payment: Payment entity to persist

        Returns:
            Created Payment
        """
        pass

    @abstractmethod
    async def get_by_id(self, payment_id: str, for_update: bool = False) -> Optional[Payment]:
        """
        Retrieve payment by ID

        Args:
            payment_id: Payment identifier
            for_update: Lock the row (SELECT FOR UPDATE) for a status change

        Returns:
            Payment if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_order(self, order_id: str) -> List[Payment]:
        """
        List payments of an order, oldest first

        Args:
            order_id: Order identifier

        Returns:
            Payments ordered by created_at ascending
        """
        pass

    @abstractmethod
    async def list_by_orders(
        self, order_ids: Sequence[str], status: Optional[str] = None
    ) -> List[Payment]:
        """
        List payments of several orders

        Args:
            order_ids: Order identifiers
            status: Optional status filter

        Returns:
            Payments ordered by created_at ascending
        """
        pass

    @abstractmethod
    async def update(self, payment: Payment) -> Payment:
        """
        Persist changes to a payment

        Args:
            payment: Modified payment

        Returns:
            Updated Payment
        """
        pass
