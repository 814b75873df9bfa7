"""Order Repository Interface

Defines the contract for order reads used by the account views.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple
from src.domain.customer import Customer
from src.domain.order import Order


class OrderRepository(ABC):
    """
    Repository interface for Order persistence

    Orders are written by checkout; this service only reads them.
    """

    @abstractmethod
    async def get_by_id(self, order_id: str) -> Optional[Order]:
        """
        Retrieve order by ID

        Args:
            order_id: Order identifier

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_with_customer(
        self, order_id: str
    ) -> Optional[Tuple[Order, Optional[Customer]]]:
        """
        Retrieve order joined with its owning customer

        Args:
            order_id: Order identifier

        Returns:
            (Order, Customer or None) if the order exists, None otherwise
        """
        pass

    @abstractmethod
    async def list_completed_with_customer(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Tuple[Order, Optional[Customer]]]:
        """
        List completed orders joined with their customer

        Args:
            start: Inclusive lower bound on created_at (None = unbounded)
            end: Inclusive upper bound on created_at (None = unbounded)

        Returns:
            Orders ordered by created_at descending
        """
        pass

    @abstractmethod
    async def list_by_customer(
        self, customer_id: str, status: Optional[str] = None
    ) -> List[Order]:
        """
        List orders of a customer, most recent first

        Args:
            customer_id: Customer identifier
            status: Optional status filter

        Returns:
            List of orders
        """
        pass
