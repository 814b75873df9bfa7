"""Installment Repository Interface

Defines the contract for order installment persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.order_installment import OrderInstallment


class InstallmentRepository(ABC):
    """
    Repository interface for OrderInstallment persistence

    Rows are created when a payment plan is set up and updated as received
    payments are allocated to them.
    """

    @abstractmethod
    async def list_by_order(self, order_id: str, for_update: bool = False) -> List[OrderInstallment]:
        """
        List installments of an order by term number

        Args:
            order_id: Order identifier
            for_update: Lock the rows (SELECT FOR UPDATE) for allocation

        Returns:
            Installments ordered by term_no ascending
        """
        pass

    @abstractmethod
    async def create_many(self, installments: List[OrderInstallment]) -> List[OrderInstallment]:
        """
        Create the installments of a payment plan

        Args:
            installments: Rows to persist

        Returns:
            Created rows
        """
        pass

    @abstractmethod
    async def update(self, installment: OrderInstallment) -> OrderInstallment:
        """
        Persist changes to an installment

        Args:
            installment: Modified installment

        Returns:
            Updated OrderInstallment
        """
        pass
