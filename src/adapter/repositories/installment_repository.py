"""SQLAlchemy implementation of InstallmentRepository

Provides persistence for OrderInstallment entities.
"""

from typing import List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.installment_repository import InstallmentRepository
from src.domain.order_installment import OrderInstallment


class SqlAlchemyInstallmentRepository(InstallmentRepository):
    """
    SQLAlchemy implementation of InstallmentRepository

    Features:
    - Rows returned in term order
    - Optional row locking while a payment is allocated
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_by_order(self, order_id: str, for_update: bool = False) -> List[OrderInstallment]:
        """
        List installments of an order by term number

        Args:
            order_id: Order identifier
            for_update: If True, locks the rows with SELECT FOR UPDATE

        Returns:
            Installments ordered by term_no ascending
        """
        stmt = (
            select(OrderInstallment)
            .where(OrderInstallment.order_id == order_id)
            .order_by(OrderInstallment.term_no.asc())
        )

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create_many(self, installments: List[OrderInstallment]) -> List[OrderInstallment]:
        """
        Create the installments of a payment plan

        Args:
            installments: Rows to persist

        Returns:
            Created rows
        """
        self.session.add_all(installments)
        await self.session.flush()
        for installment in installments:
            await self.session.refresh(installment)
        return installments

    async def update(self, installment: OrderInstallment) -> OrderInstallment:
        """
        Persist changes to an installment

        Args:
            installment: Modified installment

        Returns:
            Updated OrderInstallment
        """
        self.session.add(installment)
        await self.session.flush()
        await self.session.refresh(installment)
        return installment
