"""SQLAlchemy implementation of PaymentRepository

Provides persistence for Payment entities with row locking for reviews.
"""

from typing import List, Optional, Sequence
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.payment import Payment


class SqlAlchemyPaymentRepository(PaymentRepository):
    """
    SQLAlchemy implementation of PaymentRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE when reviewing
    - Payments listed oldest first (ledger order)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, payment: Payment) -> Payment:
        """
        Create a new payment

        Args:
            payment: Payment entity to persist

        Returns:
            Created Payment
        """
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    async def get_by_id(self, payment_id: str, for_update: bool = False) -> Optional[Payment]:
        """
        Retrieve payment by ID with optional row-level locking

        Args:
            payment_id: Payment identifier
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Payment if found, None otherwise
        """
        stmt = select(Payment).where(Payment.id == payment_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_order(self, order_id: str) -> List[Payment]:
        """
        List payments of an order, oldest first

        Args:
            order_id: Order identifier

        Returns:
            Payments ordered by created_at ascending
        """
        stmt = (
            select(Payment)
            .where(Payment.order_id == order_id)
            .order_by(Payment.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

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
        if not order_ids:
            return []

        stmt = select(Payment).where(Payment.order_id.in_(list(order_ids)))

        if status:
            stmt = stmt.where(Payment.status == status)

        stmt = stmt.order_by(Payment.created_at.asc())

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, payment: Payment) -> Payment:
        """
        Persist changes to a payment

        Args:
            payment: Modified payment

        Returns:
            Updated Payment
        """
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment
