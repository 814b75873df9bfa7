"""SQLAlchemy implementation of OrderRepository

Reads orders, optionally joined with their customer. Timestamps are stored
as naive UTC; aware bounds are converted before comparison.
"""

from datetime import datetime, timezone
from typing import List, Optional, Tuple
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from libs.ph_calendar import ONE_MS
from src.app.repositories.order_repository import OrderRepository
from src.domain.customer import Customer
from src.domain.order import Order, OrderStatus


def _to_db_timestamp(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant
    return instant.astimezone(timezone.utc).replace(tzinfo=None)


class SqlAlchemyOrderRepository(OrderRepository):
    """
    SQLAlchemy implementation of OrderRepository

    Features:
    - Customer join resolved to at most one Customer per order
    - Completed-only range query with an exclusive upper bound (end + 1ms)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        """
        Retrieve order by ID

        Args:
            order_id: Order identifier

        Returns:
            Order if found, None otherwise
        """
        stmt = select(Order).where(Order.id == order_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

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
        stmt = (
            select(Order, Customer)
            .outerjoin(Customer, Order.customer_id == Customer.id)
            .where(Order.id == order_id)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return row[0], row[1]

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
        stmt = (
            select(Order, Customer)
            .outerjoin(Customer, Order.customer_id == Customer.id)
            .where(Order.status == OrderStatus.COMPLETED.value)
        )

        if start is not None:
            stmt = stmt.where(Order.created_at >= _to_db_timestamp(start))
        if end is not None:
            stmt = stmt.where(Order.created_at < _to_db_timestamp(end + ONE_MS))

        stmt = stmt.order_by(Order.created_at.desc())

        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

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
        stmt = select(Order).where(Order.customer_id == customer_id)

        if status:
            stmt = stmt.where(Order.status == status)

        stmt = stmt.order_by(Order.created_at.desc())

        result = await self.session.execute(stmt)
        return list(result.scalars().all())
