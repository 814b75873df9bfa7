"""SQLAlchemy Unit of Work

Commits or rolls back the session shared by the repositories of one request.
"""

import logging
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Session-backed unit of work

    Repositories only flush; nothing reaches the database until commit().
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        if self.session.in_transaction():
            logger.debug("Rolling back staged payment/installment writes")
        await self.session.rollback()
