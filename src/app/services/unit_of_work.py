"""Unit of Work Interface

Groups repository writes into one atomic commit.
"""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """
    Abstract unit of work

    Use cases call commit() once all writes of an operation are staged and
    rollback() when any step fails.
    """

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
