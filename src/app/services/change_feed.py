"""Change Feed Interface

Row-level change notifications keyed by table and an equality filter. Views
treat a notification purely as an invalidation signal: they reload the full
snapshot and recompute, they never patch derived state from the payload.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Union


class ChangeType(str, Enum):
    """Kind of row change"""
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class ChangeEvent:
    """
    One row change

    Attributes:
        table: Table name (orders, payments, order_installments)
        change_type: INSERT, UPDATE or DELETE
        new: Row after the change (None for DELETE)
        old: Row before the change (None for INSERT)
    """

    table: str
    change_type: ChangeType
    new: Optional[Dict[str, Any]] = None
    old: Optional[Dict[str, Any]] = None

    def matches(self, filters: Optional[Dict[str, Any]]) -> bool:
        """True when the new or the old row satisfies every equality filter"""
        if not filters:
            return True
        for row in (self.new, self.old):
            if row and all(str(row.get(k)) == str(v) for k, v in filters.items()):
                return True
        return False


ChangeCallback = Callable[[ChangeEvent], Union[None, Awaitable[None]]]


@dataclass
class Subscription:
    """Handle returned by ChangeFeed.subscribe"""

    table: str
    callback: ChangeCallback
    filters: Dict[str, Any] = field(default_factory=dict)
    active: bool = True
    _on_cancel: Optional[Callable[["Subscription"], None]] = field(default=None, repr=False)

    def unsubscribe(self):
        """Stop delivery; calling it more than once is a no-op"""
        if not self.active:
            return
        self.active = False
        if self._on_cancel is not None:
            self._on_cancel(self)


class ChangeFeed(ABC):
    """Publish/subscribe channel for row changes"""

    @abstractmethod
    def subscribe(
        self,
        table: str,
        callback: ChangeCallback,
        filters: Optional[Dict[str, Any]] = None,
    ) -> Subscription:
        """
        Subscribe to changes of a table

        Args:
            table: Table name
            callback: Sync or async callable receiving the ChangeEvent
            filters: Column equality filters, e.g. {"order_id": "..."}

        Returns:
            Subscription handle
        """
        pass

    @abstractmethod
    async def publish(self, event: ChangeEvent) -> int:
        """
        Deliver an event to every matching subscription

        Returns:
            Number of subscriptions the event was delivered to
        """
        pass
