"""In-process Change Feed

Delivers row-change events to subscribers within one process. Use cases
publish after commit; views subscribe with equality filters.
"""

import inspect
import logging
from typing import Any, Dict, List, Optional

from src.app.services.change_feed import (
    ChangeCallback,
    ChangeEvent,
    ChangeFeed,
    Subscription,
)

logger = logging.getLogger(__name__)


class InMemoryChangeFeed(ChangeFeed):
    """
    In-memory implementation of ChangeFeed

    Features:
    - Table + equality filter subscriptions
    - Sync and async callbacks
    - A failing callback is logged and does not stop delivery to the others
    """

    def __init__(self):
        self._subscriptions: List[Subscription] = []

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(
        self,
        table: str,
        callback: ChangeCallback,
        filters: Optional[Dict[str, Any]] = None,
    ) -> Subscription:
        subscription = Subscription(
            table=table,
            callback=callback,
            filters=dict(filters or {}),
            _on_cancel=self._remove,
        )
        self._subscriptions.append(subscription)
        logger.debug(f"Subscribed to {table} with filters {subscription.filters}")
        return subscription

    def _remove(self, subscription: Subscription):
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
            logger.debug(f"Unsubscribed from {subscription.table}")

    async def publish(self, event: ChangeEvent) -> int:
        delivered = 0
        # Copy: callbacks may unsubscribe while we iterate
        for subscription in list(self._subscriptions):
            if not subscription.active or subscription.table != event.table:
                continue
            if not event.matches(subscription.filters):
                continue
            try:
                outcome = subscription.callback(event)
                if inspect.isawaitable(outcome):
                    await outcome
                delivered += 1
            except Exception as e:
                logger.error(
                    f"Change feed callback failed for {event.table} {event.change_type.value}: {e}"
                )
        return delivered
