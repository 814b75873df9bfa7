"""Order account watcher

Keeps the account view of one order current. Any change to the order, its
payments or its installments triggers a full reload of the snapshot and a
fresh derivation; event payloads are never applied to the view directly.
"""

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, List, Optional, Union

from libs.result import Error, Result
from src.app.services.change_feed import ChangeEvent, ChangeFeed, Subscription
from .dtos import OrderAccountDTO

logger = logging.getLogger(__name__)

AccountLoader = Callable[[], Awaitable[Result[OrderAccountDTO]]]
AccountListener = Callable[[OrderAccountDTO], Union[None, Awaitable[None]]]


class OrderAccountWatcher:
    """
    Live account view of one order

    Usage:
        watcher = OrderAccountWatcher(order_id, loader, change_feed)
        await watcher.start()
        ...
        watcher.close()

    A failed reload keeps the last good view and records last_error.
    Reloads are serialized, so the final view always reflects the latest
    completed load.
    """

    def __init__(
        self,
        order_id: str,
        loader: AccountLoader,
        change_feed: ChangeFeed,
        on_update: Optional[AccountListener] = None,
    ):
        self.order_id = order_id
        self.loader = loader
        self.change_feed = change_feed
        self.on_update = on_update

        self.view: Optional[OrderAccountDTO] = None
        self.last_error: Optional[Error] = None
        self.reload_count = 0

        self._subscriptions: List[Subscription] = []
        self._lock = asyncio.Lock()

    @property
    def is_watching(self) -> bool:
        return any(s.active for s in self._subscriptions)

    async def start(self) -> Optional[OrderAccountDTO]:
        """Subscribe to the three tables and load the initial view"""
        if not self._subscriptions:
            self._subscriptions = [
                self.change_feed.subscribe("orders", self._on_change, {"id": self.order_id}),
                self.change_feed.subscribe("payments", self._on_change, {"order_id": self.order_id}),
                self.change_feed.subscribe(
                    "order_installments", self._on_change, {"order_id": self.order_id}
                ),
            ]
            logger.info(f"Watching account of order {self.order_id}")
        return await self.refresh()

    async def _on_change(self, event: ChangeEvent):
        logger.debug(
            f"{event.table} {event.change_type.value} for order {self.order_id}, reloading"
        )
        await self.refresh()

    async def refresh(self) -> Optional[OrderAccountDTO]:
        """Reload the full snapshot; returns the current (possibly stale) view"""
        async with self._lock:
            try:
                result = await self.loader()
            except Exception as e:
                logger.error(f"Reloading account of order {self.order_id} failed: {e}")
                self.last_error = Error(
                    code="ACCOUNT_LOAD_FAILED",
                    message="Failed to load order account",
                    reason=str(e),
                )
                return self.view

            if result.is_err():
                logger.warning(
                    f"Reloading account of order {self.order_id} failed: {result.error.message}"
                )
                self.last_error = result.error
                return self.view

            self.view = result.value
            self.last_error = None
            self.reload_count += 1

        if self.on_update is not None:
            outcome = self.on_update(self.view)
            if inspect.isawaitable(outcome):
                await outcome
        return self.view

    def close(self):
        """Stop watching; safe to call more than once"""
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        if self._subscriptions:
            logger.info(f"Stopped watching account of order {self.order_id}")
        self._subscriptions = []

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, *args):
        self.close()
