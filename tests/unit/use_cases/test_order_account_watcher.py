"""Unit tests for the order account watcher

Tests cover:
- Initial load and subscriptions on the three tables
- Reload on matching events only
- Last good view retained on failure
- close() stops delivery and is idempotent
"""

import pytest
from datetime import date
from decimal import Decimal

from libs.result import Error, Return
from src.adapter.services.change_feed import InMemoryChangeFeed
from src.app.services.change_feed import ChangeEvent, ChangeType
from src.app.use_cases.accounts.account_view import OrderAccountSnapshot, derive_account_view
from src.app.use_cases.accounts.order_account_watcher import OrderAccountWatcher
from src.app.use_cases.accounts.snapshots import OrderSnapshot, PaymentSnapshot

ORDER_ID = "order-1"


class FakeStore:
    """Mutable rows behind a loader, standing in for the database"""

    def __init__(self):
        self.payments = []
        self.fail = False
        self.loads = 0

    async def load(self):
        self.loads += 1
        if self.fail:
            return Return.err(Error(code="ACCOUNT_LOAD_FAILED", message="store unavailable"))
        snapshot = OrderAccountSnapshot(
            order=OrderSnapshot.model_validate(
                {"id": ORDER_ID, "status": "completed", "total_amount": "11200",
                 "created_at": "2024-03-01T02:00:00Z"}
            ),
            payments=[PaymentSnapshot.model_validate(p) for p in self.payments],
        )
        return Return.ok(derive_account_view(snapshot, today=date(2024, 3, 15)))


def payment_event(order_id=ORDER_ID, change_type=ChangeType.INSERT):
    return ChangeEvent(
        table="payments",
        change_type=change_type,
        new={"id": "p1", "order_id": order_id, "status": "received"},
    )


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def feed():
    return InMemoryChangeFeed()


@pytest.mark.asyncio
class TestOrderAccountWatcher:
    """Test live account view"""

    async def test_start_loads_and_subscribes(self, store, feed):
        # Arrange
        watcher = OrderAccountWatcher(ORDER_ID, store.load, feed)

        # Act
        view = await watcher.start()

        # Assert
        assert view.balance == Decimal("11200.00")
        assert feed.subscription_count == 3
        assert watcher.is_watching

    async def test_matching_event_triggers_full_reload(self, store, feed):
        # Arrange
        updates = []
        watcher = OrderAccountWatcher(ORDER_ID, store.load, feed, on_update=updates.append)
        await watcher.start()
        store.payments.append(
            {"id": "p1", "order_id": ORDER_ID, "amount": "5000", "status": "received",
             "created_at": "2024-03-05T03:00:00Z"}
        )

        # Act
        delivered = await feed.publish(payment_event())

        # Assert
        assert delivered == 1
        assert watcher.view.balance == Decimal("6200.00")
        assert [u.balance for u in updates] == [Decimal("11200.00"), Decimal("6200.00")]
        assert store.loads == 2

    async def test_event_for_other_order_is_ignored(self, store, feed):
        # Arrange
        watcher = OrderAccountWatcher(ORDER_ID, store.load, feed)
        await watcher.start()

        # Act
        delivered = await feed.publish(payment_event(order_id="order-2"))

        # Assert
        assert delivered == 0
        assert store.loads == 1

    async def test_order_and_installment_events(self, store, feed):
        # Arrange
        watcher = OrderAccountWatcher(ORDER_ID, store.load, feed)
        await watcher.start()

        # Act
        await feed.publish(ChangeEvent("orders", ChangeType.UPDATE, new={"id": ORDER_ID}))
        await feed.publish(
            ChangeEvent("order_installments", ChangeType.DELETE, old={"order_id": ORDER_ID})
        )

        # Assert
        assert store.loads == 3

    async def test_failed_reload_keeps_last_view(self, store, feed):
        # Arrange
        watcher = OrderAccountWatcher(ORDER_ID, store.load, feed)
        first = await watcher.start()
        store.fail = True

        # Act
        await feed.publish(payment_event())

        # Assert
        assert watcher.view == first
        assert watcher.last_error.code == "ACCOUNT_LOAD_FAILED"

    async def test_loader_exception_keeps_last_view(self, store, feed):
        # Arrange
        watcher = OrderAccountWatcher(ORDER_ID, store.load, feed)
        first = await watcher.start()

        async def broken():
            raise RuntimeError("socket closed")

        watcher.loader = broken

        # Act
        view = await watcher.refresh()

        # Assert
        assert view == first
        assert "socket closed" in watcher.last_error.reason

    async def test_close_unsubscribes(self, store, feed):
        # Arrange
        watcher = OrderAccountWatcher(ORDER_ID, store.load, feed)
        await watcher.start()

        # Act
        watcher.close()
        watcher.close()
        delivered = await feed.publish(payment_event())

        # Assert
        assert delivered == 0
        assert feed.subscription_count == 0
        assert not watcher.is_watching

    async def test_context_manager(self, store, feed):
        # Act
        async with OrderAccountWatcher(ORDER_ID, store.load, feed) as watcher:
            assert watcher.view is not None

        # Assert
        assert feed.subscription_count == 0
