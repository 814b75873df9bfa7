"""Integration tests for Order Account API endpoints"""

import pytest
from decimal import Decimal
from httpx import AsyncClient

from tests.integration.seed import CUSTOMER_ID, ORDER_ID, seed_order


class TestOrderAccountsAPIIntegration:
    """Integration test suite for ledger, schedule and account endpoints"""

    @pytest.mark.asyncio
    async def test_get_ledger(self, client: AsyncClient, db_session):
        """GET /orders/{id}/ledger returns the charge and received payments only"""
        # Arrange
        await seed_order(db_session)

        # Act
        response = await client.get(f"/orders/{ORDER_ID}/ledger")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["invoice_code"] == "INV-0001"
        assert len(data["entries"]) == 2

        charge, payment = data["entries"]
        assert charge["kind"] == "debit"
        assert charge["description"] == "TXN Charge (INV-0001)"
        assert charge["date_label"] == "Mar 01, 2024, 10:00 AM"
        assert Decimal(charge["balance"]) == Decimal("11200.00")
        assert payment["kind"] == "credit"
        assert payment["reference_id"] == "pay-received"
        assert Decimal(payment["balance"]) == Decimal("6200.00")

        assert Decimal(data["total_credits"]) == Decimal("5000.00")
        assert Decimal(data["current_balance"]) == Decimal("6200.00")

    @pytest.mark.asyncio
    async def test_get_ledger_not_found(self, client: AsyncClient):
        """Unknown order returns 404 with the error envelope"""
        # Act
        response = await client.get("/orders/missing-order/ledger")

        # Assert
        assert response.status_code == 404
        assert response.json() == {
            "error": {"code": "ORDER_NOT_FOUND", "message": "Order missing-order not found"}
        }

    @pytest.mark.asyncio
    async def test_get_schedule(self, client: AsyncClient, db_session):
        """Term 1 is past due and short, term 2 is still pending"""
        # Arrange
        await seed_order(db_session)

        # Act
        response = await client.get(f"/orders/{ORDER_ID}/schedule")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["today"] == "2024-03-15"
        assert [i["status"] for i in data["installments"]] == ["overdue", "pending"]
        assert [Decimal(i["remaining"]) for i in data["installments"]] == [Decimal("600.00"), Decimal("5600.00")]
        assert Decimal(data["total_due"]) == Decimal("11200.00")
        assert Decimal(data["total_paid"]) == Decimal("5000.00")
        assert Decimal(data["remaining"]) == Decimal("6200.00")
        assert data["next_unpaid"]["term_no"] == 1
        assert data["next_unpaid"]["is_overdue"] is True

    @pytest.mark.asyncio
    async def test_get_schedule_without_installments(self, client: AsyncClient, db_session):
        """An order without installment rows has an empty schedule"""
        # Arrange
        await seed_order(db_session, with_installments=False)

        # Act
        response = await client.get(f"/orders/{ORDER_ID}/schedule")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["installments"] == []
        assert data["next_unpaid"] is None

    @pytest.mark.asyncio
    async def test_get_account(self, client: AsyncClient, db_session):
        """Account combines ledger and schedule"""
        # Arrange
        await seed_order(db_session)

        # Act
        response = await client.get(f"/orders/{ORDER_ID}/account")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["order_id"] == ORDER_ID
        assert Decimal(data["balance"]) == Decimal("6200.00")
        assert len(data["ledger"]["entries"]) == 2
        assert len(data["schedule"]["installments"]) == 2

    @pytest.mark.asyncio
    async def test_download_ledger_pdf(self, client: AsyncClient, db_session):
        """Statement is served as a PDF attachment"""
        # Arrange
        await seed_order(db_session)

        # Act
        response = await client.get(f"/orders/{ORDER_ID}/ledger/pdf")

        # Assert
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert "Ledger_INV-0001_2024-03-15.pdf" in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_outstanding_orders(self, client: AsyncClient, db_session):
        """Completed orders with a balance are listed for the customer"""
        # Arrange
        await seed_order(db_session)

        # Act
        response = await client.get(f"/customers/{CUSTOMER_ID}/outstanding")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert len(data["orders"]) == 1
        assert data["orders"][0]["transaction_code"] == "TXN-20240301-5F0C2B1E"
        assert Decimal(data["orders"][0]["balance"]) == Decimal("6200.00")
        assert Decimal(data["total_balance"]) == Decimal("6200.00")

    @pytest.mark.asyncio
    async def test_outstanding_orders_unknown_customer(self, client: AsyncClient):
        # Act
        response = await client.get("/customers/nobody/outstanding")

        # Assert
        assert response.status_code == 200
        assert response.json()["orders"] == []
