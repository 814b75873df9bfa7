"""Order Account API Routes

FastAPI routes for the ledger, installment schedule and account view of an order,
plus a websocket that pushes the account view whenever it changes.
"""

import base64
import logging
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from fastapi.responses import Response
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.app.services.change_feed import ChangeFeed
from src.app.services.clock import Clock
from src.app.use_cases.accounts import (
    GenerateLedgerStatement,
    GetOrderAccount,
    GetOrderLedger,
    GetPaymentSchedule,
    OrderAccountWatcher,
)
from src.app.use_cases.accounts.dtos import (
    OrderAccountDTO,
    OrderLedgerDTO,
    PaymentScheduleDTO,
)
from src.adapter.repositories import (
    SqlAlchemyInstallmentRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyPaymentRepository,
)
from src.adapter.services.pdf_service import ReportLabPdfService
from src.depends import (
    calendar_offset,
    credited_statuses,
    get_change_feed,
    get_clock,
    get_session,
    get_session_factory,
)
from src.api.error import ClientError, error_body

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["Order Accounts"])

ORDER_NOT_FOUND_RESPONSE = {
    404: {
        "description": "Order not found",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "ORDER_NOT_FOUND",
                        "message": "Order 5f0c2b1e-... not found"
                    }
                }
            }
        }
    }
}


@router.get(
    "/{order_id}/ledger",
    response_model=OrderLedgerDTO,
    status_code=status.HTTP_200_OK,
    responses=ORDER_NOT_FOUND_RESPONSE,
)
async def get_order_ledger(
    order_id: str,
    session: AsyncSession = Depends(get_session)
):
    """
    Payment ledger of an order.

    One debit row for the order charge (grand total plus shipping fee) and
    one credit row per received payment, in date order, with the running
    balance after each row.

    **Returns:**
    - 200: Ledger rows, total credits and current balance
    - 404: Order not found
    """
    use_case = GetOrderLedger(
        SqlAlchemyOrderRepository(session),
        SqlAlchemyPaymentRepository(session),
        credited_statuses=credited_statuses,
    )
    result = await use_case.execute(order_id)

    if result.is_err():
        if result.error.code == "ORDER_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{order_id}/ledger/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF statement of account"
        },
        **ORDER_NOT_FOUND_RESPONSE,
    }
)
async def download_ledger_statement(
    order_id: str,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """
    Download the ledger of an order as a PDF statement of account.

    **Returns:**
    - 200: PDF file as binary response
    - 404: Order not found
    """
    use_case = GenerateLedgerStatement(
        SqlAlchemyOrderRepository(session),
        SqlAlchemyPaymentRepository(session),
        ReportLabPdfService(),
        clock,
        credited_statuses=credited_statuses,
        company_name=ApplicationConfig.COMPANY_NAME,
        company_address=ApplicationConfig.COMPANY_ADDRESS,
        offset=calendar_offset,
    )
    result = await use_case.execute(order_id)

    if result.is_err():
        if result.error.code == "ORDER_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        raise ClientError(result.error)

    pdf_bytes = base64.b64decode(result.value.pdf_base64)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={result.value.filename}"
        }
    )


@router.get(
    "/{order_id}/schedule",
    response_model=PaymentScheduleDTO,
    status_code=status.HTTP_200_OK,
    responses=ORDER_NOT_FOUND_RESPONSE,
)
async def get_payment_schedule(
    order_id: str,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """
    Installment schedule of an order.

    Each term is classified as paid, pending or overdue against today's
    date in Philippine time. `next_unpaid` is the lowest unpaid term.

    **Returns:**
    - 200: Classified terms, totals and next unpaid term
    - 404: Order not found
    """
    use_case = GetPaymentSchedule(
        SqlAlchemyOrderRepository(session),
        SqlAlchemyInstallmentRepository(session),
        clock,
        offset=calendar_offset,
    )
    result = await use_case.execute(order_id)

    if result.is_err():
        if result.error.code == "ORDER_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{order_id}/account",
    response_model=OrderAccountDTO,
    status_code=status.HTTP_200_OK,
    responses=ORDER_NOT_FOUND_RESPONSE,
)
async def get_order_account(
    order_id: str,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """
    Ledger and installment schedule of an order, derived from one snapshot.

    **Returns:**
    - 200: Ledger, schedule and outstanding balance
    - 404: Order not found
    """
    use_case = GetOrderAccount(
        SqlAlchemyOrderRepository(session),
        SqlAlchemyPaymentRepository(session),
        SqlAlchemyInstallmentRepository(session),
        clock,
        credited_statuses=credited_statuses,
        offset=calendar_offset,
    )
    result = await use_case.execute(order_id)

    if result.is_err():
        if result.error.code == "ORDER_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        raise ClientError(result.error)

    return result.value


@router.websocket("/{order_id}/account/stream")
async def stream_order_account(
    websocket: WebSocket,
    order_id: str,
    session_factory: sessionmaker = Depends(get_session_factory),
    change_feed: ChangeFeed = Depends(get_change_feed),
    clock: Clock = Depends(get_clock),
):
    """
    Live account view of an order.

    Sends the account view on connect and again after every change to the
    order, its payments or its installments. An order that cannot be loaded
    gets one {"error": {...}} message and the socket is closed.
    """

    async def load_account():
        # Fresh session per reload so rows committed by other requests are seen
        async with session_factory() as session:
            use_case = GetOrderAccount(
                SqlAlchemyOrderRepository(session),
                SqlAlchemyPaymentRepository(session),
                SqlAlchemyInstallmentRepository(session),
                clock,
                credited_statuses=credited_statuses,
                offset=calendar_offset,
            )
            return await use_case.execute(order_id)

    async def push(view: OrderAccountDTO):
        await websocket.send_json(view.model_dump(mode="json"))

    await websocket.accept()
    watcher = OrderAccountWatcher(order_id, load_account, change_feed, on_update=push)
    try:
        if await watcher.start() is None:
            error = watcher.last_error
            await websocket.send_json(error_body(error.code, error.message))
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
            return

        # Client messages are ignored; receiving only detects the disconnect
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug(f"Account stream of order {order_id} disconnected")
    finally:
        watcher.close()
