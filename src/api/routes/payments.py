"""Payment API Routes

FastAPI routes for submitting and reviewing payments.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.payment_request import (
    RecordPaymentRequestSchema,
    ReviewPaymentRequestSchema,
)
from src.app.services.change_feed import ChangeFeed
from src.app.services.clock import Clock
from src.app.services.notification_service import NotificationService
from src.app.use_cases.accounts import RecordPayment, ReviewPayment
from src.app.use_cases.accounts.dtos import (
    PaymentResponseDTO,
    RecordPaymentCommandDTO,
    ReviewPaymentCommandDTO,
    ReviewPaymentResponseDTO,
)
from src.adapter.repositories import (
    SqlAlchemyInstallmentRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyPaymentRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_change_feed, get_clock, get_notification_service, get_session
from src.api.error import ClientError

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post(
    "",
    response_model=PaymentResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
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
        },
        400: {
            "description": "Validation error",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "VALIDATION_ERROR",
                            "message": "amount: Input should be greater than 0"
                        }
                    }
                }
            }
        }
    }
)
async def record_payment(
    request: RecordPaymentRequestSchema,
    session: AsyncSession = Depends(get_session),
    change_feed: ChangeFeed = Depends(get_change_feed),
    clock: Clock = Depends(get_clock),
):
    """
    Submit a payment against an order.

    The payment is stored as **pending** and appears on the ledger only
    after staff mark it received.

    **Example request:**
    ```json
    {
      "order_id": "5f0c2b1e-8d7a-4c1e-9a55-2b7e1f7c9d10",
      "amount": "5000.00",
      "method": "deposit",
      "cheque_number": "0012",
      "bank_name": "BDO",
      "cheque_date": "2024-03-05"
    }
    ```

    **Returns:**
    - 201: Payment recorded as pending
    - 400: Invalid request parameters, unsupported method or rejected order
    - 404: Order not found
    """
    uow = SqlAlchemyUnitOfWork(session)

    command = RecordPaymentCommandDTO(
        order_id=request.order_id,
        amount=request.amount,
        method=request.method,
        cheque_number=request.cheque_number,
        bank_name=request.bank_name,
        cheque_date=request.cheque_date,
        image_url=request.image_url,
    )

    use_case = RecordPayment(
        uow,
        SqlAlchemyOrderRepository(session),
        SqlAlchemyPaymentRepository(session),
        change_feed,
        clock,
    )
    result = await use_case.execute(command)

    if result.is_err():
        if result.error.code == "ORDER_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        raise ClientError(result.error)

    return result.value


@router.post(
    "/{payment_id}/review",
    response_model=ReviewPaymentResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: {
            "description": "Payment not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "PAYMENT_NOT_FOUND",
                            "message": "Payment a1c4... not found"
                        }
                    }
                }
            }
        },
        400: {
            "description": "Payment already reviewed",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "PAYMENT_ALREADY_REVIEWED",
                            "message": "Payment a1c4... was already marked received"
                        }
                    }
                }
            }
        }
    }
)
async def review_payment(
    payment_id: str,
    request: ReviewPaymentRequestSchema,
    session: AsyncSession = Depends(get_session),
    change_feed: ChangeFeed = Depends(get_change_feed),
    clock: Clock = Depends(get_clock),
    notification_service: NotificationService = Depends(get_notification_service),
):
    """
    Mark a pending payment received or rejected.

    A received payment is applied to the order's unpaid installments in
    term order and the customer is notified either way.

    **Returns:**
    - 200: Reviewed payment with installment allocations
    - 400: Payment is no longer pending
    - 404: Payment not found
    """
    uow = SqlAlchemyUnitOfWork(session)

    command = ReviewPaymentCommandDTO(
        payment_id=payment_id,
        decision=request.decision,
        reviewed_by=request.reviewed_by,
    )

    use_case = ReviewPayment(
        uow,
        SqlAlchemyPaymentRepository(session),
        SqlAlchemyInstallmentRepository(session),
        change_feed,
        notification_service,
        clock,
    )
    result = await use_case.execute(command)

    if result.is_err():
        if result.error.code == "PAYMENT_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        raise ClientError(result.error)

    return result.value
