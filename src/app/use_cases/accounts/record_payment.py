"""RecordPayment Use Case

Records a payment submitted by a customer against one of their orders. The
payment starts as pending and does not move the ledger until it is reviewed.
"""

import logging
from datetime import timezone
from libs.result import Result, Return, Error
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.services.change_feed import ChangeEvent, ChangeFeed, ChangeType
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.domain.order import OrderStatus
from src.domain.payment import Payment, PaymentMethod, PaymentStatus
from .dtos import PaymentResponseDTO, RecordPaymentCommandDTO

logger = logging.getLogger(__name__)


def to_payment_response(payment: Payment) -> PaymentResponseDTO:
    return PaymentResponseDTO(
        id=payment.id,
        order_id=payment.order_id,
        customer_id=payment.customer_id,
        amount=payment.amount,
        method=payment.method,
        cheque_number=payment.cheque_number,
        bank_name=payment.bank_name,
        cheque_date=payment.cheque_date,
        status=payment.status,
        created_at=payment.created_at,
        received_at=payment.received_at,
        received_by=payment.received_by,
    )


class RecordPayment:
    """
    Use Case: Record a submitted payment

    Business Rules:
    1. Order must exist and must not be rejected
    2. Amount must be positive (validated by the command DTO)
    3. Method must be cash, deposit or cheque
    4. The payment is stored as pending; only a review credits it

    Flow:
    1. Validate method
    2. Retrieve order
    3. Insert payment
    4. Commit
    5. Publish a payments INSERT so open account views reload
    """

    def __init__(
        self,
        uow: UnitOfWork,
        order_repo: OrderRepository,
        payment_repo: PaymentRepository,
        change_feed: ChangeFeed,
        clock: Clock,
    ):
        self.uow = uow
        self.order_repo = order_repo
        self.payment_repo = payment_repo
        self.change_feed = change_feed
        self.clock = clock

    async def execute(self, command: RecordPaymentCommandDTO) -> Result[PaymentResponseDTO]:
        """
        Execute payment recording

        Args:
            command: RecordPaymentCommandDTO with order, amount and slip details

        Returns:
            Result[PaymentResponseDTO]: The pending payment, or error
        """
        method = (command.method or "").strip().lower()
        if method not in {m.value for m in PaymentMethod}:
            return Return.err(
                Error(
                    code="PAYMENT_METHOD_INVALID",
                    message=f"Unsupported payment method '{command.method}'",
                    reason="method must be cash, deposit or cheque",
                )
            )

        try:
            # Step 2: Retrieve order
            order = await self.order_repo.get_by_id(command.order_id)
            if not order:
                return Return.err(
                    Error(
                        code="ORDER_NOT_FOUND",
                        message=f"Order {command.order_id} not found",
                        reason="Order does not exist",
                    )
                )
            if order.status == OrderStatus.REJECTED.value:
                return Return.err(
                    Error(
                        code="ORDER_REJECTED",
                        message=f"Order {command.order_id} was rejected and accepts no payments",
                        reason=f"status={order.status}",
                    )
                )

            # Step 3: Insert payment
            payment = Payment(
                order_id=order.id,
                customer_id=order.customer_id,
                amount=command.amount,
                method=method,
                cheque_number=command.cheque_number,
                bank_name=command.bank_name,
                cheque_date=command.cheque_date,
                image_url=command.image_url,
                status=PaymentStatus.PENDING.value,
                created_at=self.clock.now().astimezone(timezone.utc).replace(tzinfo=None),
            )
            created = await self.payment_repo.create(payment)

            # Step 4: Commit
            await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to record payment for order {command.order_id}: {e}")
            return Return.err(
                Error(
                    code="RECORD_PAYMENT_FAILED",
                    message="Failed to record payment",
                    reason=str(e),
                )
            )

        # Step 5: Publish
        await self.change_feed.publish(
            ChangeEvent(
                table="payments",
                change_type=ChangeType.INSERT,
                new=created.model_dump(mode="json"),
            )
        )
        logger.info(f"Recorded pending payment {created.id} for order {created.order_id}")

        return Return.ok(to_payment_response(created))
