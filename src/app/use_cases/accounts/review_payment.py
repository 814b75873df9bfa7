"""ReviewPayment Use Case

Staff confirm (received) or reject a pending payment. A received payment is
applied to the order's unpaid installments in term order.
"""

import logging
from datetime import timezone
from decimal import Decimal
from typing import List, Tuple
from libs.money import AMOUNT_EPSILON, ZERO, round2
from libs.result import Result, Return, Error
from src.app.repositories.installment_repository import InstallmentRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.services.change_feed import ChangeEvent, ChangeFeed, ChangeType
from src.app.services.clock import Clock
from src.app.services.notification_service import NotificationService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.order_installment import InstallmentRowStatus, OrderInstallment
from src.domain.payment import PaymentStatus
from .dtos import (
    InstallmentAllocationDTO,
    ReviewDecision,
    ReviewPaymentCommandDTO,
    ReviewPaymentResponseDTO,
)
from .record_payment import to_payment_response

logger = logging.getLogger(__name__)


def allocate_to_installments(
    installments: List[OrderInstallment], amount: Decimal
) -> Tuple[List[OrderInstallment], List[InstallmentAllocationDTO], Decimal]:
    """
    Apply an amount to unpaid terms, lowest term first

    amount_paid never exceeds amount_due; a term becomes paid once covered.
    Mutates the given rows.

    Returns:
        (touched rows, allocations, amount left over)
    """
    remaining = round2(amount)
    touched: List[OrderInstallment] = []
    allocations: List[InstallmentAllocationDTO] = []

    for row in sorted(installments, key=lambda r: r.term_no):
        if remaining <= ZERO:
            break
        amount_due = round2(row.amount_due)
        amount_paid = round2(row.amount_paid)
        if row.status == InstallmentRowStatus.PAID.value or amount_paid + AMOUNT_EPSILON >= amount_due:
            continue

        applied = min(remaining, round2(amount_due - amount_paid))
        row.amount_paid = round2(amount_paid + applied)
        if row.amount_paid + AMOUNT_EPSILON >= amount_due:
            row.status = InstallmentRowStatus.PAID.value
        remaining = round2(remaining - applied)

        touched.append(row)
        allocations.append(
            InstallmentAllocationDTO(
                term_no=row.term_no,
                applied=applied,
                amount_paid=row.amount_paid,
                status=row.status,
            )
        )

    return touched, allocations, remaining


class ReviewPayment:
    """
    Use Case: Review a pending payment

    Business Rules:
    1. Payment must exist and still be pending
    2. received: stamps received_at/received_by and allocates the amount to
       unpaid installments in term order
    3. rejected: the payment never reaches the ledger
    4. Payment and installment rows are locked and updated atomically
    5. The customer is notified after commit; a failed notification does
       not undo the review

    Flow:
    1. Lock payment (SELECT FOR UPDATE)
    2. Validate status is pending
    3. Apply decision (and allocation for received)
    4. Commit
    5. Publish payments / order_installments UPDATEs
    6. Notify the customer
    """

    def __init__(
        self,
        uow: UnitOfWork,
        payment_repo: PaymentRepository,
        installment_repo: InstallmentRepository,
        change_feed: ChangeFeed,
        notification_service: NotificationService,
        clock: Clock,
    ):
        self.uow = uow
        self.payment_repo = payment_repo
        self.installment_repo = installment_repo
        self.change_feed = change_feed
        self.notification_service = notification_service
        self.clock = clock

    async def execute(self, command: ReviewPaymentCommandDTO) -> Result[ReviewPaymentResponseDTO]:
        """
        Execute payment review

        Args:
            command: ReviewPaymentCommandDTO with payment id and decision

        Returns:
            Result[ReviewPaymentResponseDTO]: Reviewed payment and allocations
        """
        try:
            # Step 1: Lock payment
            payment = await self.payment_repo.get_by_id(command.payment_id, for_update=True)
            if not payment:
                return Return.err(
                    Error(
                        code="PAYMENT_NOT_FOUND",
                        message=f"Payment {command.payment_id} not found",
                        reason="Payment does not exist",
                    )
                )

            # Step 2: Only pending payments can be reviewed
            if payment.status != PaymentStatus.PENDING.value:
                return Return.err(
                    Error(
                        code="PAYMENT_ALREADY_REVIEWED",
                        message=f"Payment {payment.id} was already marked {payment.status}",
                        reason=f"status={payment.status}",
                    )
                )

            old_row = payment.model_dump(mode="json")
            touched: List[OrderInstallment] = []
            allocations: List[InstallmentAllocationDTO] = []
            unallocated = ZERO

            # Step 3: Apply decision
            decision = ReviewDecision(command.decision)
            if decision == ReviewDecision.RECEIVED:
                payment.status = PaymentStatus.RECEIVED.value
                payment.received_at = self.clock.now().astimezone(timezone.utc).replace(tzinfo=None)
                payment.received_by = command.reviewed_by

                installments = await self.installment_repo.list_by_order(
                    payment.order_id, for_update=True
                )
                touched, allocations, unallocated = allocate_to_installments(
                    installments, payment.amount
                )
                for row in touched:
                    await self.installment_repo.update(row)
            else:
                payment.status = PaymentStatus.REJECTED.value

            payment = await self.payment_repo.update(payment)

            # Step 4: Commit
            await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to review payment {command.payment_id}: {e}")
            return Return.err(
                Error(
                    code="PAYMENT_REVIEW_FAILED",
                    message="Failed to review payment",
                    reason=str(e),
                )
            )

        if unallocated > ZERO and touched:
            logger.warning(
                f"Payment {payment.id} exceeds the open installments of order "
                f"{payment.order_id} by {unallocated}"
            )

        # Step 5: Publish
        await self.change_feed.publish(
            ChangeEvent(
                table="payments",
                change_type=ChangeType.UPDATE,
                new=payment.model_dump(mode="json"),
                old=old_row,
            )
        )
        for row in touched:
            await self.change_feed.publish(
                ChangeEvent(
                    table="order_installments",
                    change_type=ChangeType.UPDATE,
                    new=row.model_dump(mode="json"),
                )
            )

        # Step 6: Notify
        try:
            notified = await self.notification_service.send_payment_reviewed(payment)
        except Exception as e:
            logger.error(f"Notification for payment {payment.id} failed: {e}")
            notified = False
        if not notified:
            logger.warning(f"Customer was not notified about payment {payment.id}")

        logger.info(f"Payment {payment.id} marked {payment.status}")

        return Return.ok(
            ReviewPaymentResponseDTO(
                payment=to_payment_response(payment),
                allocations=allocations,
                unallocated=unallocated,
            )
        )
