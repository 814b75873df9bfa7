"""GetPaymentSchedule Use Case

Classifies the installments of an order against today's PH calendar date.
"""

import logging
from datetime import timedelta
from libs.ph_calendar import PH_OFFSET
from libs.result import Result, Return, Error
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.installment_repository import InstallmentRepository
from src.app.services.clock import Clock
from .dtos import PaymentScheduleDTO
from .installment_schedule import build_schedule
from .snapshots import InstallmentSnapshot

logger = logging.getLogger(__name__)


class GetPaymentSchedule:
    """
    Use Case: View the installment schedule of an order

    Business Rules:
    1. Order must exist
    2. A term is paid when its stored status is paid or amount_paid covers amount_due
    3. An unpaid term is overdue when its due date is before today (local date)
    4. An order without installment rows yields an empty schedule
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        installment_repo: InstallmentRepository,
        clock: Clock,
        offset: timedelta = PH_OFFSET,
    ):
        self.order_repo = order_repo
        self.installment_repo = installment_repo
        self.clock = clock
        self.offset = offset

    async def execute(self, order_id: str) -> Result[PaymentScheduleDTO]:
        """
        Execute schedule classification

        Args:
            order_id: Order identifier

        Returns:
            Result[PaymentScheduleDTO]: Classified terms and totals, or error
        """
        try:
            order = await self.order_repo.get_by_id(order_id)
            if not order:
                return Return.err(
                    Error(
                        code="ORDER_NOT_FOUND",
                        message=f"Order {order_id} not found",
                        reason="Order does not exist",
                    )
                )

            rows = await self.installment_repo.list_by_order(order_id)
            today = self.clock.today(self.offset)

            schedule = build_schedule(
                order_id,
                [InstallmentSnapshot.model_validate(r) for r in rows],
                today,
            )
            return Return.ok(schedule)

        except Exception as e:
            logger.error(f"Failed to load schedule for order {order_id}: {e}")
            return Return.err(
                Error(
                    code="SCHEDULE_LOAD_FAILED",
                    message="Failed to load payment schedule",
                    reason=str(e),
                )
            )
