"""GenerateLedgerStatement Use Case

Renders an order ledger as a PDF statement of account.
"""

import base64
from datetime import timedelta
from typing import Sequence
from libs.ph_calendar import PH_OFFSET
from libs.result import Result, Return, Error
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.services.clock import Clock
from src.app.services.pdf_service import PdfService
from .dtos import LedgerStatementDTO
from .get_order_ledger import GetOrderLedger
from .ledger_builder import DEFAULT_CREDITED_STATUSES
from .transaction_export import sanitize_label


class GenerateLedgerStatement:
    """
    Use Case: Generate a ledger statement PDF

    Business Rules:
    1. Order must exist
    2. The statement shows exactly the rows of the ledger view
    3. Returns the PDF as a base64-encoded string

    Flow:
    1. Compute the ledger (GetOrderLedger)
    2. Render it with the PDF service
    3. Return response with the PDF as base64
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        payment_repo: PaymentRepository,
        pdf_service: PdfService,
        clock: Clock,
        credited_statuses: Sequence[str] = DEFAULT_CREDITED_STATUSES,
        company_name: str = "Hardware Distribution Co.",
        company_address: str = "Metro Manila, Philippines",
        offset: timedelta = PH_OFFSET,
    ):
        self.get_ledger = GetOrderLedger(order_repo, payment_repo, credited_statuses)
        self.pdf_service = pdf_service
        self.clock = clock
        self.company_name = company_name
        self.company_address = company_address
        self.offset = offset

    async def execute(self, order_id: str) -> Result[LedgerStatementDTO]:
        """
        Execute statement generation

        Args:
            order_id: Order to generate the statement for

        Returns:
            Result[LedgerStatementDTO]: Success with PDF or error
        """
        ledger_result = await self.get_ledger.execute(order_id)
        if ledger_result.is_err():
            return ledger_result
        ledger = ledger_result.value

        try:
            pdf_bytes = self.pdf_service.generate_ledger_statement(
                ledger,
                company_name=self.company_name,
                company_address=self.company_address,
            )
        except Exception as e:
            return Return.err(
                Error(
                    code="STATEMENT_GENERATION_FAILED",
                    message="Failed to generate ledger statement",
                    reason=str(e),
                )
            )

        pdf_base64 = base64.b64encode(pdf_bytes).decode("utf-8")
        label = sanitize_label(ledger.invoice_code or order_id.split("-")[0])
        today = self.clock.today(self.offset)

        return Return.ok(
            LedgerStatementDTO(
                order_id=order_id,
                filename=f"Ledger_{label}_{today.isoformat()}.pdf",
                pdf_base64=pdf_base64,
                generated_at=self.clock.now(),
            )
        )
