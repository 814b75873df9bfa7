"""ExportTransactions Use Case

Exports completed orders created within a PH-calendar range to an .xlsx
workbook.
"""

import logging
from datetime import timedelta
from libs.ph_calendar import PH_OFFSET
from libs.result import Result, Return, Error
from src.app.repositories.order_repository import OrderRepository
from src.app.services.clock import Clock
from src.app.services.spreadsheet_service import SpreadsheetService
from .dtos import ExportCommandDTO, TransactionExportDTO
from .snapshots import OrderSnapshot
from .transaction_export import build_transaction_export, resolve_export_range

logger = logging.getLogger(__name__)

SHEET_TITLE = "Transaction History"


class ExportTransactions:
    """
    Use Case: Export transaction history

    Business Rules:
    1. Only completed orders are exported
    2. Range bounds are local (UTC+8) calendar boundaries, inclusive
    3. An invalid custom range blocks the export (no partial file)
    4. An empty result still produces a workbook with the header row

    Flow:
    1. Resolve the range from the choice and the clock
    2. Query completed orders in the range, newest first
    3. Format rows
    4. Render the workbook
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        spreadsheet_service: SpreadsheetService,
        clock: Clock,
        offset: timedelta = PH_OFFSET,
    ):
        self.order_repo = order_repo
        self.spreadsheet_service = spreadsheet_service
        self.clock = clock
        self.offset = offset

    async def execute(self, command: ExportCommandDTO) -> Result[TransactionExportDTO]:
        """
        Execute the export

        Args:
            command: ExportCommandDTO with choice and optional custom dates

        Returns:
            Result[TransactionExportDTO]: Filename, rows and workbook bytes
        """
        now = self.clock.now()

        # Step 1: Resolve range
        range_result = resolve_export_range(
            command.choice,
            now,
            custom_start=command.custom_start,
            custom_end=command.custom_end,
            offset=self.offset,
        )
        if range_result.is_err():
            return range_result
        export_range = range_result.value

        try:
            # Step 2: Query
            rows = await self.order_repo.list_completed_with_customer(
                start=export_range.start, end=export_range.end
            )
            orders = [OrderSnapshot.from_entities(order, customer) for order, customer in rows]

            # Step 3: Format
            export = build_transaction_export(
                orders,
                export_range,
                today=self.clock.today(self.offset),
                offset=self.offset,
            )

            # Step 4: Render
            content = self.spreadsheet_service.render_workbook(
                SHEET_TITLE,
                export.headers,
                [
                    [r.transaction_code, r.customer, r.status, r.total_amount, r.created]
                    for r in export.rows
                ],
            )
            export = export.model_copy(update={"content": content})

            logger.info(
                f"Exported {export.row_count} transactions for range {export_range.label}"
            )
            return Return.ok(export)

        except Exception as e:
            logger.error(f"Transaction export failed for range {export_range.label}: {e}")
            return Return.err(
                Error(
                    code="EXPORT_FAILED",
                    message="Failed to export transactions",
                    reason=str(e),
                )
            )
