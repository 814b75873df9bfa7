"""Transaction History API Routes

FastAPI route for the .xlsx transaction-history export.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.services.clock import Clock
from src.app.use_cases.accounts import ExportTransactions
from src.app.use_cases.accounts.dtos import ExportCommandDTO
from src.adapter.repositories import SqlAlchemyOrderRepository
from src.adapter.services.spreadsheet_service import OpenpyxlSpreadsheetService
from src.depends import calendar_offset, get_clock, get_session
from src.api.error import ClientError

router = APIRouter(prefix="/transactions", tags=["Transactions"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get(
    "/export",
    responses={
        200: {
            "content": {XLSX_MEDIA_TYPE: {}},
            "description": "Transaction history workbook"
        },
        400: {
            "description": "Invalid range",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "EXPORT_RANGE_INVALID",
                            "message": "Please provide a valid date range."
                        }
                    }
                }
            }
        }
    }
)
async def export_transactions(
    range: str = Query("today", description="today, this_week, this_month, this_year, custom or all"),
    start: Optional[str] = Query(None, description="YYYY-MM-DD (custom range only)"),
    end: Optional[str] = Query(None, description="YYYY-MM-DD (custom range only)"),
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """
    Download completed orders created within a Philippine-calendar range.

    **Query parameters:**
    - `range`: today | this_week | this_month | this_year | custom | all
    - `start`, `end`: required when `range=custom`, inclusive calendar dates

    **Returns:**
    - 200: .xlsx workbook (header row only when nothing matches)
    - 400: Unknown range or invalid custom dates
    """
    use_case = ExportTransactions(
        SqlAlchemyOrderRepository(session),
        OpenpyxlSpreadsheetService(),
        clock,
        offset=calendar_offset,
    )
    result = await use_case.execute(
        ExportCommandDTO(choice=range, custom_start=start, custom_end=end)
    )

    if result.is_err():
        raise ClientError(result.error)

    export = result.value
    return Response(
        content=export.content,
        media_type=XLSX_MEDIA_TYPE,
        headers={
            "Content-Disposition": f"attachment; filename={export.filename}",
            "X-Row-Count": str(export.row_count),
        }
    )
