"""Customer API Routes"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.accounts import ListOutstandingOrders
from src.app.use_cases.accounts.dtos import ListOutstandingOrdersResponseDTO
from src.adapter.repositories import SqlAlchemyOrderRepository, SqlAlchemyPaymentRepository
from src.depends import credited_statuses, get_session
from src.api.error import ClientError

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get(
    "/{customer_id}/outstanding",
    response_model=ListOutstandingOrdersResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_outstanding_orders(
    customer_id: str,
    session: AsyncSession = Depends(get_session)
):
    """
    Completed orders of a customer that still carry a balance, largest first.

    **Returns:**
    - 200: Outstanding orders and their total balance (empty list if none)
    """
    use_case = ListOutstandingOrders(
        SqlAlchemyOrderRepository(session),
        SqlAlchemyPaymentRepository(session),
        credited_statuses=credited_statuses,
    )
    result = await use_case.execute(customer_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
