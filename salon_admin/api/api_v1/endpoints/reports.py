from fastapi import APIRouter, Depends

from salon_admin.core.auth import require_capability
from salon_admin.core.roles import Capabilities
from salon_admin.schemas.report import DailySalesReport
from salon_admin.services.report_service import get_daily_sales

router = APIRouter()

@router.get("/daily-sales", response_model=DailySalesReport)
async def daily_sales_report(capabilities: Capabilities = Depends(require_capability("viewReport"))):
    """
    Sales per nail technician for today's appointments (admins and staff only)
    """
    return await get_daily_sales()
