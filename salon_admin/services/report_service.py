from typing import List
import logging

from salon_admin.core.errors import NetworkFailure
from salon_admin.db.backend import request
from salon_admin.schemas.report import DailySalesReport, DailySalesRow

logger = logging.getLogger(__name__)

NO_APPOINTMENTS_MESSAGE = "No appointments for today."

async def get_daily_sales() -> DailySalesReport:
    """
    Today's sales per technician, totalled by the backend.

    A failed fetch is logged and reported as an empty day.
    """
    try:
        data = await request("GET", "/api/reports/daily-sales") or []
    except NetworkFailure as e:
        logger.error(f"Error loading sales report: {e}")
        data = []

    rows: List[DailySalesRow] = []
    for item in data:
        try:
            rows.append(DailySalesRow.model_validate(item))
        except ValueError as e:
            logger.debug(f"Skipping malformed sales row {item!r}: {e}")
    return DailySalesReport(
        rows=rows,
        grandTotal=round(sum(r.totalSales for r in rows), 2),
        message=None if rows else NO_APPOINTMENTS_MESSAGE,
    )
