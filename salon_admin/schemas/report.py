from pydantic import BaseModel, field_validator
from typing import List, Optional


class DailySalesRow(BaseModel):
    nailTech: str = ""
    totalSales: float = 0

    @field_validator("nailTech", mode="before")
    @classmethod
    def name_or_blank(cls, value):
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("totalSales", mode="before")
    @classmethod
    def to_cents(cls, value):
        try:
            return round(float(value or 0), 2)
        except (TypeError, ValueError):
            return 0.0


class DailySalesReport(BaseModel):
    rows: List[DailySalesRow] = []
    grandTotal: float = 0
    message: Optional[str] = None
