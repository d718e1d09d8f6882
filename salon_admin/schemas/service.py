from pydantic import BaseModel, field_validator
from typing import Optional, List, Dict

DEFAULT_CATEGORY = "Other"

class Service(BaseModel):
    id: int
    name: str
    category: str = DEFAULT_CATEGORY
    price: Optional[float] = None
    duration: Optional[int] = None  # Duration in minutes

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, value):
        return value or DEFAULT_CATEGORY

    class Config:
        populate_by_name = True
        extra = "ignore"

class ServiceCatalogResponse(BaseModel):
    categories: Dict[str, List[Service]]
    total: int
