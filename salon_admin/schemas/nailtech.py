from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Union
from enum import Enum

from salon_admin.schemas.service import Service

class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

WEEKDAYS: List[str] = [day.value for day in Weekday]

class NailTechDraft(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    availableDays: List[str] = []
    serviceIds: List[int] = []

class NailTechPayload(BaseModel):
    """Body sent to the backend on create/update, carrying both service encodings."""
    name: str
    email: str
    phone: str
    availabilityJson: str
    serviceIds: List[int]
    services: List[Dict[str, int]]

class NailTechResponse(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    availableDays: List[str] = []
    serviceIds: List[int] = []

class NailTechDetail(NailTechResponse):
    offeredByCategory: Dict[str, List[Service]] = {}
    notOffered: List[Service] = []

class NailTechFormAction(str, Enum):
    TOGGLE_SERVICE = "toggleService"
    TOGGLE_CATEGORY = "toggleCategory"
    TOGGLE_DAY = "toggleDay"

class NailTechFormActionRequest(BaseModel):
    draft: NailTechDraft = Field(default_factory=NailTechDraft)
    action: NailTechFormAction
    value: Union[int, str]

class NailTechFormResponse(BaseModel):
    draft: NailTechDraft
    categories: Dict[str, List[Service]]
    fullySelectedCategories: List[str] = []
