from pydantic import BaseModel, field_validator
from typing import Optional, List, Dict, Any

from salon_admin.schemas.service import Service

class AppointmentDraft(BaseModel):
    clientName: str = ""
    clientEmail: str = ""
    clientPhone: str = ""
    date: str = ""  # ISO format, e.g., "2025-09-05"
    startTime: str = ""  # e.g., "09:00"
    endTime: str = ""
    nailTechId: Optional[int] = None
    serviceIds: List[int] = []

    @field_validator("nailTechId", mode="before")
    @classmethod
    def blank_tech_is_none(cls, value):
        # The technician <select> posts "" until a choice is made
        if value == "" or value is None:
            return None
        return value

class AppointmentSubmit(AppointmentDraft):
    confirmed: bool = False

class ValidationResult(BaseModel):
    durationMinutes: Optional[int] = None
    requiresConfirmation: bool = False
    message: Optional[str] = None

class AppointmentServicesRequest(BaseModel):
    nailTechId: Optional[int] = None
    serviceIds: List[int] = []

    @field_validator("nailTechId", mode="before")
    @classmethod
    def blank_tech_is_none(cls, value):
        if value == "" or value is None:
            return None
        return value

class AppointmentServicesResponse(BaseModel):
    nailTechId: Optional[int] = None
    serviceIds: List[int]
    categories: Dict[str, List[Service]]
    noServicesAvailable: bool
    selectedServiceNames: str

class AppointmentSaveResponse(BaseModel):
    message: str
    appointment: Optional[Dict[str, Any]] = None
    validation: ValidationResult

class AppointmentFormResponse(BaseModel):
    draft: AppointmentDraft
    services: AppointmentServicesResponse
