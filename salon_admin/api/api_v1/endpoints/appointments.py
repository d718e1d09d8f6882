from fastapi import APIRouter, Depends, HTTPException, status
from typing import Any, Dict, List, Optional, Tuple
import logging

from salon_admin.api.api_v1.endpoints.services import hide_prices
from salon_admin.core.auth import get_current_capabilities, require_capability
from salon_admin.core.errors import MissingRequiredField, NetworkFailure, NoServiceSelected
from salon_admin.core.roles import Capabilities
from salon_admin.schemas.appointment import (
    AppointmentDraft, AppointmentFormResponse, AppointmentSaveResponse, AppointmentServicesRequest,
    AppointmentServicesResponse, AppointmentSubmit
)
from salon_admin.schemas.service import Service
from salon_admin.services.appointment_form import AppointmentForm, FormPhase
from salon_admin.services.appointment_service import (
    create_appointment, delete_appointment, get_all_appointments,
    get_appointment_by_id, update_appointment
)
from salon_admin.services.catalog_service import get_services
from salon_admin.services.nailtech_service import get_all_nailtechs

logger = logging.getLogger(__name__)

router = APIRouter()

CONTACT_FIELDS = ("clientEmail", "clientPhone")

def hide_contact(appointment: Dict[str, Any], capabilities: Capabilities) -> Dict[str, Any]:
    if capabilities.edit:
        return appointment
    visible = {k: v for k, v in appointment.items() if k not in CONTACT_FIELDS}
    if isinstance(visible.get("client"), dict):
        visible["client"] = {
            k: v for k, v in visible["client"].items() if k not in ("email", "phone")
        }
    return visible

async def load_form_lists(degrade: bool = True) -> Tuple[List[Service], List[Dict[str, Any]]]:
    """
    Catalog and roster for a form session.

    Reads degrade to empty lists; pass degrade=False when the caller is about
    to write and must not act on a partial picture.
    """
    try:
        return await get_services(), await get_all_nailtechs()
    except NetworkFailure as e:
        if not degrade:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Error loading form data: {e}"
            )
        logger.error(f"Error loading form data: {e}")
        return [], []

def services_response(form: AppointmentForm) -> AppointmentServicesResponse:
    categories = form.available_services()
    return AppointmentServicesResponse(
        nailTechId=form.draft.nailTechId,
        serviceIds=form.draft.serviceIds,
        categories=categories,
        noServicesAvailable=not categories,
        selectedServiceNames=form.selected_service_names(),
    )

@router.get("/", response_model=List[Dict[str, Any]])
async def list_appointments(capabilities: Capabilities = Depends(get_current_capabilities)):
    """
    All appointments. An unreachable backend yields an empty list.
    """
    try:
        appointments = await get_all_appointments()
    except NetworkFailure as e:
        logger.error(f"Error loading appointments: {e}")
        return []
    return [hide_contact(a, capabilities) for a in appointments]

@router.get("/form/new", response_model=AppointmentDraft)
async def new_appointment_form(capabilities: Capabilities = Depends(require_capability("edit"))):
    """
    Empty appointment draft dated today
    """
    return AppointmentForm.new([], []).draft

@router.post("/form/services", response_model=AppointmentServicesResponse)
async def appointment_form_services(
    request: AppointmentServicesRequest,
    capabilities: Capabilities = Depends(require_capability("edit"))
):
    """
    Services selectable for the chosen technician, grouped by category.

    The current selection comes back pruned to what the technician offers.
    """
    catalog, nail_techs = await load_form_lists()
    catalog = hide_prices(catalog, capabilities)
    form = AppointmentForm(catalog, nail_techs, AppointmentDraft(serviceIds=request.serviceIds))
    form.select_technician(request.nailTechId)
    return services_response(form)

@router.get("/{appointment_id}/form", response_model=AppointmentFormResponse)
async def edit_appointment_form(
    appointment_id: int,
    capabilities: Capabilities = Depends(require_capability("edit"))
):
    """
    Edit form for an existing appointment
    """
    try:
        record = await get_appointment_by_id(appointment_id)
    except NetworkFailure as e:
        if e.status_code == status.HTTP_404_NOT_FOUND:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Appointment not found"
            )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Error loading appointment: {e}"
        )
    if not isinstance(record, dict):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Appointment not found"
        )

    catalog, nail_techs = await load_form_lists()
    catalog = hide_prices(catalog, capabilities)
    form = AppointmentForm.from_record(record, catalog, nail_techs)
    return AppointmentFormResponse(draft=form.draft, services=services_response(form))

async def _save(submission: AppointmentSubmit, appointment_id: Optional[int] = None) -> AppointmentSaveResponse:
    catalog, nail_techs = await load_form_lists(degrade=False)
    draft = AppointmentDraft(**submission.model_dump(exclude={"confirmed"}))
    form = AppointmentForm(catalog, nail_techs, draft)
    form.select_technician(draft.nailTechId)

    async def save(payload: Dict[str, Any]) -> Any:
        if appointment_id is None:
            return await create_appointment(payload)
        return await update_appointment(appointment_id, payload)

    try:
        saved = await form.submit(save, confirm=lambda message: submission.confirmed)
    except MissingRequiredField as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": "Please fill all required fields.", "fields": e.fields}
        )
    except NoServiceSelected as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": str(e), "fields": ["serviceIds"]}
        )
    except NetworkFailure as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Error saving appointment: {e}"
        )

    validation = form.validate()
    if form.phase != FormPhase.SUBMITTED:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"requiresConfirmation": True, "message": validation.message}
        )
    return AppointmentSaveResponse(
        message="Appointment saved",
        appointment=saved if isinstance(saved, dict) else None,
        validation=validation,
    )

@router.post("/", response_model=AppointmentSaveResponse)
async def create_appointment_endpoint(
    submission: AppointmentSubmit,
    capabilities: Capabilities = Depends(require_capability("edit"))
):
    """
    Validate and create an appointment.

    A short appointment with many services answers 409 until it is sent
    again with ``confirmed`` set.
    """
    return await _save(submission)

@router.put("/{appointment_id}", response_model=AppointmentSaveResponse)
async def update_appointment_endpoint(
    appointment_id: int,
    submission: AppointmentSubmit,
    capabilities: Capabilities = Depends(require_capability("edit"))
):
    """
    Validate and update an appointment
    """
    return await _save(submission, appointment_id)

@router.delete("/{appointment_id}", response_model=Dict[str, Any])
async def remove_appointment(
    appointment_id: int,
    capabilities: Capabilities = Depends(require_capability("edit"))
):
    """
    Delete an appointment
    """
    try:
        await delete_appointment(appointment_id)
    except NetworkFailure as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Error deleting appointment: {e}"
        )
    return {"message": "Appointment deleted successfully"}
