from fastapi import APIRouter, Depends, HTTPException, status
from typing import Any, Dict, List, Optional
import logging

from salon_admin.core.auth import get_current_capabilities, require_capability
from salon_admin.core.errors import MissingRequiredField, NetworkFailure
from salon_admin.core.roles import Capabilities
from salon_admin.schemas.nailtech import (
    NailTechDetail, NailTechDraft, NailTechFormAction, NailTechFormActionRequest,
    NailTechFormResponse, NailTechResponse
)
from salon_admin.schemas.service import Service
from salon_admin.services.catalog_service import get_services
from salon_admin.services.nailtech_form import NailTechForm, order_days, parse_availability
from salon_admin.services.nailtech_service import (
    create_nailtech, delete_nailtech, get_all_nailtechs, get_nailtech_by_id, update_nailtech
)
from salon_admin.api.api_v1.endpoints.services import hide_prices
from salon_admin.utils.eligibility import normalize_eligibility, service_separation

logger = logging.getLogger(__name__)

router = APIRouter()

def to_response(tech: Dict[str, Any], capabilities: Capabilities) -> Optional[NailTechResponse]:
    """Public view of a raw technician record; contact details need edit rights."""
    try:
        tech_id = int(tech.get("id"))
    except (TypeError, ValueError):
        logger.debug(f"Skipping technician without a usable id: {tech!r}")
        return None
    return NailTechResponse(
        id=tech_id,
        name=tech.get("name") or "",
        email=(tech.get("email") or "") if capabilities.edit else None,
        phone=(tech.get("phone") or "") if capabilities.edit else None,
        availableDays=order_days(parse_availability(tech.get("availabilityJson"))),
        serviceIds=sorted(normalize_eligibility(tech)),
    )

async def load_catalog() -> List[Service]:
    try:
        return await get_services()
    except NetworkFailure as e:
        logger.error(f"Error loading services: {e}")
        return []

def form_response(form: NailTechForm) -> NailTechFormResponse:
    draft = form.draft.model_copy(update={"availableDays": form.display_days()})
    return NailTechFormResponse(
        draft=draft,
        categories=form.categories(),
        fullySelectedCategories=form.fully_selected_categories(),
    )

@router.get("/", response_model=List[NailTechResponse])
async def list_nailtechs(capabilities: Capabilities = Depends(get_current_capabilities)):
    """
    The technician roster. An unreachable backend yields an empty roster.
    """
    try:
        techs = await get_all_nailtechs()
    except NetworkFailure as e:
        logger.error(f"Error loading nail techs: {e}")
        return []

    responses = [to_response(tech, capabilities) for tech in techs]
    return [r for r in responses if r is not None]

@router.post("/form/actions", response_model=NailTechFormResponse)
async def apply_form_action(
    request: NailTechFormActionRequest,
    capabilities: Capabilities = Depends(require_capability("edit"))
):
    """
    Apply one toggle (service, category or day) to a technician draft
    """
    form = NailTechForm(hide_prices(await load_catalog(), capabilities), request.draft)
    try:
        if request.action == NailTechFormAction.TOGGLE_SERVICE:
            form.toggle_service(int(request.value))
        elif request.action == NailTechFormAction.TOGGLE_CATEGORY:
            form.toggle_category(str(request.value))
        else:
            form.toggle_day(str(request.value))
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e)
        )
    return form_response(form)

@router.get("/{tech_id}", response_model=NailTechDetail)
async def get_nailtech(
    tech_id: int,
    capabilities: Capabilities = Depends(get_current_capabilities)
):
    """
    A technician with the services they offer, by category, and those they don't
    """
    try:
        tech = await get_nailtech_by_id(tech_id)
    except NetworkFailure as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Error loading nail tech: {e}"
        )
    if not tech:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Nail tech not found"
        )

    catalog = hide_prices(await load_catalog(), capabilities)
    offered_by_category, not_offered = service_separation(tech, catalog)
    summary = to_response(tech, capabilities)
    return NailTechDetail(
        **summary.model_dump(),
        offeredByCategory=offered_by_category,
        notOffered=not_offered,
    )

@router.get("/{tech_id}/form", response_model=NailTechFormResponse)
async def get_nailtech_form(
    tech_id: int,
    capabilities: Capabilities = Depends(require_capability("edit"))
):
    """
    Edit form for an existing technician
    """
    try:
        tech = await get_nailtech_by_id(tech_id)
    except NetworkFailure as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Error loading nail tech: {e}"
        )
    if not tech:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Nail tech not found"
        )
    catalog = hide_prices(await load_catalog(), capabilities)
    return form_response(NailTechForm.from_record(tech, catalog))

async def _save(draft: NailTechDraft, tech_id: Optional[int] = None) -> Dict[str, Any]:
    try:
        payload = NailTechForm([], draft).serialize()
    except MissingRequiredField:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Name is required"
        )

    try:
        if tech_id is None:
            saved = await create_nailtech(payload)
        else:
            saved = await update_nailtech(tech_id, payload)
    except NetworkFailure as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Error saving nail technician: {e}"
        )
    return {"message": "Saved", "nailTech": saved}

@router.post("/", response_model=Dict[str, Any])
async def create_nailtech_profile(
    draft: NailTechDraft,
    capabilities: Capabilities = Depends(require_capability("edit"))
):
    """
    Add a technician
    """
    return await _save(draft)

@router.put("/{tech_id}", response_model=Dict[str, Any])
async def update_nailtech_profile(
    tech_id: int,
    draft: NailTechDraft,
    capabilities: Capabilities = Depends(require_capability("edit"))
):
    """
    Update a technician
    """
    return await _save(draft, tech_id)

@router.delete("/{tech_id}", response_model=Dict[str, Any])
async def remove_nailtech(
    tech_id: int,
    capabilities: Capabilities = Depends(require_capability("edit"))
):
    """
    Delete a technician
    """
    try:
        await delete_nailtech(tech_id)
    except NetworkFailure as e:
        logger.error(f"Error deleting nail tech {tech_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Couldn't delete, check backend constraints."
        )
    return {"message": "Nail tech deleted successfully"}
