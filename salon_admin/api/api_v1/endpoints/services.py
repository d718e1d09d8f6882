from fastapi import APIRouter, Depends
import logging

from salon_admin.core.auth import get_current_capabilities
from salon_admin.core.errors import NetworkFailure
from salon_admin.core.roles import Capabilities
from salon_admin.schemas.service import ServiceCatalogResponse
from salon_admin.services.catalog_service import get_services
from salon_admin.utils.eligibility import filter_and_group

logger = logging.getLogger(__name__)

router = APIRouter()

def hide_prices(services, capabilities: Capabilities):
    if capabilities.viewFinancial:
        return services
    return [s.model_copy(update={"price": None}) for s in services]

@router.get("/", response_model=ServiceCatalogResponse)
async def get_service_catalog(capabilities: Capabilities = Depends(get_current_capabilities)):
    """
    The whole service catalog grouped by category
    """
    try:
        services = await get_services()
    except NetworkFailure as e:
        logger.error(f"Error loading services: {e}")
        services = []

    services = hide_prices(services, capabilities)
    return ServiceCatalogResponse(
        categories=filter_and_group(services, None),
        total=len(services),
    )
