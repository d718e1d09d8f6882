from typing import List
import logging

from salon_admin.db.backend import request
from salon_admin.schemas.service import Service

logger = logging.getLogger(__name__)

async def get_services() -> List[Service]:
    """
    Fetch the service catalog. Raises NetworkFailure.
    """
    data = await request("GET", "/api/services") or []
    services = []
    for item in data:
        try:
            services.append(Service.model_validate(item))
        except ValueError as e:
            logger.debug(f"Skipping malformed service {item!r}: {e}")
    return services
