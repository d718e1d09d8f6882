from typing import Dict, Any, List, Optional

from salon_admin.db.backend import request

async def get_all_nailtechs() -> List[Dict[str, Any]]:
    """
    Get every nail technician as the raw backend records
    """
    data = await request("GET", "/api/nailtechs")
    return [tech for tech in (data or []) if isinstance(tech, dict)]

async def get_nailtech_by_id(tech_id: int) -> Optional[Dict[str, Any]]:
    """
    Find a technician in the roster. The backend has no single-record endpoint.
    """
    for tech in await get_all_nailtechs():
        if str(tech.get("id")) == str(tech_id):
            return tech
    return None

async def create_nailtech(payload: Dict[str, Any]) -> Any:
    """
    Create a technician from a serialized form payload
    """
    return await request("POST", "/api/nailtechs", json=payload)

async def update_nailtech(tech_id: int, payload: Dict[str, Any]) -> Any:
    """
    Update a technician from a serialized form payload
    """
    return await request("PUT", f"/api/nailtechs/{tech_id}", json=payload)

async def delete_nailtech(tech_id: int) -> None:
    """
    Delete a technician
    """
    await request("DELETE", f"/api/nailtechs/{tech_id}")
