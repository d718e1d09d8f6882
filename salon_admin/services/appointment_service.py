from typing import Dict, Any, List

from salon_admin.core.config import settings
from salon_admin.db.backend import request

def _path(suffix: str = "") -> str:
    return settings.APPOINTMENTS_PATH.rstrip("/") + suffix

async def get_all_appointments() -> List[Dict[str, Any]]:
    """
    Get all appointments
    """
    data = await request("GET", _path())
    return [a for a in (data or []) if isinstance(a, dict)]

async def get_appointment_by_id(appointment_id: int) -> Dict[str, Any]:
    """
    Get an appointment by ID
    """
    return await request("GET", _path(f"/{appointment_id}"))

async def create_appointment(payload: Dict[str, Any]) -> Any:
    """
    Create an appointment from a serialized form payload
    """
    return await request("POST", _path(), json=payload)

async def update_appointment(appointment_id: int, payload: Dict[str, Any]) -> Any:
    """
    Update an appointment from a serialized form payload
    """
    return await request("PUT", _path(f"/{appointment_id}"), json=payload)

async def delete_appointment(appointment_id: int) -> None:
    """
    Delete an appointment
    """
    await request("DELETE", _path(f"/{appointment_id}"))
