from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Role(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"
    VIEWER = "viewer"


class Capabilities(BaseModel):
    edit: bool = False
    viewFinancial: bool = False
    viewReport: bool = False


_CAPABILITIES = {
    Role.ADMIN.value: Capabilities(edit=True, viewFinancial=True, viewReport=True),
    Role.STAFF.value: Capabilities(edit=True, viewFinancial=False, viewReport=True),
}


def capabilities_for(role: Optional[str]) -> Capabilities:
    """Map a role string to what it may do. Unknown or missing roles are viewers."""
    if isinstance(role, Role):
        role = role.value
    return _CAPABILITIES.get(role, Capabilities()).model_copy()


def role_for(role: Optional[str]) -> Role:
    try:
        return Role(role)
    except ValueError:
        return Role.VIEWER
