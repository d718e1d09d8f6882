from pydantic import BaseModel, EmailStr

from salon_admin.core.roles import Capabilities, Role


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: Role


class SessionInfo(BaseModel):
    role: Role
    email: str = ""
    capabilities: Capabilities
