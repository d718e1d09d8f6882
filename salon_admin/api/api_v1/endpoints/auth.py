from fastapi import APIRouter, HTTPException, status, Depends
from typing import Any, Dict, Optional

from salon_admin.core.auth import (
    admin_sign_in, create_access_token, get_current_session, oauth2_scheme,
    revoke_token, role_for_email, sign_in
)
from salon_admin.core.errors import AdminOnly, InvalidCredentials, NetworkFailure
from salon_admin.core.roles import Role, capabilities_for
from salon_admin.schemas.token import LoginRequest, SessionInfo, Token

router = APIRouter()

def _issue_token(email: str, role: Role) -> Token:
    access_token = create_access_token(data={"sub": email.lower().strip(), "role": role.value})
    return Token(access_token=access_token, role=role)

@router.post("/admin-login", response_model=Token)
async def admin_login(credentials: LoginRequest) -> Any:
    """Sign in to the administrative surface. Only the admin account is accepted."""
    try:
        await admin_sign_in(credentials.email, credentials.password)
    except InvalidCredentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect login"
        )
    except AdminOnly as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e)
        )
    except NetworkFailure as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e)
        )
    return _issue_token(credentials.email, Role.ADMIN)

@router.post("/login", response_model=Token)
async def login(credentials: LoginRequest) -> Any:
    """Sign in to the dashboard; the role depends on the account."""
    try:
        await sign_in(credentials.email, credentials.password)
    except InvalidCredentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect login"
        )
    except NetworkFailure as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e)
        )
    return _issue_token(credentials.email, role_for_email(credentials.email))

@router.post("/logout")
async def logout(token: Optional[str] = Depends(oauth2_scheme)) -> Dict[str, str]:
    """Sign out of the console"""
    if token:
        revoke_token(token)
    return {"message": "Signed out"}

@router.get("/me", response_model=SessionInfo)
async def read_session(session: Dict[str, Any] = Depends(get_current_session)):
    """Current role and what it may do"""
    return SessionInfo(
        role=Role(session["role"]),
        email=session.get("sub") or "",
        capabilities=capabilities_for(session["role"]),
    )
