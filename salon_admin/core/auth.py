from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import logging
import uuid

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from salon_admin.core.config import settings
from salon_admin.core.errors import AdminOnly, InvalidCredentials, NetworkFailure
from salon_admin.core.roles import Capabilities, Role, capabilities_for, role_for
from salon_admin.db.backend import backend

logger = logging.getLogger(__name__)

# Viewers browse without a token, so a missing header is not an error here
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)

# Signed-out token ids mapped to their expiry (replace with Redis with a TTL in production)
revoked_tokens: Dict[str, int] = {}

def create_access_token(
    data: Dict[str, Any], expires_delta: Optional[timedelta] = None
) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    to_encode.setdefault("jti", uuid.uuid4().hex)

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(
        to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM
    )

    return encoded_jwt

def is_admin_email(email: str) -> bool:
    return email.lower().strip() == settings.ADMIN_EMAIL.lower().strip()

def role_for_email(email: str) -> Role:
    """Role granted to an account after a successful sign-in."""
    if is_admin_email(email):
        return Role.ADMIN
    if email.lower().strip() in settings.staff_emails():
        return Role.STAFF
    return Role.VIEWER

async def sign_in(email: str, password: str) -> Dict[str, Any]:
    """
    Email/password sign-in against the identity provider.

    Raises InvalidCredentials when the provider refuses the credentials and
    NetworkFailure when it cannot be reached.
    """
    client = backend.auth_client
    if client is None:
        raise NetworkFailure("Auth client is not connected")

    try:
        response = await client.post(
            settings.AUTH_SIGN_IN_URL,
            params={"key": settings.AUTH_API_KEY} if settings.AUTH_API_KEY else None,
            json={"email": email, "password": password, "returnSecureToken": True},
        )
    except httpx.HTTPError as e:
        logger.error(f"Auth provider unreachable: {e!r}")
        raise NetworkFailure(f"Could not reach the auth provider: {e}") from e

    if response.status_code in (400, 401, 403):
        raise InvalidCredentials("Incorrect login")
    if response.is_error:
        raise NetworkFailure(
            f"Auth provider returned {response.status_code}",
            status_code=response.status_code,
        )
    return response.json()

async def sign_out(session: Optional[Dict[str, Any]] = None) -> None:
    """Drop a provider session on the client side."""
    if session:
        session.clear()

async def admin_sign_in(email: str, password: str) -> Dict[str, Any]:
    """
    Sign in through the restricted admin login.

    Any account other than the configured admin is signed out again right
    away and refused with AdminOnly.
    """
    session = await sign_in(email, password)
    if not is_admin_email(email):
        logger.warning(f"Refused admin login for {email}")
        await sign_out(session)
        raise AdminOnly()
    return session

def decode_token(token: str) -> Dict[str, Any]:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
    except JWTError as jwt_error:
        logger.info(f"JWT decode error: {jwt_error}")
        raise credentials_exception
    if payload.get("sub") is None or payload.get("jti") in revoked_tokens:
        raise credentials_exception
    return payload

def revoke_token(token: str) -> None:
    """
    Refuse ``token`` from now on.

    Entries are kept only until the token would have expired anyway.
    """
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return

    now = int(datetime.now(timezone.utc).timestamp())
    for jti, expires in list(revoked_tokens.items()):
        if expires <= now:
            del revoked_tokens[jti]
    if payload.get("jti"):
        revoked_tokens[payload["jti"]] = int(payload.get("exp") or now)

async def get_current_session(token: Optional[str] = Depends(oauth2_scheme)) -> Dict[str, Any]:
    """Current console session; anonymous callers get the viewer role."""
    if not token:
        return {"sub": "", "role": Role.VIEWER.value}
    payload = decode_token(token)
    payload["role"] = role_for(payload.get("role")).value
    return payload

async def get_current_capabilities(
    session: Dict[str, Any] = Depends(get_current_session)
) -> Capabilities:
    return capabilities_for(session.get("role"))

def require_capability(name: str):
    """Dependency factory that rejects callers lacking ``name``."""
    async def checker(capabilities: Capabilities = Depends(get_current_capabilities)) -> Capabilities:
        if not getattr(capabilities, name):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied. Admins and Staff only."
            )
        return capabilities
    return checker
