from typing import Any, Optional

import httpx
import logging

from salon_admin.core.config import settings
from salon_admin.core.errors import NetworkFailure

logger = logging.getLogger(__name__)

class Backend:
    client: Optional[httpx.AsyncClient] = None
    auth_client: Optional[httpx.AsyncClient] = None

backend = Backend()

async def connect_to_backend():
    """Open the HTTP clients for the salon backend and the auth provider."""
    logger.info(f"Connecting to salon backend at {settings.BACKEND_URL}...")
    backend.client = httpx.AsyncClient(
        base_url=settings.BACKEND_URL,
        timeout=settings.BACKEND_TIMEOUT,
    )
    backend.auth_client = httpx.AsyncClient(timeout=settings.BACKEND_TIMEOUT)
    logger.info("Backend clients ready.")

async def close_backend_connection():
    """Close the HTTP clients."""
    for client in (backend.client, backend.auth_client):
        if client is not None:
            await client.aclose()
    backend.client = None
    backend.auth_client = None
    logger.info("Backend clients closed.")

def describe_error(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("detail") or body)
    return str(body)

async def request(method: str, path: str, **kwargs) -> Any:
    """
    Call the salon backend and return the decoded JSON body (None if empty).

    Any transport error or non-2xx response is raised as NetworkFailure.
    """
    if backend.client is None:
        raise NetworkFailure("Backend client is not connected")

    try:
        response = await backend.client.request(method, path, **kwargs)
    except httpx.HTTPError as e:
        logger.error(f"{method} {path} failed: {e!r}")
        raise NetworkFailure(f"Could not reach the salon backend: {e}") from e

    if response.is_error:
        detail = describe_error(response)
        logger.error(f"{method} {path} returned {response.status_code}: {detail}")
        raise NetworkFailure(detail, status_code=response.status_code)

    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise NetworkFailure(f"Backend returned invalid JSON for {method} {path}") from e
