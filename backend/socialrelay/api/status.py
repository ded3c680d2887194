"""
Status routes - connection status, current user, health
"""
from typing import Optional, Dict, Any
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from socialrelay.core.dependencies import get_connection_registry, get_request_user, get_session_key
from socialrelay.core.providers import Provider
from socialrelay.core.store import ConnectionRegistry
from socialrelay.schemas.status import ConnectionStatusResponse

router = APIRouter()


@router.get("/status/{provider}", response_model=ConnectionStatusResponse)
async def connection_status(
    provider: Provider,
    session_key: Optional[str] = Depends(get_session_key),
    connections: ConnectionRegistry = Depends(get_connection_registry),
):
    """Whether this session holds a token for the provider"""
    return ConnectionStatusResponse(connected=connections.is_connected(session_key, provider))


@router.get("/me")
async def get_current_user_info(user: Optional[Dict[str, Any]] = Depends(get_request_user)):
    if not user:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "Not authenticated"},
        )
    return {"user": user}


@router.get("/health")
async def health_check():
    return {"status": "ok", "mode": "github-ai"}
