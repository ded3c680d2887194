"""
FastAPI dependencies: shared state, outbound HTTP client, session key
"""
from typing import Optional, Dict, Any
import secrets
import httpx
from fastapi import Depends, Request, Response
from socialrelay.core.callbacks import CallbackDispatcher
from socialrelay.core.config import Settings
from socialrelay.core.store import ConnectionRegistry, PendingAuthorizationStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_pending_store(request: Request) -> PendingAuthorizationStore:
    return request.app.state.pending_store


def get_connection_registry(request: Request) -> ConnectionRegistry:
    return request.app.state.connections


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound client created in the app lifespan"""
    return request.app.state.http_client


def get_callback_dispatcher(
    pending: PendingAuthorizationStore = Depends(get_pending_store),
    connections: ConnectionRegistry = Depends(get_connection_registry),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> CallbackDispatcher:
    return CallbackDispatcher(pending, connections, client)


def get_session_key(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> Optional[str]:
    """
    Read the opaque session key from the session cookie.
    Returns None if the browser has no session yet.
    """
    return request.cookies.get(settings.SESSION_COOKIE_NAME) or None


def new_session_key() -> str:
    return secrets.token_urlsafe(32)


def set_session_cookie(response: Response, session_key: str, settings: Settings) -> None:
    # HTTP-only, so the key never reaches page scripts
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session_key,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
        path="/",
    )


def get_request_user(request: Request) -> Optional[Dict[str, Any]]:
    """Identity populated by upstream auth middleware on request.state, if any"""
    return getattr(request.state, "user", None)


def get_caption_generator(request: Request):
    return request.app.state.caption_generator
