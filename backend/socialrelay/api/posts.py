"""
Provider post routes
"""
from typing import Optional
import logging
import httpx
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse
from socialrelay.core.config import Settings
from socialrelay.core.dependencies import (
    get_connection_registry,
    get_http_client,
    get_session_key,
    get_settings,
)
from socialrelay.core.errors import UpstreamAPIError
from socialrelay.core.providers import Provider, get_provider_config
from socialrelay.core.store import ConnectionRegistry
from socialrelay.schemas.posts import PostRequest, PostResponse
from socialrelay.services.linkedin import create_text_post

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/post", response_model=PostResponse)
async def post_to_linkedin(
    body: PostRequest,
    settings: Settings = Depends(get_settings),
    session_key: Optional[str] = Depends(get_session_key),
    connections: ConnectionRegistry = Depends(get_connection_registry),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Publish a text post on LinkedIn.
    Uses the token from the body if given, otherwise the session's LinkedIn connection.
    """
    access_token = body.access_token
    if not access_token:
        connection = connections.get(session_key, Provider.LINKEDIN)
        access_token = connection.access_token if connection else None
    if not access_token:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "Not connected to LinkedIn"},
        )

    config = get_provider_config(Provider.LINKEDIN, settings)
    try:
        await create_text_post(config, access_token, body.message, client=client)
    except UpstreamAPIError as e:
        logger.error(f"Post error: {e} - {e.detail}")
        return PlainTextResponse(
            "Failed to post to LinkedIn",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return PostResponse(success=True)
