"""
OAuth routes - login redirect and provider callback
"""
from typing import Optional
import logging
from fastapi import APIRouter, Depends, status, Query
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from socialrelay.core.callbacks import CallbackDispatcher, start_authorization
from socialrelay.core.config import Settings
from socialrelay.core.dependencies import (
    get_callback_dispatcher,
    get_pending_store,
    get_session_key,
    get_settings,
    new_session_key,
    set_session_cookie,
)
from socialrelay.core.errors import (
    OAuthFlowError,
    PendingAttemptNotFound,
    StateMismatch,
    TokenExchangeFailed,
    UpstreamAPIError,
)
from socialrelay.core.providers import Provider, get_provider_config
from socialrelay.core.store import PendingAuthorizationStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/{provider}")
@router.get("/{provider}/login")
async def login(
    provider: Provider,
    settings: Settings = Depends(get_settings),
    pending: PendingAuthorizationStore = Depends(get_pending_store),
    session_key: Optional[str] = Depends(get_session_key),
):
    """Start the authorization flow and redirect the browser to the provider"""
    if not settings.is_provider_configured(provider.value):
        error_message = f"{provider.value} OAuth is not configured"
        logger.error(error_message)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": error_message},
        )

    is_new_session = session_key is None
    if is_new_session:
        session_key = new_session_key()

    config = get_provider_config(provider, settings)
    auth_url = start_authorization(config, session_key, pending)
    logger.info(f"Redirecting session {session_key[:8]}... to {config.display_name} authorization")

    response = RedirectResponse(url=auth_url, status_code=status.HTTP_302_FOUND)
    if is_new_session:
        set_session_cookie(response, session_key, settings)
    return response


@router.get("/{provider}/callback")
async def oauth_callback(
    provider: Provider,
    code: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    error: Optional[str] = Query(None),
    error_description: Optional[str] = Query(None),
    settings: Settings = Depends(get_settings),
    session_key: Optional[str] = Depends(get_session_key),
    dispatcher: CallbackDispatcher = Depends(get_callback_dispatcher),
):
    """Provider redirect target: exchange the code and record the connection"""
    if error:
        logger.warning(f"{provider.value} returned OAuth error: {error} ({error_description or ''})")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": f"OAuth error: {error}"},
        )
    if not code:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Missing code parameter"},
        )

    config = get_provider_config(provider, settings)
    failure = PlainTextResponse(
        f"{config.display_name} OAuth failed",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    try:
        result = await dispatcher.complete(config, session_key, code, state)
    except TokenExchangeFailed as e:
        logger.error(f"{config.display_name} token exchange failed ({e.reason}): {e} - {e.detail}")
        return failure
    except UpstreamAPIError as e:
        logger.error(f"{config.display_name} callback error: {e} - {e.detail}")
        return failure
    except (PendingAttemptNotFound, StateMismatch) as e:
        logger.warning(f"{config.display_name} callback rejected: {e}")
        return failure
    except OAuthFlowError as e:
        logger.error(f"{config.display_name} callback failed: {e}")
        return failure

    return RedirectResponse(url=result.redirect_url, status_code=status.HTTP_302_FOUND)
