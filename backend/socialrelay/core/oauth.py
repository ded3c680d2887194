"""
OAuth2 authorization-code utilities: authorization URL, token exchange, profile lookup
"""
from typing import Optional
from urllib.parse import urlencode
import httpx
import logging
from socialrelay.core.errors import TokenExchangeFailed, TokenExchangeTimeout, UpstreamAPIError
from socialrelay.core.pkce import CODE_CHALLENGE_METHOD
from socialrelay.core.providers import ProviderConfig

logger = logging.getLogger(__name__)


def build_authorization_url(
    config: ProviderConfig,
    state: str,
    code_challenge: Optional[str] = None,
) -> str:
    """Generate the provider authorization URL. Pure; persisting state/verifier is the caller's job."""
    if config.uses_pkce and not code_challenge:
        raise ValueError(f"{config.display_name} requires a PKCE code challenge")

    params = {
        "response_type": "code",
        "client_id": config.client_id,
        "redirect_uri": config.redirect_uri,
        "scope": config.scope,
        "state": state,
    }
    if config.uses_pkce:
        params["code_challenge"] = code_challenge
        params["code_challenge_method"] = CODE_CHALLENGE_METHOD
    return f"{config.authorization_endpoint}?{urlencode(params)}"


async def exchange_code_for_token(
    config: ProviderConfig,
    code: str,
    code_verifier: Optional[str] = None,
    *,
    client: httpx.AsyncClient,
) -> str:
    """
    Exchange an authorization code for an access token.

    Issues exactly one form-encoded POST to the provider token endpoint and
    returns the ``access_token`` field. Every failure raises TokenExchangeFailed
    (or TokenExchangeTimeout) with the upstream detail attached; nothing is retried.
    """
    if config.uses_pkce and not code_verifier:
        raise ValueError(f"{config.display_name} token exchange requires a code verifier")

    data = {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": config.redirect_uri,
        "client_id": config.client_id,
    }
    if config.requires_client_secret:
        data["client_secret"] = config.client_secret
    if config.uses_pkce:
        data["code_verifier"] = code_verifier

    headers = {
        "Content-Type": "application/x-www-form-urlencoded",
        "Accept": "application/json",
    }

    logger.debug(f"Exchanging {config.display_name} authorization code at {config.token_endpoint}")
    try:
        response = await client.post(config.token_endpoint, data=data, headers=headers)
    except httpx.TimeoutException as e:
        raise TokenExchangeTimeout(
            f"{config.display_name} token endpoint timed out",
            detail=str(e) or type(e).__name__,
        ) from e
    except httpx.HTTPError as e:
        raise TokenExchangeFailed(
            f"{config.display_name} token endpoint unreachable",
            reason="network",
            detail=str(e) or type(e).__name__,
        ) from e

    if not response.is_success:
        raise TokenExchangeFailed(
            f"{config.display_name} token exchange failed: {response.status_code}",
            reason="status",
            detail=response.text,
            status_code=response.status_code,
        )

    try:
        payload = response.json()
    except ValueError as e:
        raise TokenExchangeFailed(
            f"{config.display_name} token response is not JSON",
            reason="malformed",
            detail=response.text,
            status_code=response.status_code,
        ) from e

    access_token = payload.get("access_token") if isinstance(payload, dict) else None
    if not access_token:
        raise TokenExchangeFailed(
            f"{config.display_name} token response has no access_token",
            reason="malformed",
            detail=response.text,
            status_code=response.status_code,
        )
    return access_token


async def fetch_provider_user_id(
    config: ProviderConfig,
    access_token: str,
    *,
    client: httpx.AsyncClient,
) -> Optional[str]:
    """Look up the provider's user id for a token; None when the provider has no profile endpoint"""
    if not config.profile_endpoint:
        return None

    headers = {"Authorization": f"Bearer {access_token}"}
    try:
        response = await client.get(config.profile_endpoint, headers=headers)
    except httpx.HTTPError as e:
        raise UpstreamAPIError(
            f"{config.display_name} profile request failed",
            detail=str(e) or type(e).__name__,
        ) from e

    if not response.is_success:
        raise UpstreamAPIError(
            f"{config.display_name} profile request failed: {response.status_code}",
            detail=response.text,
            status_code=response.status_code,
        )

    try:
        user_id = response.json().get("id")
    except (ValueError, AttributeError) as e:
        raise UpstreamAPIError(
            f"{config.display_name} profile response is malformed",
            detail=response.text,
            status_code=response.status_code,
        ) from e
    if not user_id:
        raise UpstreamAPIError(
            f"{config.display_name} profile response has no id",
            detail=response.text,
            status_code=response.status_code,
        )
    return str(user_id)
