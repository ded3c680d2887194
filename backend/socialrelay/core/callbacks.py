"""
Authorization start and callback dispatch, shared by every provider
"""
from typing import Optional
from dataclasses import dataclass
from urllib.parse import urlencode, urlparse, urlunparse, parse_qsl
import logging
import secrets
import httpx
from socialrelay.core.oauth import (
    build_authorization_url,
    exchange_code_for_token,
    fetch_provider_user_id,
)
from socialrelay.core.pkce import generate_pkce
from socialrelay.core.providers import ProviderConfig
from socialrelay.core.store import ConnectionRegistry, PendingAuthorizationStore
from socialrelay.models.connection import ConnectionRecord
from socialrelay.models.oauth_state import AuthorizationAttempt

logger = logging.getLogger(__name__)


def start_authorization(
    config: ProviderConfig,
    user_key: str,
    pending: PendingAuthorizationStore,
) -> str:
    """
    Record a new authorization attempt for the session and return the provider redirect URL.
    Any unconsumed attempt for the same session and provider is replaced.
    """
    state = secrets.token_urlsafe(32)
    code_verifier = None
    code_challenge = None
    if config.uses_pkce:
        pkce = generate_pkce()
        code_verifier = pkce.code_verifier
        code_challenge = pkce.code_challenge

    pending.put(
        user_key,
        config.provider,
        AuthorizationAttempt(
            user_key=user_key,
            provider=config.provider,
            code_verifier=code_verifier,
            state=state,
        ),
    )
    logger.debug(f"Stored {config.provider.value} attempt with state {state[:8]}...")
    return build_authorization_url(config, state, code_challenge)


def _append_query(url: str, params: dict) -> str:
    parsed = urlparse(url)
    query = parse_qsl(parsed.query, keep_blank_values=True)
    query.extend((key, value) for key, value in params.items() if value is not None)
    return urlunparse(parsed._replace(query=urlencode(query)))


@dataclass
class CallbackResult:
    connection: ConnectionRecord
    redirect_url: str


class CallbackDispatcher:
    """
    Completes an authorization when the provider redirects back with a code.

    The pending attempt is consumed before any network call, so a callback
    without a matching attempt never reaches the provider.
    """

    def __init__(
        self,
        pending: PendingAuthorizationStore,
        connections: ConnectionRegistry,
        client: httpx.AsyncClient,
    ):
        self.pending = pending
        self.connections = connections
        self.client = client

    async def complete(
        self,
        config: ProviderConfig,
        user_key: Optional[str],
        code: str,
        state: Optional[str] = None,
    ) -> CallbackResult:
        provider = config.provider
        # A state mismatch leaves the attempt in place
        attempt = self.pending.take(user_key, provider, state)

        access_token = await exchange_code_for_token(
            config,
            code,
            attempt.code_verifier,
            client=self.client,
        )
        provider_user_id = await fetch_provider_user_id(config, access_token, client=self.client)

        connection = self.connections.record(
            user_key,
            provider,
            access_token,
            provider_user_id=provider_user_id,
        )
        logger.info(f"{config.display_name} connected for session {user_key[:8]}...")

        redirect_params = {"id": provider_user_id}
        if config.token_in_redirect:
            redirect_params = {"token": access_token, **redirect_params}
        return CallbackResult(
            connection=connection,
            redirect_url=_append_query(config.success_url, redirect_params),
        )
