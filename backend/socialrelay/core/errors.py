"""
Error kinds raised by the OAuth relay
"""
from typing import Optional


class ConfigurationError(Exception):
    """Required configuration is missing; the process must not start."""


class OAuthFlowError(Exception):
    """Base class for failures while completing an authorization."""


class PendingAttemptNotFound(OAuthFlowError):
    """Callback arrived with no matching (or an expired) pending attempt."""

    def __init__(self, user_key: Optional[str], provider: str):
        self.user_key = user_key
        self.provider = provider
        key = f"{user_key[:8]}..." if user_key else "<no session>"
        super().__init__(f"No pending {provider} authorization for session {key}")


class StateMismatch(OAuthFlowError):
    """Callback state does not match the state minted at login."""


class TokenExchangeFailed(OAuthFlowError):
    """
    The token endpoint call did not yield an access token.

    ``reason`` is one of ``network``, ``timeout``, ``status`` or ``malformed``.
    ``detail`` carries the upstream body or transport message for logging only.
    """

    def __init__(
        self,
        message: str,
        *,
        reason: str,
        detail: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.reason = reason
        self.detail = detail
        self.status_code = status_code


class TokenExchangeTimeout(TokenExchangeFailed):
    def __init__(self, message: str, *, detail: Optional[str] = None):
        super().__init__(message, reason="timeout", detail=detail)


class UpstreamAPIError(OAuthFlowError):
    """A downstream provider API (profile, posting) returned an error."""

    def __init__(self, message: str, *, detail: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.detail = detail
        self.status_code = status_code
