"""
In-memory stores for pending authorization attempts and provider connections.

Both stores are keyed by the per-session user key and live for the lifetime of
the process. Mutations happen under a lock so each key is updated atomically.
"""
from typing import Dict, Optional, Tuple
import hmac
import logging
import threading
from socialrelay.core.errors import PendingAttemptNotFound, StateMismatch
from socialrelay.core.providers import Provider
from socialrelay.models.connection import ConnectionRecord
from socialrelay.models.oauth_state import AuthorizationAttempt

logger = logging.getLogger(__name__)

_Key = Tuple[str, Provider]


class PendingAuthorizationStore:
    """
    Short-lived mapping from (user key, provider) to the attempt awaiting a callback.

    ``put`` overwrites any unconsumed attempt for the same key. ``take`` removes
    the attempt, so a verifier or state value can complete at most one exchange.
    """

    def __init__(self, ttl_seconds: int = 600):
        self.ttl_seconds = ttl_seconds
        self._attempts: Dict[_Key, AuthorizationAttempt] = {}
        self._lock = threading.Lock()

    def put(self, user_key: str, provider: Provider, attempt: AuthorizationAttempt) -> None:
        with self._lock:
            self._purge_expired()
            if (user_key, provider) in self._attempts:
                logger.info(f"Replacing unconsumed {provider.value} attempt for session {user_key[:8]}...")
            self._attempts[(user_key, provider)] = attempt

    def peek(self, user_key: str, provider: Provider) -> Optional[AuthorizationAttempt]:
        with self._lock:
            attempt = self._attempts.get((user_key, provider))
            if attempt is None or attempt.is_expired(self.ttl_seconds):
                return None
            return attempt

    def take(
        self,
        user_key: Optional[str],
        provider: Provider,
        state: Optional[str] = None,
    ) -> AuthorizationAttempt:
        """
        Remove and return the pending attempt, or raise PendingAttemptNotFound.

        When the attempt carries a state, ``state`` must match it; on a mismatch
        StateMismatch is raised and the attempt stays in place.
        """
        if not user_key:
            raise PendingAttemptNotFound(user_key, provider.value)

        with self._lock:
            attempt = self._attempts.get((user_key, provider))
            if attempt is None:
                raise PendingAttemptNotFound(user_key, provider.value)
            if attempt.is_expired(self.ttl_seconds):
                del self._attempts[(user_key, provider)]
                logger.warning(f"Expired {provider.value} attempt for session {user_key[:8]}...")
                raise PendingAttemptNotFound(user_key, provider.value)
            if attempt.state is not None and not hmac.compare_digest(attempt.state, state or ""):
                raise StateMismatch(f"{provider.value} callback state does not match the login attempt")
            del self._attempts[(user_key, provider)]
        return attempt

    def _purge_expired(self) -> None:
        expired = [key for key, attempt in self._attempts.items() if attempt.is_expired(self.ttl_seconds)]
        for key in expired:
            del self._attempts[key]
        if expired:
            logger.debug(f"Cleaned up {len(expired)} expired authorization attempts")

    def __len__(self) -> int:
        with self._lock:
            return len(self._attempts)


class ConnectionRegistry:
    """Per-session provider connections, queried by the status endpoints"""

    def __init__(self):
        self._connections: Dict[str, Dict[Provider, ConnectionRecord]] = {}
        self._lock = threading.Lock()

    def record(
        self,
        user_key: str,
        provider: Provider,
        access_token: str,
        provider_user_id: Optional[str] = None,
    ) -> ConnectionRecord:
        """Set the connection for one provider, leaving the session's other providers untouched"""
        connection = ConnectionRecord(
            user_key=user_key,
            provider=provider,
            access_token=access_token,
            provider_user_id=provider_user_id,
        )
        with self._lock:
            self._connections[user_key] = {
                **self._connections.get(user_key, {}),
                provider: connection,
            }
        return connection

    def get(self, user_key: Optional[str], provider: Provider) -> Optional[ConnectionRecord]:
        if not user_key:
            return None
        with self._lock:
            return self._connections.get(user_key, {}).get(provider)

    def is_connected(self, user_key: Optional[str], provider: Provider) -> bool:
        connection = self.get(user_key, provider)
        return connection is not None and connection.is_connected
