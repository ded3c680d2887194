"""
Pending authorization attempt model
"""
from typing import Optional
from datetime import datetime, timezone
from dataclasses import dataclass, field
from socialrelay.core.providers import Provider


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class AuthorizationAttempt:
    """One in-flight login attempt for one provider"""

    user_key: str
    provider: Provider
    code_verifier: Optional[str] = None  # Only for PKCE providers
    state: Optional[str] = None
    created_at: datetime = field(default_factory=_utcnow)

    def is_expired(self, ttl_seconds: int, now: Optional[datetime] = None) -> bool:
        now = now or _utcnow()
        return (now - self.created_at).total_seconds() > ttl_seconds

    def __repr__(self):
        state = f"{self.state[:8]}..." if self.state else None
        return f"<AuthorizationAttempt {self.provider.value} state={state}>"
