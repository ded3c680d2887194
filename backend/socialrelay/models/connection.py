"""
Provider connection model
"""
from typing import Optional
from datetime import datetime, timezone
from dataclasses import dataclass, field
from socialrelay.core.providers import Provider


@dataclass
class ConnectionRecord:
    """An access token obtained from a provider for one session"""

    user_key: str
    provider: Provider
    access_token: str
    provider_user_id: Optional[str] = None
    obtained_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_connected(self) -> bool:
        return bool(self.access_token)

    def __repr__(self):
        # Never include the token
        return f"<ConnectionRecord {self.provider.value} user_id={self.provider_user_id}>"
