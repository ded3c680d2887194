"""
In-memory data models
"""
from socialrelay.models.oauth_state import AuthorizationAttempt
from socialrelay.models.connection import ConnectionRecord

__all__ = [
    "AuthorizationAttempt",
    "ConnectionRecord",
]
