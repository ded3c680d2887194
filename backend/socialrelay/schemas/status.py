"""
Connection status schemas
"""
from pydantic import BaseModel


class ConnectionStatusResponse(BaseModel):
    # Deliberately boolean only; tokens never appear on the status surface
    connected: bool
