"""
Provider post schemas
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class PostRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: Optional[str] = Field(None, alias="accessToken")
    message: str


class PostResponse(BaseModel):
    success: bool = True
