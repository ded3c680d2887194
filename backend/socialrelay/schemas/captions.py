"""
Caption generation schemas
"""
from typing import List, Optional
from pydantic import BaseModel


class CaptionRequest(BaseModel):
    topic: Optional[str] = None


class CaptionResponse(BaseModel):
    captions: List[str]
    warning: Optional[str] = None
