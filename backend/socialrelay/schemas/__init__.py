"""
Pydantic schemas for request/response validation
"""
from socialrelay.schemas.status import ConnectionStatusResponse
from socialrelay.schemas.captions import CaptionRequest, CaptionResponse
from socialrelay.schemas.posts import PostRequest, PostResponse

__all__ = [
    "ConnectionStatusResponse",
    "CaptionRequest", "CaptionResponse",
    "PostRequest", "PostResponse",
]
