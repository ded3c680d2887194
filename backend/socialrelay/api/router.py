"""
Route wiring
"""
from fastapi import APIRouter
from socialrelay.api import auth, captions, posts, status

auth_router = APIRouter()
auth_router.include_router(auth.router, tags=["authentication"])

api_router = APIRouter()
api_router.include_router(status.router, tags=["status"])
api_router.include_router(posts.router, tags=["posts"])
api_router.include_router(captions.router, tags=["captions"])
