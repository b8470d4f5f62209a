"""
Top‑level router for version 1 of the API.

When new endpoints are added, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import memos

router = APIRouter()

router.include_router(memos.router, prefix="/memos", tags=["memos"])
