"""
Top‑level router for version 1 of the API.

Add new resource routers here as the API grows.
"""

from fastapi import APIRouter

from .endpoints import quotes

router = APIRouter()

router.include_router(quotes.router, prefix="/quotes", tags=["quotes"])
