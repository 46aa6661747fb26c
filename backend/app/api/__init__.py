from __future__ import annotations

from fastapi import APIRouter

from .uploads import router as uploads_router

api_router = APIRouter()
api_router.include_router(uploads_router)
