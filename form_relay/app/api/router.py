"""
Top‑level API router.

Mounted by ``create_app`` under ``/api``, so the relay endpoint is
served at ``POST /api/send``.
"""

from fastapi import APIRouter

from .endpoints import send

router = APIRouter()

router.include_router(send.router, tags=["relay"])
